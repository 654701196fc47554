"""QR Attendance package.

Organized by feature modules (qr, attendance, geofence, users, reports, ...)
with a thin Flask controller layer over service/repository layers.
"""
