from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from src.qr_attendance.qr_attendance.attendance.model import AttendanceRecord
from src.qr_attendance.qr_attendance.core.enums import Role
from src.qr_attendance.qr_attendance.core.exceptions import ValidationError
from src.qr_attendance.qr_attendance.reports.service import ReportService, attendance_percentage
from src.qr_attendance.qr_attendance.storage.memory import (
    InMemoryAttendanceRepository,
    InMemoryUserRepository,
    MemoryStore,
)

TZ = ZoneInfo("America/Guayaquil")


def _setup():
    store = MemoryStore()
    users = InMemoryUserRepository(store)
    attendance = InMemoryAttendanceRepository(store)
    ids = {}
    for name, username, role in [
        ("Admin", "admin", Role.ADMIN),
        ("Bea", "bea", Role.USER),
        ("Ana", "ana", Role.USER),
        ("Carl", "carl", Role.USER),
    ]:
        ids[username] = users.create_user(full_name=name, username=username, password_hash="h", role=role)
    return ReportService(attendance, users, tz=TZ), attendance, ids


def _add(attendance, user_id, day, hour, minute=0):
    ts = datetime(day.year, day.month, day.day, hour, minute, tzinfo=timezone.utc)
    attendance.create_if_absent(AttendanceRecord(user_id=user_id, date=day, timestamp=ts, qr_code="c"))


def test_attendance_percentage():
    assert attendance_percentage(0, 0) == 0
    assert attendance_percentage(1, 3) == 33
    assert attendance_percentage(2, 3) == 67
    assert attendance_percentage(5, 5) == 100


def test_daily_report_is_ordered_by_time_with_names_and_local_time():
    svc, attendance, ids = _setup()
    _add(attendance, ids["bea"], date(2024, 3, 1), 13, 30)
    _add(attendance, ids["ana"], date(2024, 3, 1), 12, 15)

    report = svc.daily_report(date(2024, 3, 1))

    assert [r["full_name"] for r in report.rows] == ["Ana", "Bea"]
    assert report.rows[0]["time"] == "07:15:00"
    assert report.summary == {"date": "2024-03-01", "total": 2}


def test_user_report_range_and_percentage():
    svc, attendance, ids = _setup()
    _add(attendance, ids["ana"], date(2024, 3, 1), 13)
    _add(attendance, ids["ana"], date(2024, 3, 3), 13)
    _add(attendance, ids["ana"], date(2024, 3, 9), 13)

    report = svc.user_report(ids["ana"], date(2024, 3, 1), date(2024, 3, 4))

    assert [r["date"] for r in report.rows] == ["2024-03-03", "2024-03-01"]
    assert report.summary["total_days"] == 4
    assert report.summary["percentage"] == 50

    with pytest.raises(ValidationError):
        svc.user_report(ids["ana"], date(2024, 3, 4), date(2024, 3, 1))


def test_attendance_stats_counts_employees_only():
    svc, attendance, ids = _setup()
    _add(attendance, ids["ana"], date(2024, 3, 1), 13)

    stats = svc.attendance_stats(date(2024, 3, 1))

    assert stats["total"] == 1
    assert stats["employees"] == 3
    assert stats["percentage"] == 33


def test_ranking_orders_by_days_then_name():
    svc, attendance, ids = _setup()
    for day in (1, 2):
        _add(attendance, ids["bea"], date(2024, 3, day), 13)
        _add(attendance, ids["ana"], date(2024, 3, day), 13)
    _add(attendance, ids["carl"], date(2024, 3, 1), 13)

    ranking = svc.ranking(date(2024, 3, 1), date(2024, 3, 4))

    assert [(r["full_name"], r["attended_days"], r["percentage"]) for r in ranking] == [
        ("Ana", 2, 50),
        ("Bea", 2, 50),
        ("Carl", 1, 25),
    ]
    assert [r["position"] for r in ranking] == [1, 2, 3]
    assert len(svc.ranking(date(2024, 3, 1), date(2024, 3, 4), limit=2)) == 2
