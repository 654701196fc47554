"""In-process storage back end.

Used by the test settings and for local runs without MySQL. All repositories
share one `MemoryStore` whose lock makes every operation atomic, including
the check-and-insert of `create_if_absent`.
"""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..core.enums import EmployeeType, Role
from ..core.exceptions import DuplicateRecordError
from ..geofence.model import GeofenceConfig
from ..qr.model import DailyQrCode
from ..users.model import User


class MemoryStore:
    def __init__(self):
        self.lock = threading.RLock()
        self.qr_codes: dict[date, DailyQrCode] = {}
        self.attendance: dict[tuple[int, date], AttendanceRecord] = {}
        self.users: dict[int, User] = {}
        self.geofence: Optional[GeofenceConfig] = None
        self._next_user_id = 0

    def next_user_id(self) -> int:
        with self.lock:
            self._next_user_id += 1
            return self._next_user_id


class InMemoryQrCodeRepository:
    def __init__(self, store: MemoryStore):
        self._store = store

    def get(self, qr_date: date) -> Optional[DailyQrCode]:
        with self._store.lock:
            return self._store.qr_codes.get(qr_date)

    def save(self, qr: DailyQrCode) -> None:
        with self._store.lock:
            self._store.qr_codes[qr.date] = qr

    def list_recent(self, limit: int) -> Sequence[DailyQrCode]:
        with self._store.lock:
            items = sorted(self._store.qr_codes.values(), key=lambda q: q.issued_at, reverse=True)
        return items[:limit]


class InMemoryAttendanceRepository:
    def __init__(self, store: MemoryStore):
        self._store = store

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with self._store.lock:
            return self._store.attendance.get((int(user_id), work_date))

    def create_if_absent(self, record: AttendanceRecord) -> None:
        key = (int(record.user_id), record.date)
        with self._store.lock:
            if key in self._store.attendance:
                raise DuplicateRecordError(f"Attendance {record.record_id} already exists")
            self._store.attendance[key] = record

    def list_for_user(self, user_id: int, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with self._store.lock:
            items = [
                r
                for (uid, d), r in self._store.attendance.items()
                if uid == int(user_id) and start_date <= d <= end_date
            ]
        items.sort(key=lambda r: r.date, reverse=True)
        return items

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with self._store.lock:
            items = [r for (_, d), r in self._store.attendance.items() if d == work_date]
        items.sort(key=lambda r: r.timestamp)
        return items

    def list_between(self, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with self._store.lock:
            items = [r for (_, d), r in self._store.attendance.items() if start_date <= d <= end_date]
        items.sort(key=lambda r: (r.date, r.timestamp))
        return items


class InMemoryUserRepository:
    def __init__(self, store: MemoryStore):
        self._store = store

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self._store.lock:
            return self._store.users.get(int(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        with self._store.lock:
            for user in self._store.users.values():
                if user.username == username:
                    return user
        return None

    def list_all(self) -> Sequence[User]:
        with self._store.lock:
            items = list(self._store.users.values())
        items.sort(key=lambda u: u.full_name)
        return items

    def create_user(
        self,
        *,
        full_name: str,
        username: str,
        password_hash: str,
        role: Role,
        employee_type: Optional[EmployeeType] = None,
    ) -> int:
        with self._store.lock:
            if self.get_by_username(username):
                raise DuplicateRecordError(f"Username {username!r} already exists")
            user_id = self._store.next_user_id()
            self._store.users[user_id] = User(
                user_id=user_id,
                full_name=full_name,
                username=username,
                password_hash=password_hash,
                role=role,
                employee_type=employee_type,
            )
            return user_id

    def set_employee_type(self, user_id: int, employee_type: EmployeeType) -> bool:
        with self._store.lock:
            user = self._store.users.get(int(user_id))
            if not user:
                return False
            self._store.users[user.user_id] = replace(user, employee_type=employee_type)
            return True


class InMemorySystemConfigRepository:
    def __init__(self, store: MemoryStore):
        self._store = store

    def get_geofence(self) -> Optional[GeofenceConfig]:
        with self._store.lock:
            return self._store.geofence

    def save_geofence(self, config: GeofenceConfig) -> None:
        with self._store.lock:
            self._store.geofence = config
