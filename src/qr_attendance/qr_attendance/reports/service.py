from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, Optional
from zoneinfo import ZoneInfo

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import to_org_time
from ..core.constants import DEFAULT_RANKING_LIMIT
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..users.model import User
from ..users.repository import UserRepository


def attendance_percentage(attended_days: int, total_days: int) -> int:
    if total_days <= 0:
        return 0
    return round(attended_days / total_days * 100)


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: dict


class ReportService:
    """Admin reports over registered attendance."""

    def __init__(self, attendance: AttendanceRepository, users: UserRepository, *, tz: ZoneInfo):
        self._attendance = attendance
        self._users = users
        self._tz = tz

    def _user_lookup(self) -> Callable[[int], Optional[User]]:
        by_id = {u.user_id: u for u in self._users.list_all()}
        return by_id.get

    def _rows(self, records: Iterable[AttendanceRecord]) -> list[dict]:
        lookup = self._user_lookup()
        out: list[dict] = []
        for r in records:
            user = lookup(r.user_id)
            local = to_org_time(r.timestamp, self._tz)
            out.append(
                {
                    "record_id": r.record_id,
                    "user_id": r.user_id,
                    "full_name": user.full_name if user else "-",
                    "username": user.username if user else "-",
                    "date": r.date.isoformat(),
                    "time": local.strftime("%H:%M:%S"),
                    "timestamp": r.timestamp.isoformat(),
                    "qr_code": r.qr_code,
                }
            )
        return out

    def daily_report(self, work_date: date) -> ReportData:
        rows = self._rows(self._attendance.list_for_date(work_date))
        return ReportData(rows=rows, summary={"date": work_date.isoformat(), "total": len(rows)})

    def user_report(self, user_id: int, start: date, end: date) -> ReportData:
        if start > end:
            raise ValidationError("Start date must be on or before end date")

        rows = self._rows(self._attendance.list_for_user(user_id, start, end))
        total_days = (end - start).days + 1
        return ReportData(
            rows=rows,
            summary={
                "user_id": int(user_id),
                "start": start.isoformat(),
                "end": end.isoformat(),
                "attended_days": len(rows),
                "total_days": total_days,
                "percentage": attendance_percentage(len(rows), total_days),
            },
        )

    def attendance_stats(self, work_date: date) -> dict:
        report = self.daily_report(work_date)
        employees = [u for u in self._users.list_all() if u.role == Role.USER and u.is_active]
        return {
            "date": work_date.isoformat(),
            "total": len(report.rows),
            "employees": len(employees),
            "percentage": attendance_percentage(len(report.rows), len(employees)),
            "rows": report.rows,
        }

    def ranking(self, start: date, end: date, *, limit: int = DEFAULT_RANKING_LIMIT) -> list[dict]:
        if start > end:
            raise ValidationError("Start date must be on or before end date")

        counts: dict[int, int] = {}
        for r in self._attendance.list_between(start, end):
            counts[r.user_id] = counts.get(r.user_id, 0) + 1

        total_days = (end - start).days + 1
        ranking = []
        for user in self._users.list_all():
            if user.role != Role.USER or not user.is_active:
                continue
            attended = counts.get(user.user_id, 0)
            ranking.append(
                {
                    "user_id": user.user_id,
                    "full_name": user.full_name,
                    "attended_days": attended,
                    "percentage": attendance_percentage(attended, total_days),
                }
            )

        ranking.sort(key=lambda x: (-x["attended_days"], x["full_name"]))
        for position, item in enumerate(ranking, start=1):
            item["position"] = position
        return ranking[: max(1, int(limit))]
