from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .attendance.eligibility import EligibilityEngine
from .attendance.factory import LocationStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import utc_now
from .database.connection import DatabaseConnection, DBConfig
from .qr.mysql_qr_repository import MySQLQrCodeRepository
from .qr.repository import QrCodeRepository
from .qr.service import QrLifecycleService
from .reports.service import ReportService
from .settings import AppSettings
from .storage.memory import (
    InMemoryAttendanceRepository,
    InMemoryQrCodeRepository,
    InMemorySystemConfigRepository,
    InMemoryUserRepository,
    MemoryStore,
)
from .system_config.mysql_system_config_repository import MySQLSystemConfigRepository
from .system_config.repository import SystemConfigRepository
from .system_config.service import SystemConfigService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, EmployeeProfileService, UserService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Repositories:
    users: UserRepository
    qr_codes: QrCodeRepository
    attendance: AttendanceRepository
    system_config: SystemConfigRepository


def _mysql_repositories(settings: AppSettings) -> Repositories:
    conn = DatabaseConnection(DBConfig.from_dict(settings.db_config))
    return Repositories(
        users=MySQLUserRepository(conn),
        qr_codes=MySQLQrCodeRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        system_config=MySQLSystemConfigRepository(conn),
    )


def _memory_repositories(settings: AppSettings) -> Repositories:
    store = MemoryStore()
    return Repositories(
        users=InMemoryUserRepository(store),
        qr_codes=InMemoryQrCodeRepository(store),
        attendance=InMemoryAttendanceRepository(store),
        system_config=InMemorySystemConfigRepository(store),
    )


REPOSITORY_BUILDERS: dict[str, Callable[[AppSettings], Repositories]] = {
    "mysql": _mysql_repositories,
    "memory": _memory_repositories,
}


@dataclass(frozen=True)
class Container:
    settings: AppSettings
    repos: Repositories

    auth_service: AuthService
    user_service: UserService
    profile_service: EmployeeProfileService
    system_config_service: SystemConfigService
    qr_service: QrLifecycleService
    engine: EligibilityEngine
    attendance_service: AttendanceService
    report_service: ReportService


def build_container(
    settings: AppSettings,
    *,
    clock: Callable[[], datetime] = utc_now,
    repos: Optional[Repositories] = None,
) -> Container:
    if repos is None:
        repos = REPOSITORY_BUILDERS[settings.storage_backend](settings)
    logger.info("Storage back end: %s", settings.storage_backend)

    auth_service = AuthService(repos.users)
    user_service = UserService(repos.users)
    profile_service = EmployeeProfileService(repos.users, default_employee_type=settings.default_employee_type)
    system_config_service = SystemConfigService(repos.system_config, default_geofence=settings.default_geofence)
    qr_service = QrLifecycleService(repos.qr_codes, secret=settings.qr_secret, tz=settings.tz, clock=clock)
    engine = EligibilityEngine(
        repos.attendance,
        repos.qr_codes,
        system_config_service.get_geofence,
        secret=settings.qr_secret,
        tz=settings.tz,
        window=settings.window,
        strategy_factory=LocationStrategyFactory(),
        clock=clock,
    )
    attendance_service = AttendanceService(
        engine,
        repos.attendance,
        profile_service,
        tz=settings.tz,
        window=settings.window,
        gps_options=settings.gps,
        clock=clock,
    )
    report_service = ReportService(repos.attendance, repos.users, tz=settings.tz)

    return Container(
        settings=settings,
        repos=repos,
        auth_service=auth_service,
        user_service=user_service,
        profile_service=profile_service,
        system_config_service=system_config_service,
        qr_service=qr_service,
        engine=engine,
        attendance_service=attendance_service,
        report_service=report_service,
    )
