from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import utc_now
from ..core.constants import SYSTEM_CONFIG_ID
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, to_db_utc
from ..geofence.model import GeofenceConfig
from .repository import SystemConfigRepository


class MySQLSystemConfigRepository(SystemConfigRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_geofence(self) -> Optional[GeofenceConfig]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT geofence_lat, geofence_lng, geofence_radius_m
                FROM system_config
                WHERE config_id=%s
                """,
                (SYSTEM_CONFIG_ID,),
            )
            r = fetchone(cur)
            if not r or r.get("geofence_lat") is None:
                return None
            return GeofenceConfig(
                latitude=float(r["geofence_lat"]),
                longitude=float(r["geofence_lng"]),
                radius_meters=float(r["geofence_radius_m"]),
            )

    def save_geofence(self, config: GeofenceConfig) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO system_config(config_id, geofence_lat, geofence_lng, geofence_radius_m, updated_at)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    geofence_lat=VALUES(geofence_lat),
                    geofence_lng=VALUES(geofence_lng),
                    geofence_radius_m=VALUES(geofence_radius_m),
                    updated_at=VALUES(updated_at)
                """,
                (SYSTEM_CONFIG_ID, config.latitude, config.longitude, config.radius_meters, to_db_utc(utc_now())),
            )
