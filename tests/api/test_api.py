from __future__ import annotations

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

import config.testing
from src.qr_attendance.qr_attendance.container import build_container
from src.qr_attendance.qr_attendance.database.bootstrap import ensure_demo_users
from src.qr_attendance.qr_attendance.main import create_app
from src.qr_attendance.qr_attendance.settings import load_settings

TZ = ZoneInfo("America/Guayaquil")


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 3, 1, 8, 0, tzinfo=TZ))


@pytest.fixture
def container(clock):
    container = build_container(load_settings(config.testing), clock=clock)
    ensure_demo_users(container.repos.users)
    return container


@pytest.fixture
def client(container):
    app = create_app(container=container)
    return app.test_client()


def login(client, username, password):
    return client.post("/api/auth/login", json={"username": username, "password": password})


def generate_code(client):
    login(client, "admin", "admin123")
    code = client.post("/api/qr/generate").get_json()["code"]
    client.post("/api/auth/logout")
    return code


def test_login_and_me(client):
    assert login(client, "ana", "wrong").status_code == 401

    res = login(client, "ana", "user1234")
    assert res.status_code == 200
    assert res.get_json()["user"]["role"] == "user"

    me = client.get("/api/auth/me").get_json()
    assert me["employee_type"] == "onsite"


def test_endpoints_require_login(client):
    assert client.get("/api/attendance/can-register").status_code == 401
    assert client.post("/api/attendance/scan", json={"code": "x"}).status_code == 401


def test_admin_endpoints_reject_users(client):
    login(client, "rafael", "user1234")

    assert client.post("/api/qr/generate").status_code == 403
    assert client.get("/api/admin/reports/daily").status_code == 403


def test_qr_generation_is_idempotent(client):
    login(client, "admin", "admin123")

    first = client.post("/api/qr/generate").get_json()
    second = client.post("/api/qr/generate").get_json()
    regen = client.post("/api/qr/regenerate").get_json()

    assert first["is_new"] is True
    assert second["is_new"] is False
    assert regen["is_new"] is True
    assert first["code"] == second["code"] == regen["code"]
    assert client.get("/api/qr/today").get_json()["date"] == "2024-03-01"
    assert len(client.get("/api/qr/history").get_json()) == 1


def test_qr_png(client):
    login(client, "admin", "admin123")
    assert client.get("/api/qr/today.png").status_code == 404

    client.post("/api/qr/generate")
    res = client.get("/api/qr/today.png")

    assert res.status_code == 200
    assert res.mimetype == "image/png"
    assert res.data.startswith(b"\x89PNG")


def test_remote_scan_then_duplicate(client):
    code = generate_code(client)
    login(client, "rafael", "user1234")

    ok = client.post("/api/attendance/scan", json={"code": code})
    dup = client.post("/api/attendance/scan", json={"code": code})

    assert ok.status_code == 200
    assert ok.get_json()["success"] is True
    assert dup.status_code == 409
    assert dup.get_json()["kind"] == "DUPLICATE"
    assert client.get("/api/attendance/can-register").get_json()["can_register"] is False
    assert client.get("/api/attendance/monthly?year=2024&month=3").get_json()["dates"] == ["2024-03-01"]


def test_onsite_scan_needs_position(client):
    code = generate_code(client)
    login(client, "ana", "user1234")

    denied = client.post("/api/attendance/scan", json={"code": code, "position": {"error": 1}})
    far = client.post("/api/attendance/scan", json={"code": code, "position": {"lat": -0.19, "lng": -78.4678}})
    near = client.post("/api/attendance/scan", json={"code": code, "position": {"lat": -0.1807, "lng": -78.4678}})

    assert denied.status_code == 400
    assert denied.get_json()["locationError"] == "PERMISSION_DENIED"
    assert far.get_json()["kind"] == "OUT_OF_RANGE"
    assert far.get_json()["distance"] > 1000
    assert near.status_code == 200


def test_scan_outside_window(client, clock):
    code = generate_code(client)
    login(client, "rafael", "user1234")
    clock.now = clock.now.replace(hour=6, minute=59)

    res = client.post("/api/attendance/scan", json={"code": code})

    assert res.status_code == 400
    assert res.get_json()["kind"] == "TIME_WINDOW"
    assert res.get_json()["reason"] == "BEFORE"


def test_scan_without_code_of_the_day(client):
    login(client, "rafael", "user1234")

    res = client.post("/api/attendance/scan", json={"code": "abcdefabcdef"})

    assert res.get_json()["kind"] == "NO_QR"


@pytest.mark.parametrize("query", ["year=0&month=3", "year=10000&month=1", "year=2024&month=13"])
def test_monthly_with_out_of_range_period_is_bad_request(client, query):
    login(client, "rafael", "user1234")

    res = client.get(f"/api/attendance/monthly?{query}")

    assert res.status_code == 400


def test_window_and_client_config(client):
    login(client, "ana", "user1234")

    window = client.get("/api/attendance/window").get_json()
    cfg = client.get("/api/attendance/client-config").get_json()

    assert window["is_open"] is True
    assert cfg["requires_location"] is True
    assert cfg["gps"] == {"enableHighAccuracy": True, "timeout": 10000, "maximumAge": 30000}
    assert cfg["geofence"]["radiusMeters"] == 100.0


def test_admin_changes_employee_type_and_geofence(client, container):
    rafael = container.repos.users.get_by_username("rafael")
    login(client, "admin", "admin123")

    bad = client.put(f"/api/admin/users/{rafael.user_id}/employee-type", json={"employee_type": "hybrid"})
    ok = client.put(f"/api/admin/users/{rafael.user_id}/employee-type", json={"employee_type": "onsite"})
    fence = client.put("/api/admin/config/geofence", json={"lat": -2.17, "lng": -79.92, "radiusMeters": 300})

    assert bad.status_code == 400
    assert ok.get_json()["employee_type"] == "onsite"
    assert fence.status_code == 200
    assert client.get("/api/admin/config/geofence").get_json() == {"lat": -2.17, "lng": -79.92, "radiusMeters": 300.0}


def test_reports_and_ranking(client, clock):
    code = generate_code(client)
    login(client, "rafael", "user1234")
    client.post("/api/attendance/scan", json={"code": code})
    client.post("/api/auth/logout")

    login(client, "admin", "admin123")
    daily = client.get("/api/admin/reports/daily?date=2024-03-01").get_json()
    stats = client.get("/api/admin/reports/stats").get_json()
    ranking = client.get("/api/ranking?start=2024-03-01&end=2024-03-01").get_json()

    assert [r["username"] for r in daily["rows"]] == ["rafael"]
    assert stats["total"] == 1
    assert ranking[0]["full_name"] == "Rafael Remote"
    assert ranking[0]["percentage"] == 100
    assert client.get("/api/admin/reports/daily?date=03/01/2024").status_code == 400


def test_unexpected_errors_are_generic(client, container, monkeypatch):
    login(client, "admin", "admin123")

    def boom(*args, **kwargs):
        raise RuntimeError("secret stack detail")

    monkeypatch.setattr(container.report_service, "daily_report", boom)
    res = client.get("/api/admin/reports/daily")

    assert res.status_code == 500
    assert "secret stack detail" not in res.get_data(as_text=True)


def test_history_defaults_to_last_thirty_days(client, clock):
    code = generate_code(client)
    login(client, "rafael", "user1234")
    client.post("/api/attendance/scan", json={"code": code})
    clock.now = clock.now + timedelta(days=1)

    history = client.get("/api/attendance/history").get_json()

    assert [h["date"] for h in history] == ["2024-03-01"]
