"""
End-to-end tests of the HTTP surface through FastAPI's TestClient.
"""

import uuid
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def hunter(register) -> dict:
    return register()


@pytest.fixture
def headers(hunter) -> dict[str, str]:
    return auth_headers(hunter["access_token"])


def test_register_returns_token_and_default_profile(hunter):
    assert hunter["token_type"] == "bearer"
    assert hunter["access_token"]

    user = hunter["user"]
    assert user["username"] == "hunter"
    assert user["level"] == 1
    assert user["xp"] == 0
    assert user["total_xp"] == 0
    assert user["xp_to_next_level"] == 1000
    assert user["available_points"] == 5
    assert user["stats"] == {
        "strength": 10,
        "agility": 10,
        "intelligence": 10,
        "vitality": 10,
    }
    assert user["rank"] == "E"
    assert user["achievements"] == []
    assert "hashed_password" not in user


def test_register_duplicate_username(client: TestClient, register):
    register("hunter")

    response = client.post(
        "/api/auth/register", json={"username": "hunter", "password": "another-pass"}
    )

    assert response.status_code == 400
    assert response.json()["error_code"] == "duplicate_username"


def test_register_rejects_short_password(client: TestClient):
    response = client.post(
        "/api/auth/register", json={"username": "hunter", "password": "123"}
    )

    assert response.status_code == 422


def test_login_failures_are_indistinguishable(client: TestClient, register):
    register("hunter", "s3cret-pass")

    wrong_password = client.post(
        "/api/auth/login", json={"username": "hunter", "password": "not-it"}
    )
    unknown_user = client.post(
        "/api/auth/login", json={"username": "nobody", "password": "s3cret-pass"}
    )

    assert wrong_password.status_code == 401
    assert unknown_user.status_code == 401
    assert wrong_password.json()["detail"] == unknown_user.json()["detail"]
    assert wrong_password.json()["error_code"] == "invalid_credentials"


def test_login_returns_a_working_token(client: TestClient, register):
    register("hunter", "s3cret-pass")

    response = client.post(
        "/api/auth/login", json={"username": "hunter", "password": "s3cret-pass"}
    )

    assert response.status_code == 200
    me = client.get("/api/auth/me", headers=auth_headers(response.json()["access_token"]))
    assert me.status_code == 200
    assert me.json()["username"] == "hunter"


def test_protected_routes_require_a_token(client: TestClient):
    for method, path in [
        ("get", "/api/auth/me"),
        ("get", "/api/missions"),
        ("get", "/api/character"),
        ("post", f"/api/missions/{uuid.uuid4()}/complete"),
    ]:
        response = getattr(client, method)(path)
        assert response.status_code == 401, path
        assert response.headers["www-authenticate"] == "Bearer"


def test_garbage_token_is_rejected(client: TestClient):
    response = client.get("/api/auth/me", headers=auth_headers("not-a-jwt"))

    assert response.status_code == 401
    assert response.json()["error_code"] == "unauthenticated"


def test_list_missions(client: TestClient, headers):
    response = client.get("/api/missions", headers=headers)

    assert response.status_code == 200
    missions = response.json()
    assert len(missions) == 8
    assert {m["type"] for m in missions} == {"daily", "side", "main"}

    dailies = client.get("/api/missions", params={"type": "daily"}, headers=headers)
    assert dailies.status_code == 200
    assert len(dailies.json()) == 5
    assert all(m["type"] == "daily" for m in dailies.json())


def test_list_missions_rejects_unknown_type(client: TestClient, headers):
    response = client.get("/api/missions", params={"type": "weekly"}, headers=headers)

    assert response.status_code == 422


def test_complete_mission_then_repeat(client: TestClient, headers):
    missions = client.get("/api/missions", headers=headers).json()
    main = next(m for m in missions if m["type"] == "main")

    response = client.post(f"/api/missions/{main['id']}/complete", headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["mission"]["completed"] is True
    assert body["xp_gained"] == 500
    assert body["user"]["total_xp"] == 500
    assert body["notifications"][0]["kind"] == "xp_gained"

    repeat = client.post(f"/api/missions/{main['id']}/complete", headers=headers)
    assert repeat.status_code == 404
    assert repeat.json()["error_code"] == "mission_not_found_or_completed"

    me = client.get("/api/auth/me", headers=headers).json()
    assert me["total_xp"] == 500


def test_completing_every_mission_levels_up(client: TestClient, headers):
    missions = client.get("/api/missions", headers=headers).json()

    for mission in missions:
        response = client.post(
            f"/api/missions/{mission['id']}/complete", headers=headers
        )
        assert response.status_code == 200

    character = client.get("/api/character", headers=headers).json()
    assert character["total_xp"] == 970
    assert character["level"] == 1
    assert character["xp_to_next_level"] == 30


def test_cannot_complete_another_users_mission(client: TestClient, register):
    owner = register("owner")
    intruder = register("intruder")
    owner_missions = client.get(
        "/api/missions", headers=auth_headers(owner["access_token"])
    ).json()

    response = client.post(
        f"/api/missions/{owner_missions[0]['id']}/complete",
        headers=auth_headers(intruder["access_token"]),
    )

    assert response.status_code == 404


def test_allocate_points_until_exhausted(client: TestClient, headers):
    for expected_left in [4, 3, 2, 1, 0]:
        response = client.post(
            "/api/character/stats/allocate", json={"stat": "agility"}, headers=headers
        )
        assert response.status_code == 200
        assert response.json()["available_points"] == expected_left

    character = client.get("/api/character", headers=headers).json()
    assert character["stats"]["agility"] == 15
    assert character["stats"]["strength"] == 10

    response = client.post(
        "/api/character/stats/allocate", json={"stat": "agility"}, headers=headers
    )
    assert response.status_code == 400
    assert response.json()["error_code"] == "insufficient_points"


def test_allocate_unknown_stat(client: TestClient, headers):
    response = client.post(
        "/api/character/stats/allocate", json={"stat": "charisma"}, headers=headers
    )

    assert response.status_code == 422


def test_logout_ends_the_session(client: TestClient, headers):
    response = client.post("/api/auth/logout", headers=headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Logged out successfully"}
    assert client.get("/api/auth/me", headers=headers).status_code == 401
    assert client.post("/api/auth/logout", headers=headers).status_code == 401


def test_logout_leaves_other_sessions_alive(client: TestClient, register):
    first = register("hunter", "s3cret-pass")
    second = client.post(
        "/api/auth/login", json={"username": "hunter", "password": "s3cret-pass"}
    ).json()

    client.post("/api/auth/logout", headers=auth_headers(first["access_token"]))

    me = client.get("/api/auth/me", headers=auth_headers(second["access_token"]))
    assert me.status_code == 200


def test_login_accepts_padded_username(client: TestClient, register):
    register(" hunter ", "s3cret-pass")

    response = client.post(
        "/api/auth/login", json={"username": " hunter ", "password": "s3cret-pass"}
    )

    assert response.status_code == 200
    assert response.json()["user"]["username"] == "hunter"


def test_timestamps_carry_a_utc_offset(client: TestClient, headers):
    missions = client.get("/api/missions", headers=headers).json()
    daily = next(m for m in missions if m["type"] == "daily")

    completed = client.post(
        f"/api/missions/{daily['id']}/complete", headers=headers
    ).json()
    me = client.get("/api/auth/me", headers=headers).json()

    for value in [
        me["created_at"],
        completed["mission"]["created_at"],
        completed["mission"]["completed_at"],
        completed["mission"]["reset_date"],
    ]:
        assert datetime.fromisoformat(value).utcoffset() == timedelta(0), value
