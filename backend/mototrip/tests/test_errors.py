"""
Tests for conflict and server error responses.
"""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from mototrip.api.routes import members, stages, trips
from mototrip.core.errors import is_unique_violation, register_exception_handlers
from mototrip.main import app
from mototrip.models.stage import Stage
from mototrip.tests.conftest import TestingSessionLocal


def _integrity_error(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT INTO trip_members ...", {}, orig)


def test_concurrent_stage_update_conflicts(client, alice, trip, monkeypatch):
    """A row changed by someone else between read and write is a 409."""
    stage = client.post(
        f"/api/trips/{trip['id']}/stages",
        json={"date": "2026-06-02", "start_text": "Innsbruck", "end_text": "Bolzano"},
        headers=alice["headers"]
    ).json()
    original_apply = stages.apply_updates

    def apply_after_rival_write(entity, updates, required, user_id=None):
        rival = TestingSessionLocal()
        rival.get(Stage, entity.id).notes = "written by bob"
        rival.commit()
        rival.close()
        original_apply(entity, updates, required, user_id)

    monkeypatch.setattr(stages, "apply_updates", apply_after_rival_write)
    url = f"/api/trips/{trip['id']}/stages/{stage['id']}"

    response = client.put(url, json={"notes": "written by alice"}, headers=alice["headers"])

    assert response.status_code == 409
    assert response.json()["error"] == "conflict"
    assert client.get(url, headers=alice["headers"]).json()["notes"] == "written by bob"


def test_duplicate_membership_race_conflicts(client, alice, bob, trip, monkeypatch):
    client.post(
        f"/api/trips/{trip['id']}/members",
        json={"email": bob["email"]},
        headers=alice["headers"]
    )
    # Both requests passed the membership check before either inserted
    monkeypatch.setattr(members, "get_member", lambda trip_id, user_id, db: None)

    response = client.post(
        f"/api/trips/{trip['id']}/members",
        json={"email": bob["email"]},
        headers=alice["headers"]
    )

    assert response.status_code == 409
    assert response.json()["error"] == "conflict"


def test_unhandled_exception_returns_json_500(client, alice, trip, monkeypatch):
    def broken_list_members(trip_id, db):
        raise RuntimeError("database went away")

    monkeypatch.setattr(trips, "list_members", broken_list_members)
    lenient_client = TestClient(app, raise_server_exceptions=False)

    response = lenient_client.get(f"/api/trips/{trip['id']}", headers=alice["headers"])

    assert response.status_code == 500
    assert response.json() == {
        "error": "internal_error",
        "detail": "An unexpected error occurred. Please try again later.",
    }


@pytest.mark.parametrize("orig, unique", [
    (Exception("UNIQUE constraint failed: trip_members.trip_id, trip_members.user_id"), True),
    (Exception(1062, "Duplicate entry '1-2' for key 'uq_trip_member'"), True),
    (Exception("NOT NULL constraint failed: trips.name"), False),
    (Exception(1452, "Cannot add or update a child row: a foreign key constraint fails"), False),
])
def test_is_unique_violation(orig, unique):
    assert is_unique_violation(_integrity_error(orig)) is unique


def test_other_integrity_errors_are_server_errors():
    broken = FastAPI()
    register_exception_handlers(broken)

    @broken.post("/trips")
    async def create_trip():
        raise _integrity_error(Exception("NOT NULL constraint failed: trips.name"))

    response = TestClient(broken, raise_server_exceptions=False).post("/trips")

    assert response.status_code == 500
    assert response.json()["error"] == "internal_error"
