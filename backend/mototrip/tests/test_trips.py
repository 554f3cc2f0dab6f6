"""
Tests for trip endpoints and trip-level authorization.
"""
from mototrip.models.expense import Expense, ExpenseShare
from mototrip.models.item import Item
from mototrip.models.stage import Stage
from mototrip.models.trip import Trip, TripMember
from mototrip.tests.conftest import add_member, create_trip


def test_create_trip_makes_creator_owner(client, alice):
    trip = create_trip(client, alice, base_currency="chf")

    assert trip["owner_user_id"] == alice["id"]
    assert trip["base_currency"] == "CHF"

    detail = client.get(f"/api/trips/{trip['id']}", headers=alice["headers"]).json()
    assert len(detail["members"]) == 1
    assert detail["members"][0]["user_id"] == alice["id"]
    assert detail["members"][0]["role"] == "Owner"


def test_create_trip_defaults_currency(client, alice):
    trip = create_trip(client, alice, base_currency=None)
    assert trip["base_currency"] == "EUR"


def test_create_trip_rejects_end_before_start(client, alice):
    response = client.post(
        "/api/trips",
        json={"name": "Backwards", "start_date": "2026-06-10", "end_date": "2026-06-01"},
        headers=alice["headers"]
    )
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_create_trip_rejects_bad_currency(client, alice):
    response = client.post(
        "/api/trips",
        json={"name": "Euro Tour", "start_date": "2026-06-01", "base_currency": "EURO"},
        headers=alice["headers"]
    )
    assert response.status_code == 400


def test_list_trips_only_shows_memberships(client, alice, bob):
    own = create_trip(client, alice, name="Dolomites", start_date="2026-05-01", end_date=None)
    later = create_trip(client, alice, name="Pyrenees", start_date="2026-09-01", end_date=None)
    create_trip(client, bob, name="Bob's solo ride")

    trips = client.get("/api/trips", headers=alice["headers"]).json()
    assert [t["id"] for t in trips] == [later["id"], own["id"]]


def test_non_member_is_forbidden(client, trip, carol):
    response = client.get(f"/api/trips/{trip['id']}", headers=carol["headers"])
    assert response.status_code == 403
    assert response.json()["error"] == "forbidden"


def test_unknown_trip_is_not_found(client, alice):
    response = client.get("/api/trips/9999", headers=alice["headers"])
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_update_trip_changes_only_submitted_fields(client, alice, trip):
    response = client.put(
        f"/api/trips/{trip['id']}",
        json={"name": "Alps Adventure (extended)"},
        headers=alice["headers"]
    )
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Alps Adventure (extended)"
    assert body["start_date"] == trip["start_date"]
    assert body["end_date"] == trip["end_date"]
    assert body["base_currency"] == "EUR"


def test_update_trip_can_clear_end_date(client, alice, trip):
    response = client.put(f"/api/trips/{trip['id']}", json={"end_date": None}, headers=alice["headers"])
    assert response.status_code == 200
    assert response.json()["end_date"] is None


def test_update_trip_rejects_null_name(client, alice, trip):
    response = client.put(f"/api/trips/{trip['id']}", json={"name": None}, headers=alice["headers"])
    assert response.status_code == 400


def test_update_trip_rejects_inverted_dates(client, alice, trip):
    response = client.put(
        f"/api/trips/{trip['id']}",
        json={"start_date": "2026-07-01"},
        headers=alice["headers"]
    )
    assert response.status_code == 400


def test_editor_cannot_update_or_delete_trip(client, alice, bob, trip):
    add_member(client, trip["id"], alice, bob, role="Editor")

    update = client.put(f"/api/trips/{trip['id']}", json={"name": "Mine now"}, headers=bob["headers"])
    delete = client.delete(f"/api/trips/{trip['id']}", headers=bob["headers"])

    assert update.status_code == 403
    assert delete.status_code == 403


def test_delete_trip_removes_everything(client, db_session, alice, bob, trip):
    trip_id = trip["id"]
    add_member(client, trip_id, alice, bob)
    stage = client.post(
        f"/api/trips/{trip_id}/stages",
        json={"date": "2026-06-01", "start_text": "Munich", "end_text": "Innsbruck"},
        headers=alice["headers"]
    ).json()
    client.post(
        f"/api/trips/{trip_id}/items",
        json={"stage_id": stage["id"], "type": "Booking", "title": "Hotel Post"},
        headers=alice["headers"]
    )
    client.post(
        f"/api/trips/{trip_id}/expenses",
        json={"category": "Fuel", "amount": "45.00", "is_shared": True},
        headers=alice["headers"]
    )

    response = client.delete(f"/api/trips/{trip_id}", headers=alice["headers"])

    assert response.status_code == 204
    assert db_session.query(Trip).filter(Trip.id == trip_id).count() == 0
    assert db_session.query(TripMember).filter(TripMember.trip_id == trip_id).count() == 0
    assert db_session.query(Stage).filter(Stage.trip_id == trip_id).count() == 0
    assert db_session.query(Item).filter(Item.trip_id == trip_id).count() == 0
    assert db_session.query(Expense).filter(Expense.trip_id == trip_id).count() == 0
    assert db_session.query(ExpenseShare).count() == 0
    assert client.get(f"/api/trips/{trip_id}", headers=alice["headers"]).status_code == 404
