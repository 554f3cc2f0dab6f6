"""
Tests that outsiders can neither read nor change a trip's children.
"""
import pytest

CHILDREN = {
    "stages": (
        {"date": "2026-06-02", "start_text": "Innsbruck", "end_text": "Bolzano"},
        {"notes": "hijacked"},
    ),
    "items": (
        {"title": "Hotel Laurin", "type": "Booking"},
        {"title": "hijacked"},
    ),
    "expenses": (
        {"category": "Fuel", "amount": "40.00", "is_shared": True},
        {"amount": "1.00"},
    ),
}


@pytest.fixture(params=sorted(CHILDREN))
def child(request, client, alice, trip):
    """A child record of alice's trip, with its collection url."""
    create_payload, update_payload = CHILDREN[request.param]
    base = f"/api/trips/{trip['id']}/{request.param}"
    response = client.post(base, json=create_payload, headers=alice["headers"])
    assert response.status_code == 201, response.text
    return {
        "base": base,
        "url": f"{base}/{response.json()['id']}",
        "create": create_payload,
        "update": update_payload,
        "body": response.json(),
    }


def test_non_member_cannot_list_or_get(client, carol, child):
    assert client.get(child["base"], headers=carol["headers"]).status_code == 403
    assert client.get(child["url"], headers=carol["headers"]).status_code == 403


def test_non_member_cannot_create(client, carol, child):
    response = client.post(child["base"], json=child["create"], headers=carol["headers"])
    assert response.status_code == 403
    assert response.json()["error"] == "forbidden"


def test_non_member_cannot_update(client, alice, carol, child):
    response = client.put(child["url"], json=child["update"], headers=carol["headers"])

    assert response.status_code == 403
    unchanged = client.get(child["url"], headers=alice["headers"]).json()
    assert unchanged["row_version"] == child["body"]["row_version"]


def test_non_member_cannot_delete(client, alice, carol, child):
    response = client.delete(child["url"], headers=carol["headers"])

    assert response.status_code == 403
    assert client.get(child["url"], headers=alice["headers"]).status_code == 200


def test_non_member_cannot_read_summary(client, carol, trip):
    response = client.get(f"/api/trips/{trip['id']}/expenses/summary", headers=carol["headers"])
    assert response.status_code == 403
