"""
Tests for trip membership management and role checks.
"""
from mototrip.tests.conftest import add_member


def test_add_member_by_email(client, alice, bob, trip):
    response = client.post(
        f"/api/trips/{trip['id']}/members",
        json={"email": bob["email"], "role": "Editor"},
        headers=alice["headers"]
    )
    assert response.status_code == 201
    members = response.json()
    assert [(m["user_id"], m["role"]) for m in members] == [
        (alice["id"], "Owner"),
        (bob["id"], "Editor"),
    ]


def test_add_member_by_user_id_defaults_to_viewer(client, alice, bob, trip):
    response = client.post(
        f"/api/trips/{trip['id']}/members",
        json={"user_id": bob["id"]},
        headers=alice["headers"]
    )
    assert response.status_code == 201
    assert response.json()[-1]["role"] == "Viewer"


def test_add_member_requires_identity(client, alice, trip):
    response = client.post(f"/api/trips/{trip['id']}/members", json={"role": "Editor"}, headers=alice["headers"])
    assert response.status_code == 400


def test_owner_role_cannot_be_assigned(client, alice, bob, trip):
    response = client.post(
        f"/api/trips/{trip['id']}/members",
        json={"email": bob["email"], "role": "Owner"},
        headers=alice["headers"]
    )
    assert response.status_code == 400


def test_add_unknown_user(client, alice, trip):
    response = client.post(
        f"/api/trips/{trip['id']}/members",
        json={"email": "nobody@example.com"},
        headers=alice["headers"]
    )
    assert response.status_code == 404


def test_add_existing_member(client, alice, bob, trip):
    add_member(client, trip["id"], alice, bob)
    response = client.post(
        f"/api/trips/{trip['id']}/members",
        json={"email": bob["email"]},
        headers=alice["headers"]
    )
    assert response.status_code == 400


def test_viewer_can_read_but_not_write(client, alice, bob, trip):
    add_member(client, trip["id"], alice, bob, role="Viewer")

    assert client.get(f"/api/trips/{trip['id']}", headers=bob["headers"]).status_code == 200
    assert client.get(f"/api/trips/{trip['id']}/stages", headers=bob["headers"]).status_code == 200

    response = client.post(
        f"/api/trips/{trip['id']}/stages",
        json={"date": "2026-06-02", "start_text": "Innsbruck", "end_text": "Bolzano"},
        headers=bob["headers"]
    )
    assert response.status_code == 403


def test_viewer_cannot_manage_members(client, alice, bob, carol, trip):
    add_member(client, trip["id"], alice, bob, role="Viewer")
    response = client.post(
        f"/api/trips/{trip['id']}/members",
        json={"email": carol["email"]},
        headers=bob["headers"]
    )
    assert response.status_code == 403


def test_editor_can_invite(client, alice, bob, carol, trip):
    add_member(client, trip["id"], alice, bob, role="Editor")
    response = client.post(
        f"/api/trips/{trip['id']}/members",
        json={"email": carol["email"]},
        headers=bob["headers"]
    )
    assert response.status_code == 201
    assert len(response.json()) == 3


def test_change_member_role(client, alice, bob, trip):
    add_member(client, trip["id"], alice, bob, role="Viewer")
    response = client.put(
        f"/api/trips/{trip['id']}/members/{bob['id']}",
        json={"role": "Editor"},
        headers=alice["headers"]
    )
    assert response.status_code == 200
    roles = {m["user_id"]: m["role"] for m in response.json()}
    assert roles[bob["id"]] == "Editor"


def test_owner_role_cannot_be_changed(client, alice, bob, trip):
    add_member(client, trip["id"], alice, bob, role="Editor")
    response = client.put(
        f"/api/trips/{trip['id']}/members/{alice['id']}",
        json={"role": "Viewer"},
        headers=bob["headers"]
    )
    assert response.status_code == 400


def test_owner_cannot_be_removed(client, alice, bob, trip):
    add_member(client, trip["id"], alice, bob, role="Editor")
    response = client.delete(f"/api/trips/{trip['id']}/members/{alice['id']}", headers=bob["headers"])
    assert response.status_code == 400


def test_removed_member_loses_access(client, alice, bob, trip):
    add_member(client, trip["id"], alice, bob)

    response = client.delete(f"/api/trips/{trip['id']}/members/{bob['id']}", headers=alice["headers"])

    assert response.status_code == 204
    assert client.get(f"/api/trips/{trip['id']}", headers=bob["headers"]).status_code == 403


def test_remove_unknown_member(client, alice, carol, trip):
    response = client.delete(f"/api/trips/{trip['id']}/members/{carol['id']}", headers=alice["headers"])
    assert response.status_code == 404


def test_add_member_email_is_case_insensitive(client, alice, bob, trip):
    response = client.post(
        f"/api/trips/{trip['id']}/members",
        json={"email": "BOB@Example.com", "role": "Editor"},
        headers=alice["headers"]
    )
    assert response.status_code == 201
    assert bob["id"] in [m["user_id"] for m in response.json()]
