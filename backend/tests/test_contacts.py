"""Contact CRUD, tag upsert, connections and tenant isolation"""

from contactbook.models import Contact


def create(client, headers, **fields):
    body = {"name": "Ada", "location": "London"}
    body.update(fields)
    resp = client.post("/api/contacts", json=body, headers=headers)
    assert resp.status_code == 201, resp.json()
    return resp.json()


def test_name_and_location_are_required(client, auth_headers):
    for body in ({"location": "NYC"}, {"name": "Ada"}, {"name": "  ", "location": "NYC"}):
        resp = client.post("/api/contacts", json=body, headers=auth_headers)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Name and location are required"}


def test_create_contact_returns_full_record(client, auth_headers):
    contact = create(
        client, auth_headers,
        spouse="Bill", children="Annabella", notes="Met at the analytical engine demo",
    )
    assert isinstance(contact["id"], int)
    assert contact["name"] == "Ada"
    assert contact["location"] == "London"
    assert contact["spouse"] == "Bill"
    assert contact["children"] == "Annabella"
    assert contact["tags"] == []
    assert contact["connections"] == []
    assert contact["created_at"]
    assert contact["updated_at"]


def test_empty_optional_fields_are_stored_as_null(client, auth_headers):
    contact = create(client, auth_headers, spouse="", notes="")
    assert contact["spouse"] is None
    assert contact["notes"] is None


def test_duplicate_tag_names_collapse(client, auth_headers):
    contact = create(client, auth_headers, tags=["friend", "work", "friend", " work "])
    assert contact["tags"] == ["friend", "work"]

    listed = client.get("/api/contacts", headers=auth_headers).json()
    assert listed[0]["tags"] == ["friend", "work"]


def test_tags_are_created_on_demand_and_reused(client, auth_headers):
    client.post("/api/tags", json={"name": "friend"}, headers=auth_headers)
    create(client, auth_headers, name="Ada", tags=["friend", "math"])
    create(client, auth_headers, name="Charles", tags=["math"])

    names = [t["name"] for t in client.get("/api/tags", headers=auth_headers).json()]
    assert names == ["friend", "math"]


def test_contacts_without_tags_or_connections_get_empty_lists(client, auth_headers):
    create(client, auth_headers)
    contact = client.get("/api/contacts", headers=auth_headers).json()[0]
    assert contact["tags"] == []
    assert contact["connections"] == []


def test_null_tags_and_connections_are_treated_as_empty(client, auth_headers):
    contact = create(client, auth_headers, tags=None, connections=None)
    assert contact["tags"] == []
    assert contact["connections"] == []


def test_contacts_are_listed_newest_first(client, auth_headers):
    first = create(client, auth_headers, name="First")
    second = create(client, auth_headers, name="Second")
    ids = [c["id"] for c in client.get("/api/contacts", headers=auth_headers).json()]
    assert ids == [second["id"], first["id"]]


def test_connection_summaries(client, auth_headers):
    charles = create(client, auth_headers, name="Charles")
    ada = create(
        client, auth_headers,
        name="Ada",
        connections=[
            {"connected_contact_id": charles["id"], "connection_notes": "Soiree"},
            {"connected_contact_id": charles["id"], "connection_type": "colleague"},
        ],
    )
    assert ada["connections"] == [
        {"id": charles["id"], "name": "Charles", "connection_type": "introduced_by", "connection_notes": "Soiree"},
        {"id": charles["id"], "name": "Charles", "connection_type": "colleague", "connection_notes": None},
    ]

    listed = {c["id"]: c for c in client.get("/api/contacts", headers=auth_headers).json()}
    assert len(listed[ada["id"]]["connections"]) == 2
    # Edges are directed
    assert listed[charles["id"]]["connections"] == []


def test_duplicate_connections_in_one_request_collapse(client, auth_headers):
    charles = create(client, auth_headers, name="Charles")
    edge = {"connected_contact_id": charles["id"], "connection_type": "friend"}
    ada = create(client, auth_headers, name="Ada", connections=[edge, edge])
    assert len(ada["connections"]) == 1


def test_failed_create_leaves_nothing_behind(client, auth_headers, db_session):
    resp = client.post(
        "/api/contacts",
        json={
            "name": "Ada",
            "location": "London",
            "tags": ["brand-new-tag"],
            "connections": [{"connected_contact_id": 9999}],
        },
        headers=auth_headers,
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid connected contact"}

    assert client.get("/api/contacts", headers=auth_headers).json() == []
    assert client.get("/api/tags", headers=auth_headers).json() == []
    assert db_session.query(Contact).count() == 0


def test_overlong_tag_name_is_rejected(client, auth_headers, db_session):
    resp = client.post(
        "/api/contacts",
        json={"name": "Ada", "location": "London", "tags": ["x" * 101]},
        headers=auth_headers,
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid request body"}

    assert client.get("/api/tags", headers=auth_headers).json() == []
    assert db_session.query(Contact).count() == 0

    contact = create(client, auth_headers, tags=["x" * 100])
    assert contact["tags"] == ["x" * 100]


def test_update_replaces_fields_tags_and_connections(client, auth_headers):
    charles = create(client, auth_headers, name="Charles")
    mary = create(client, auth_headers, name="Mary")
    ada = create(
        client, auth_headers,
        tags=["friend", "math"],
        connections=[{"connected_contact_id": charles["id"]}],
    )

    resp = client.put(
        f"/api/contacts/{ada['id']}",
        json={
            "name": "Ada Lovelace",
            "location": "Marylebone",
            "tags": ["math", "poetry"],
            "connections": [{"connected_contact_id": mary["id"], "connection_type": "tutor"}],
        },
        headers=auth_headers,
    )
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["name"] == "Ada Lovelace"
    assert updated["location"] == "Marylebone"
    assert updated["tags"] == ["math", "poetry"]
    assert [(c["id"], c["connection_type"]) for c in updated["connections"]] == [(mary["id"], "tutor")]


def test_update_with_empty_tags_removes_all_associations(client, auth_headers):
    ada = create(client, auth_headers, tags=["friend", "math"])
    resp = client.put(
        f"/api/contacts/{ada['id']}",
        json={"name": "Ada", "location": "London", "tags": []},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["tags"] == []
    assert client.get("/api/contacts", headers=auth_headers).json()[0]["tags"] == []
    # Tags themselves survive
    assert len(client.get("/api/tags", headers=auth_headers).json()) == 2


def test_update_keeping_the_same_tags(client, auth_headers):
    ada = create(client, auth_headers, tags=["friend"])
    resp = client.put(
        f"/api/contacts/{ada['id']}",
        json={"name": "Ada", "location": "London", "tags": ["friend"]},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["tags"] == ["friend"]


def test_update_requires_name_and_location(client, auth_headers):
    ada = create(client, auth_headers)
    resp = client.put(f"/api/contacts/{ada['id']}", json={"name": "Ada"}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Name and location are required"}


def test_update_missing_contact(client, auth_headers):
    resp = client.put("/api/contacts/9999", json={"name": "A", "location": "B"}, headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Contact not found"}


def test_failed_update_keeps_previous_state(client, auth_headers):
    ada = create(client, auth_headers, tags=["friend"])
    resp = client.put(
        f"/api/contacts/{ada['id']}",
        json={
            "name": "Changed",
            "location": "Elsewhere",
            "tags": [],
            "connections": [{"connected_contact_id": 9999}],
        },
        headers=auth_headers,
    )
    assert resp.status_code == 400

    contact = client.get(f"/api/contacts/{ada['id']}", headers=auth_headers).json()
    assert contact["name"] == "Ada"
    assert contact["tags"] == ["friend"]


def test_delete_contact(client, auth_headers):
    ada = create(client, auth_headers)
    resp = client.delete(f"/api/contacts/{ada['id']}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Contact deleted successfully"}

    assert client.delete(f"/api/contacts/{ada['id']}", headers=auth_headers).status_code == 404
    assert client.get("/api/contacts", headers=auth_headers).json() == []


def test_deleting_a_contact_removes_edges_pointing_at_it(client, auth_headers):
    charles = create(client, auth_headers, name="Charles")
    ada = create(client, auth_headers, connections=[{"connected_contact_id": charles["id"]}])

    client.delete(f"/api/contacts/{charles['id']}", headers=auth_headers)

    contact = client.get(f"/api/contacts/{ada['id']}", headers=auth_headers).json()
    assert contact["connections"] == []


def test_users_cannot_touch_each_others_contacts(client, make_user):
    alice = make_user("alice@x.com")
    bob = make_user("bob@x.com")
    secret = create(client, alice, name="Secret")

    assert client.get("/api/contacts", headers=bob).json() == []
    assert client.get(f"/api/contacts/{secret['id']}", headers=bob).status_code == 404

    resp = client.put(
        f"/api/contacts/{secret['id']}",
        json={"name": "Hijacked", "location": "Nowhere"},
        headers=bob,
    )
    assert resp.status_code == 404

    resp = client.delete(f"/api/contacts/{secret['id']}", headers=bob)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Contact not found"}

    mine = client.get("/api/contacts", headers=alice).json()
    assert [c["name"] for c in mine] == ["Secret"]


def test_cannot_connect_to_another_users_contact(client, make_user):
    alice = make_user("alice@x.com")
    bob = make_user("bob@x.com")
    alices_contact = create(client, alice, name="Charles")

    resp = client.post(
        "/api/contacts",
        json={"name": "Ada", "location": "London", "connections": [{"connected_contact_id": alices_contact["id"]}]},
        headers=bob,
    )
    assert resp.status_code == 400
    assert client.get("/api/contacts", headers=bob).json() == []


def test_tags_of_different_users_do_not_mix(client, make_user):
    alice = make_user("alice@x.com")
    bob = make_user("bob@x.com")
    create(client, alice, tags=["friend"])
    create(client, bob, tags=["friend"])

    alice_tags = client.get("/api/tags", headers=alice).json()
    bob_tags = client.get("/api/tags", headers=bob).json()
    assert len(alice_tags) == len(bob_tags) == 1
    assert alice_tags[0]["id"] != bob_tags[0]["id"]
