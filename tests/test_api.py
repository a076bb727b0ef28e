import pytest

API = "/api/v1"


def create_client(client, headers, name="Jane Doe", address="12 Market Street"):
    return client.post(
        f"{API}/clients/",
        json={"name": name, "address": address, "phone": "555-0100", "email": "jane@example.com"},
        headers=headers,
    )


def create_item(client, headers, price=10, category="pizza", description="Tomato and cheese"):
    return client.post(
        f"{API}/items/",
        json={"name": "Margherita", "description": description, "price": price, "category": category},
        headers=headers,
    )


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["name"]


@pytest.mark.parametrize("path", ["/clients/", "/items/", "/orders/", "/reviews/"])
def test_empty_listing_is_not_found(client, path):
    response = client.get(f"{API}{path}")
    assert response.status_code == 404
    assert response.json()["kind"] == "NotFound"


def test_mutation_without_token(client):
    response = create_client(client, headers={})
    assert response.status_code == 401
    assert response.json()["kind"] == "Unauthorized"
    assert response.headers["www-authenticate"] == "Bearer"


def test_mutation_with_bad_token(client):
    response = create_client(client, headers={"Authorization": "Bearer not.a.token"})
    assert response.status_code == 401


def test_invalid_payload(client, auth):
    response = create_client(client, auth("alice"), name="J")
    assert response.status_code == 422
    body = response.json()
    assert body["kind"] == "InvalidPayload"
    assert "name" in body["detail"]
    # no id consumed: the next creation still gets id 0
    assert create_client(client, auth("alice")).json()["id"] == 0


def test_create_and_get_client(client, auth):
    created = create_client(client, auth("alice"))
    assert created.status_code == 201
    body = created.json()
    assert body["owner"] == "alice"
    assert client.get(f"{API}/clients/{body['id']}").json() == body
    assert client.get(f"{API}/clients/").json() == [body]
    assert client.get(f"{API}/clients/99").status_code == 404


def test_order_flow(client, auth):
    alice = auth("alice")
    client_id = create_client(client, alice).json()["id"]
    ten = create_item(client, alice, price=10).json()["id"]
    five = create_item(client, alice, price=5).json()["id"]

    response = client.post(
        f"{API}/orders/",
        json={
            "client_id": client_id,
            "items": [
                {"item_id": ten, "quantity": 3},
                {"item_id": five, "quantity": 1},
                {"item_id": 999, "quantity": 99},
            ],
        },
        headers=alice,
    )
    assert response.status_code == 201
    order = response.json()
    assert order["total"] == 35
    assert order["status"] == "order placed"
    assert order["delivered"] is False
    assert client.get(f"{API}/orders/{order['id']}").json() == order
    assert client.get(f"{API}/orders/client/{client_id}").json() == [order]

    status = client.put(
        f"{API}/orders/{order['id']}/status", json={"status": "on the way"}, headers=alice
    )
    assert status.status_code == 200
    assert status.json()["message"] == f"order id: {order['id']} status updated to on the way"

    first = client.post(f"{API}/orders/{order['id']}/confirm-delivery", headers=alice)
    assert first.status_code == 200
    assert first.json()["message"] == f"order id: {order['id']} is delivered"

    second = client.post(f"{API}/orders/{order['id']}/confirm-delivery", headers=alice)
    assert second.status_code == 409
    assert second.json()["kind"] == "AlreadyDelivered"

    stored = client.get(f"{API}/orders/{order['id']}").json()
    assert stored["delivered"] is True
    assert stored["status"] == "order delivered"


def test_empty_order(client, auth):
    alice = auth("alice")
    client_id = create_client(client, alice).json()["id"]
    response = client.post(f"{API}/orders/", json={"client_id": client_id, "items": []}, headers=alice)
    assert response.status_code == 422
    assert response.json()["kind"] == "InvalidPayload"


def test_order_for_foreign_client(client, auth):
    client_id = create_client(client, auth("alice")).json()["id"]
    item_id = create_item(client, auth("alice")).json()["id"]
    response = client.post(
        f"{API}/orders/",
        json={"client_id": client_id, "items": [{"item_id": item_id, "quantity": 1}]},
        headers=auth("bob"),
    )
    assert response.status_code == 403
    assert response.json()["kind"] == "Unauthorized"
    assert client.get(f"{API}/orders/").status_code == 404


def test_item_search(client, auth):
    alice = auth("alice")
    create_item(client, alice, category="pizza")
    create_item(client, alice, category="soup", description="Creamy tomato")
    found = client.get(f"{API}/items/search", params={"query": "soup"})
    assert found.status_code == 200
    assert [item["category"] for item in found.json()] == ["soup"]
    assert client.get(f"{API}/items/search", params={"query": "sushi"}).status_code == 404


def test_delete_item_cascades(client, auth):
    alice = auth("alice")
    client_id = create_client(client, alice).json()["id"]
    doomed = create_item(client, alice).json()["id"]
    kept = create_item(client, alice).json()["id"]
    for item_id in (doomed, doomed, kept):
        response = client.post(
            f"{API}/reviews/",
            json={"client_id": client_id, "item_id": item_id, "rating": 4, "comment": "good"},
            headers=alice,
        )
        assert response.status_code == 201

    assert client.delete(f"{API}/items/{doomed}", headers=auth("bob")).status_code == 403
    assert len(client.get(f"{API}/reviews/item/{doomed}").json()) == 2

    response = client.delete(f"{API}/items/{doomed}", headers=alice)
    assert response.status_code == 200
    assert response.json()["message"] == f"Food item id: {doomed} deleted"
    assert client.get(f"{API}/items/{doomed}").status_code == 404
    assert client.get(f"{API}/reviews/item/{doomed}").status_code == 404
    remaining = client.get(f"{API}/reviews/").json()
    assert [review["item_id"] for review in remaining] == [kept]


def test_delete_review(client, auth):
    alice = auth("alice")
    client_id = create_client(client, alice).json()["id"]
    item_id = create_item(client, alice).json()["id"]
    review = client.post(
        f"{API}/reviews/",
        json={"client_id": client_id, "item_id": item_id, "rating": 5},
        headers=alice,
    ).json()
    assert client.get(f"{API}/reviews/{review['id']}").json() == review
    assert client.delete(f"{API}/reviews/{review['id']}", headers=auth("bob")).status_code == 403
    assert client.delete(f"{API}/reviews/{review['id']}", headers=alice).status_code == 200
    assert client.get(f"{API}/reviews/{review['id']}").status_code == 404


def test_state_persists_across_restart(db_path, auth):
    from fastapi.testclient import TestClient

    from food_delivery_api.app.main import create_app

    with TestClient(create_app(db_path)) as first:
        created = create_client(first, auth("alice")).json()
    with TestClient(create_app(db_path)) as second:
        assert second.get(f"{API}/clients/{created['id']}").json() == created
        assert create_item(second, auth("alice")).json()["id"] == created["id"] + 1


def test_ids_beyond_storage_range(client, auth):
    alice = auth("alice")
    assert client.get(f"{API}/items/{2**64 - 1}").json()["kind"] == "NotFound"
    assert client.get(f"{API}/orders/client/{2**63}").status_code == 404
    assert client.delete(f"{API}/reviews/{2**63}", headers=alice).status_code == 404
    response = client.post(
        f"{API}/orders/",
        json={"client_id": 2**63, "items": [{"item_id": 0, "quantity": 1}]},
        headers=alice,
    )
    assert response.status_code == 404
    assert response.json()["kind"] == "NotFound"


@pytest.mark.parametrize("path", [f"/items/{2**64}", "/clients/-1", f"/orders/{2**64}/confirm-delivery"])
def test_ids_outside_u64_are_invalid(client, auth, path):
    if path.endswith("confirm-delivery"):
        response = client.post(f"{API}{path}", headers=auth("alice"))
    else:
        response = client.get(f"{API}{path}")
    assert response.status_code == 422
    assert response.json()["kind"] == "InvalidPayload"


def test_price_outside_u64_is_invalid(client, auth):
    response = create_item(client, auth("alice"), price=2**70)
    assert response.status_code == 422
    assert "price" in response.json()["detail"]
    assert client.get(f"{API}/items/").status_code == 404


def test_order_total_beyond_u64(client, auth):
    alice = auth("alice")
    client_id = create_client(client, alice).json()["id"]
    item_id = create_item(client, alice, price=2**64 - 1).json()["id"]
    response = client.post(
        f"{API}/orders/",
        json={"client_id": client_id, "items": [{"item_id": item_id, "quantity": 2}]},
        headers=alice,
    )
    assert response.status_code == 422
    assert response.json()["kind"] == "InvalidPayload"
    assert client.get(f"{API}/orders/").status_code == 404


def test_corrupt_counter_during_request_is_server_error(db_path, auth):
    from fastapi.testclient import TestClient

    from food_delivery_api.app.main import create_app

    with TestClient(create_app(db_path), raise_server_exceptions=False) as tc:
        assert create_client(tc, auth("alice")).status_code == 201
        tc.app.state.store.db.execute("UPDATE id_counter SET value = 'garbage' WHERE id = 0")

        response = create_client(tc, auth("alice"))
        assert response.status_code == 500
        assert not response.headers["content-type"].startswith("application/json")
        assert len(tc.get(f"{API}/clients/").json()) == 1
