from datetime import datetime, timedelta

from fastapi.testclient import TestClient

from stadium_orders.main import app
from stadium_orders.services import assembler

PICKUP = {"items": [{"productId": 1, "quantity": 2}], "type": "pickup"}
DELIVERY = {
    "items": [{"productId": 1, "quantity": 2}],
    "type": "delivery",
    "sectionId": 1,
    "row": "12",
    "seat": "5",
}


def test_create_pickup_order(client):
    r = client.post("/api/orders", json=PICKUP)
    assert r.status_code == 201
    body = r.json()
    assert body["totalAmount"] == "17.00"
    assert body["deliveryFee"] == "0.00"
    assert body["status"] == "pending"
    assert body["guestName"] == "Guest"
    assert body["section"] is None
    assert len(body["orderNumber"]) == 6
    assert body["orderNumber"] == body["orderNumber"].upper()
    item = body["items"][0]
    assert item["priceAtTime"] == "8.50"
    assert item["quantity"] == 2
    assert item["product"]["name"] == "Stadium Burger"
    assert item["product"]["imageUrl"].startswith("https://")

    fetched = client.get(f"/api/orders/{body['id']}").json()
    assert fetched["totalAmount"] == "17.00"
    assert fetched["orderNumber"] == body["orderNumber"]
    assert fetched["items"][0]["product"]["name"] == "Stadium Burger"


def test_created_at_is_rendered_with_offset(client):
    body = client.post("/api/orders", json=PICKUP).json()
    created = datetime.fromisoformat(body["createdAt"])
    assert created.utcoffset() == timedelta(0)


def test_create_delivery_order(client):
    r = client.post("/api/orders", json=DELIVERY)
    assert r.status_code == 201
    body = r.json()
    assert body["totalAmount"] == "19.50"
    assert body["deliveryFee"] == "2.50"
    fetched = client.get(f"/api/orders/{body['id']}").json()
    assert fetched["section"]["name"] == "Section A (Home)"
    assert (fetched["row"], fetched["seat"]) == ("12", "5")


def test_delivery_without_seat_is_400(client):
    payload = {k: v for k, v in DELIVERY.items() if k != "seat"}
    r = client.post("/api/orders", json=payload)
    assert r.status_code == 400
    assert "seat" in r.json()["message"]
    assert r.json()["field"] == "seat"


def test_empty_cart_is_400(client):
    r = client.post("/api/orders", json={"items": [], "type": "pickup"})
    assert r.status_code == 400
    assert r.json()["message"] == "Order must contain at least one item"


def test_unknown_product_is_400_and_nothing_saved(client):
    r = client.post("/api/orders", json={"items": [{"productId": 1, "quantity": 1}, {"productId": 404, "quantity": 1}], "type": "pickup"})
    assert r.status_code == 400
    assert r.json()["message"] == "Product 404 not found"
    assert client.get("/api/orders").json() == []


def test_non_positive_quantity_is_400(client):
    r = client.post("/api/orders", json={"items": [{"productId": 1, "quantity": 0}], "type": "pickup"})
    assert r.status_code == 400
    assert r.json()["field"] == "items.0.quantity"


def test_unknown_order_type_is_400(client):
    r = client.post("/api/orders", json={"items": [{"productId": 1, "quantity": 1}], "type": "drone"})
    assert r.status_code == 400
    assert r.json()["field"] == "type"


def test_get_missing_order_is_404(client):
    r = client.get("/api/orders/999")
    assert r.status_code == 404
    assert r.json() == {"message": "Order not found"}


def test_list_orders_filter_and_order(client):
    ids = [client.post("/api/orders", json=PICKUP).json()["id"] for _ in range(3)]
    client.patch(f"/api/orders/{ids[1]}/status", json={"status": "preparing"})
    client.patch(f"/api/orders/{ids[2]}/status", json={"status": "completed"})

    pending = client.get("/api/orders", params={"status": "pending"}).json()
    assert [o["id"] for o in pending] == [ids[0]]
    everything = client.get("/api/orders").json()
    assert [o["id"] for o in everything] == list(reversed(ids))
    assert [o["status"] for o in everything] == ["completed", "preparing", "pending"]


def test_list_orders_empty_status_means_no_filter(client):
    ids = [client.post("/api/orders", json=PICKUP).json()["id"] for _ in range(2)]
    r = client.get("/api/orders?status=")
    assert r.status_code == 200
    assert [o["id"] for o in r.json()] == list(reversed(ids))


def test_status_overwrite_without_validation(client):
    order_id = client.post("/api/orders", json=PICKUP).json()["id"]
    assert client.patch(f"/api/orders/{order_id}/status", json={"status": "preparing"}).status_code == 200
    r = client.patch(f"/api/orders/{order_id}/status", json={"status": "cancelled"})
    assert r.status_code == 200
    assert r.json()["status"] == "cancelled"
    assert client.get(f"/api/orders/{order_id}").json()["status"] == "cancelled"


def test_status_update_strict_mode_is_409(client, strict_transitions):
    order_id = client.post("/api/orders", json=PICKUP).json()["id"]
    client.patch(f"/api/orders/{order_id}/status", json={"status": "preparing"})
    r = client.patch(f"/api/orders/{order_id}/status", json={"status": "cancelled"})
    assert r.status_code == 409
    assert "preparing" in r.json()["message"]


def test_status_update_unknown_value_is_400(client):
    order_id = client.post("/api/orders", json=PICKUP).json()["id"]
    r = client.patch(f"/api/orders/{order_id}/status", json={"status": "eaten"})
    assert r.status_code == 400


def test_status_update_missing_order_is_404(client):
    r = client.patch("/api/orders/999/status", json={"status": "preparing"})
    assert r.status_code == 404
    assert r.json()["message"] == "Order 999 not found"


def test_section_toggle_does_not_touch_existing_orders(client):
    order_id = client.post("/api/orders", json=DELIVERY).json()["id"]
    assert client.patch("/api/sections/1", json={"isDeliveryAvailable": False}).status_code == 200
    fetched = client.get(f"/api/orders/{order_id}").json()
    assert fetched["sectionId"] == 1
    assert fetched["section"]["isDeliveryAvailable"] is False
    r = client.post("/api/orders", json=DELIVERY)
    assert r.status_code == 400


def test_unexpected_errors_are_500(client, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("database exploded")

    monkeypatch.setattr(assembler, "list_orders", boom)
    quiet = TestClient(app, raise_server_exceptions=False)
    r = quiet.get("/api/orders")
    assert r.status_code == 500
    assert r.json() == {"message": "Internal server error"}
