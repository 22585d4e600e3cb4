def test_list_products(client):
    r = client.get("/api/products")
    assert r.status_code == 200
    products = r.json()
    assert len(products) == 6
    assert [p["id"] for p in products] == sorted(p["id"] for p in products)
    burger = products[0]
    assert burger == {
        "id": 1,
        "name": "Stadium Burger",
        "description": "Classic beef burger with cheese and lettuce",
        "price": "8.50",
        "category": "food",
        "imageUrl": "https://placehold.co/600x400/orange/white?text=Burger",
        "isAvailable": True,
    }
    assert {p["category"] for p in products} == {"food", "drink", "snack"}


def test_trailing_slash_variant(client):
    assert client.get("/api/products/").status_code == 200


def test_get_product(client):
    assert client.get("/api/products/5").json()["name"] == "Beer"


def test_get_missing_product_is_404(client):
    r = client.get("/api/products/999")
    assert r.status_code == 404
    assert r.json() == {"message": "Product not found"}


def test_list_sections(client):
    sections = client.get("/api/sections").json()
    assert [s["name"] for s in sections] == [
        "Section A (Home)",
        "Section B (Away)",
        "Section C (VIP)",
        "Section D (Family)",
    ]
    assert sections[3]["isDeliveryAvailable"] is False


def test_patch_section(client):
    r = client.patch("/api/sections/4", json={"isDeliveryAvailable": True})
    assert r.status_code == 200
    assert r.json() == {"id": 4, "name": "Section D (Family)", "isDeliveryAvailable": True}
    assert client.get("/api/sections").json()[3]["isDeliveryAvailable"] is True


def test_patch_missing_section_is_404(client):
    r = client.patch("/api/sections/42", json={"isDeliveryAvailable": True})
    assert r.status_code == 404
    assert r.json() == {"message": "Section not found"}


def test_patch_section_requires_flag(client):
    r = client.patch("/api/sections/1", json={})
    assert r.status_code == 400
    assert r.json()["field"] == "isDeliveryAvailable"
