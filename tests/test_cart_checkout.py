import pytest


def test_cart_requires_session(client):
    assert client.get("/api/cart").status_code == 401
    assert client.post("/api/cart", json={"productId": "p1"}).status_code == 401
    assert client.post("/api/checkout", json={}).status_code == 401
    assert client.get("/api/orders").status_code == 401


def test_adding_same_product_twice_merges_quantity(client, register, add_product):
    register(client)
    product = add_product()
    assert client.post("/api/cart", json={"productId": product.id, "quantity": 1}).json() == {"message": "Item added to cart"}
    client.post("/api/cart", json={"productId": product.id, "quantity": 2})

    cart = client.get("/api/cart").json()
    assert len(cart) == 1
    assert cart[0]["productId"] == product.id
    assert cart[0]["quantity"] == 3
    assert cart[0]["product"]["name"] == "Ultrabook 14"


def test_add_to_cart_validates_quantity(client, register):
    register(client)
    assert client.post("/api/cart", json={"productId": "p1", "quantity": 0}).status_code == 400
    assert client.post("/api/cart", json={"quantity": 1}).status_code == 400


def test_cart_line_for_deleted_product_has_null_product(client, register, add_product, storage):
    register(client)
    product = add_product()
    client.post("/api/cart", json={"productId": product.id})
    storage.delete_product(product.id)

    cart = client.get("/api/cart").json()
    assert cart == [{"productId": product.id, "quantity": 1, "product": None}]


def test_update_and_remove_cart_lines(client, register, add_product):
    register(client)
    first = add_product(name="First")
    second = add_product(name="Second")
    client.post("/api/cart", json={"productId": first.id})
    client.post("/api/cart", json={"productId": second.id})

    assert client.put(f"/api/cart/{first.id}", json={"quantity": 4}).json() == {"message": "Cart updated"}
    assert [l["quantity"] for l in client.get("/api/cart").json()] == [4, 1]

    client.put(f"/api/cart/{second.id}", json={"quantity": 0})
    assert [l["productId"] for l in client.get("/api/cart").json()] == [first.id]

    assert client.delete(f"/api/cart/{first.id}").json() == {"message": "Item removed from cart"}
    assert client.get("/api/cart").json() == []


def test_clear_cart(client, register, add_product):
    register(client)
    client.post("/api/cart", json={"productId": add_product().id})
    assert client.delete("/api/cart").json() == {"message": "Cart cleared"}
    assert client.get("/api/cart").json() == []


def test_carts_are_isolated_between_users(make_client, register, add_product):
    alice, bob = make_client(), make_client()
    register(alice, email="alice@techtreasure.io")
    register(bob, email="bob@techtreasure.io")
    alice.post("/api/cart", json={"productId": add_product().id})
    assert bob.get("/api/cart").json() == []


def test_checkout_with_empty_cart_is_rejected(client, register, checkout_payload, storage):
    user = register(client)
    resp = client.post("/api/checkout", json=checkout_payload)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Cart is empty"
    assert storage.get_orders_by_user_id(user["id"]) == []


def test_checkout_creates_order_from_cart_snapshot(client, register, add_product, checkout_payload):
    register(client)
    laptop = add_product(name="Laptop", price=1000)
    mouse = add_product(name="Mouse", price=25)
    client.post("/api/cart", json={"productId": laptop.id, "quantity": 1})
    client.post("/api/cart", json={"productId": mouse.id, "quantity": 2})
    snapshot = [(l["productId"], l["quantity"]) for l in client.get("/api/cart").json()]

    resp = client.post("/api/checkout", json=checkout_payload)
    assert resp.status_code == 201
    order = resp.json()
    assert [(i["productId"], i["quantity"]) for i in order["items"]] == snapshot
    assert [i["price"] for i in order["items"]] == [1000, 25]
    assert order["total"] == pytest.approx(1050)
    assert order["status"] == "pending"
    assert order["shippingAddress"]["zipCode"] == "62701"
    assert "paymentMethod" not in order

    assert client.get("/api/cart").json() == []
    orders = client.get("/api/orders").json()
    assert [o["id"] for o in orders] == [order["id"]]
    assert client.get(f"/api/orders/{order['id']}").json()["id"] == order["id"]


def test_checkout_trusts_submitted_prices_and_total(client, register, add_product, checkout_payload):
    register(client)
    product = add_product(price=500)
    client.post("/api/cart", json={"productId": product.id, "quantity": 2})

    checkout_payload["items"] = [{"productId": product.id, "quantity": 2, "price": 450}]
    checkout_payload["total"] = 981.99
    order = client.post("/api/checkout", json=checkout_payload).json()
    assert order["items"][0]["price"] == 450
    assert order["total"] == pytest.approx(981.99)


def test_checkout_validates_shipping_address(client, register, add_product):
    register(client)
    client.post("/api/cart", json={"productId": add_product().id})
    resp = client.post("/api/checkout", json={"shippingAddress": {"street": "1 Main St"}})
    assert resp.status_code == 400
    assert "shippingAddress.city" in resp.json()["detail"]
    assert len(client.get("/api/cart").json()) == 1


def test_other_users_order_is_not_found(make_client, register, add_product, checkout_payload):
    alice, bob = make_client(), make_client()
    register(alice, email="alice@techtreasure.io")
    register(bob, email="bob@techtreasure.io")
    alice.post("/api/cart", json={"productId": add_product().id})
    order = alice.post("/api/checkout", json=checkout_payload).json()

    resp = bob.get(f"/api/orders/{order['id']}")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Order not found"
    assert bob.get("/api/orders/no-such-order").json() == resp.json()
    assert bob.get("/api/orders").json() == []
