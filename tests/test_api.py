"""End-to-end tests through the HTTP routes."""

from datetime import datetime, timedelta, timezone

import pytest


def _parse_timestamp(value):
    # pydantic writes UTC as a trailing Z
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _create(client, path, payload):
    response = client.post(path, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def menu(client):
    return _create(client, "/menus/", {"name": "Lunch", "category": "Mains"})


@pytest.fixture
def table(client):
    return _create(client, "/tables/", {"table_number": 7, "number_of_guests": 4})


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


class TestFoods:
    def test_create_normalizes_price(self, client, menu):
        food = _create(
            client,
            "/foods/",
            {"name": "Pasta", "price": 2.005, "food_image": "pasta.png", "menu_id": menu["menu_id"]},
        )
        assert food["price"] == 2.01
        assert client.get(f"/foods/{food['food_id']}").json()["name"] == "Pasta"

    def test_create_accepts_very_large_price(self, client, menu):
        food = _create(
            client,
            "/foods/",
            {"name": "Caviar", "price": 1e30, "food_image": "c.png", "menu_id": menu["menu_id"]},
        )
        assert food["price"] == 1e30

    def test_create_requires_existing_menu(self, client):
        response = client.post(
            "/foods/",
            json={"name": "Pasta", "price": 5, "food_image": "p.png", "menu_id": "nope"},
        )
        assert response.status_code == 404

    def test_update_needs_a_field(self, client, menu):
        food = _create(
            client,
            "/foods/",
            {"name": "Soup", "price": 3, "food_image": "s.png", "menu_id": menu["menu_id"]},
        )
        assert client.patch(f"/foods/{food['food_id']}", json={}).status_code == 400

        response = client.patch(f"/foods/{food['food_id']}", json={"price": 3.456})
        assert response.status_code == 200
        assert response.json()["price"] == 3.46

    def test_listing_is_paginated(self, client, menu):
        for i in range(12):
            _create(
                client,
                "/foods/",
                {"name": f"Dish {i}", "price": i, "food_image": "d.png", "menu_id": menu["menu_id"]},
            )

        body = client.get("/foods/", params={"page": 2, "recordPerPage": 5}).json()
        assert body["page"] == 2
        assert body["record_per_page"] == 5
        assert body["total_count"] == 12
        assert [item["name"] for item in body["items"]] == [f"Dish {i}" for i in range(5, 10)]

    def test_bad_paging_values_fall_back(self, client, menu):
        body = client.get("/foods/", params={"page": "-5", "recordPerPage": "lots"}).json()
        assert body["page"] == 1
        assert body["record_per_page"] == 10


class TestMenus:
    def test_create_rejects_inverted_window(self, client):
        now = datetime.now(timezone.utc)
        response = client.post(
            "/menus/",
            json={
                "name": "Brunch",
                "category": "Breakfast",
                "start_date": now.isoformat(),
                "end_date": (now - timedelta(days=1)).isoformat(),
            },
        )
        assert response.status_code == 422

    def test_update_inside_window(self, client, menu):
        now = datetime.now(timezone.utc)
        response = client.patch(
            f"/menus/{menu['menu_id']}",
            json={
                "name": "Late Lunch",
                "start_date": (now - timedelta(hours=1)).isoformat(),
                "end_date": (now + timedelta(hours=1)).isoformat(),
            },
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Late Lunch"

    def test_update_outside_window_is_rejected(self, client, menu):
        now = datetime.now(timezone.utc)
        response = client.patch(
            f"/menus/{menu['menu_id']}",
            json={
                "start_date": (now + timedelta(days=1)).isoformat(),
                "end_date": (now + timedelta(days=2)).isoformat(),
            },
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Kindly retype the time"

    def test_update_without_dates_is_rejected(self, client, menu):
        response = client.patch(f"/menus/{menu['menu_id']}", json={"name": "X"})
        assert response.status_code == 400


class TestOrders:
    def test_create_with_unknown_table(self, client):
        response = client.post(
            "/orders/",
            json={"order_date": datetime.now(timezone.utc).isoformat(), "table_id": "ghost"},
        )
        assert response.status_code == 404

    def test_create_and_get(self, client, table):
        order = _create(
            client,
            "/orders/",
            {"order_date": datetime.now(timezone.utc).isoformat(), "table_id": table["table_id"]},
        )
        fetched = client.get(f"/orders/{order['order_id']}").json()
        assert fetched["table_id"] == table["table_id"]

        listing = client.get("/orders/", params={"table_id": table["table_id"]}).json()
        assert listing["total_count"] == 1

    def test_get_unknown_order(self, client):
        assert client.get("/orders/ghost").status_code == 404


class TestOrderItemsAndInvoices:
    def _foods(self, client, menu):
        burger = _create(
            client,
            "/foods/",
            {"name": "Burger", "price": 9.995, "food_image": "b.png", "menu_id": menu["menu_id"]},
        )
        fries = _create(
            client,
            "/foods/",
            {"name": "Fries", "price": 4.5, "food_image": "f.png", "menu_id": menu["menu_id"]},
        )
        return burger, fries

    def test_order_flow(self, client, menu, table):
        burger, fries = self._foods(client, menu)

        pack = _create(
            client,
            "/order-items/",
            {
                "table_id": table["table_id"],
                "order_items": [
                    {"quantity": "S", "unit_price": 9.995, "food_id": burger["food_id"]},
                    {"quantity": "M", "unit_price": 4.5, "food_id": fries["food_id"]},
                ],
            },
        )
        assert len(pack["order_item_ids"]) == 2

        views = client.get(f"/order-items/order/{pack['order_id']}").json()
        assert len(views) == 1
        assert views[0]["payment_due"] == pytest.approx(14.5)
        assert views[0]["total_count"] == 2
        assert views[0]["table_number"] == 7

        invoice = _create(client, "/invoices/", {"order_id": pack["order_id"]})
        assert invoice["payment_status"] == "PENDING"
        assert invoice["payment_method"] is None

        view = client.get(f"/invoices/{invoice['invoice_id']}").json()
        assert view["payment_method"] == "null"
        assert view["table_number"] == 7
        assert view["payment_due"] == pytest.approx(14.5)
        assert len(view["order_details"]) == 2

        updated = client.patch(
            f"/invoices/{invoice['invoice_id']}",
            json={"payment_method": "CASH", "payment_status": "PAID"},
        ).json()
        assert updated["payment_status"] == "PAID"

        paid = client.get("/invoices/", params={"payment_status": "PAID"}).json()
        assert paid["total_count"] == 1

    def test_pack_with_unknown_food_writes_nothing(self, client, table):
        response = client.post(
            "/order-items/",
            json={
                "table_id": table["table_id"],
                "order_items": [{"quantity": "L", "unit_price": 1, "food_id": "ghost"}],
            },
        )
        assert response.status_code == 404
        assert client.get("/orders/").json()["total_count"] == 0
        assert client.get("/order-items/").json() == []

    def test_pack_rejects_unknown_quantity(self, client, menu):
        burger, _ = self._foods(client, menu)
        response = client.post(
            "/order-items/",
            json={"order_items": [{"quantity": "XL", "unit_price": 1, "food_id": burger["food_id"]}]},
        )
        assert response.status_code == 422

    def test_update_order_item_normalizes_price(self, client, menu):
        burger, _ = self._foods(client, menu)
        pack = _create(
            client,
            "/order-items/",
            {"order_items": [{"quantity": "S", "unit_price": 1, "food_id": burger["food_id"]}]},
        )
        item_id = pack["order_item_ids"][0]

        response = client.patch(f"/order-items/{item_id}", json={"unit_price": 2.675})
        assert response.status_code == 200
        assert response.json()["unit_price"] == 2.68

    def test_items_of_empty_order(self, client):
        order = _create(client, "/orders/", {"order_date": datetime.now(timezone.utc).isoformat()})
        assert client.get(f"/order-items/order/{order['order_id']}").json() == []

    def test_invoice_needs_existing_order(self, client):
        response = client.post("/invoices/", json={"order_id": "ghost"})
        assert response.status_code == 404

    def test_invoice_due_one_day_after_creation(self, client):
        order = _create(client, "/orders/", {"order_date": datetime.now(timezone.utc).isoformat()})
        invoice = _create(client, "/invoices/", {"order_id": order["order_id"], "payment_method": "CARD"})

        created = _parse_timestamp(invoice["created_at"])
        due = _parse_timestamp(invoice["payment_due_date"])
        assert due - created == timedelta(days=1)

    def test_unknown_invoice(self, client):
        assert client.get("/invoices/ghost").status_code == 404


class TestUsers:
    def _payload(self, **overrides):
        payload = {
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@example.com",
            "phone": "555-0100",
        }
        payload.update(overrides)
        return payload

    def test_duplicate_email_is_rejected(self, client):
        _create(client, "/users/", self._payload())
        response = client.post("/users/", json=self._payload(phone="555-0199"))
        assert response.status_code == 409

    def test_duplicate_phone_is_rejected(self, client):
        _create(client, "/users/", self._payload())
        response = client.post("/users/", json=self._payload(email="other@example.com"))
        assert response.status_code == 409

    def test_huge_page_gives_empty_listing(self, client):
        _create(client, "/users/", self._payload())

        response = client.get("/users/", params={"page": str(10**19)})

        assert response.status_code == 200
        body = response.json()
        assert body["items"] == []
        assert body["total_count"] == 1

    def test_listing(self, client):
        for i in range(3):
            _create(client, "/users/", self._payload(email=f"u{i}@example.com", phone=f"555-010{i}"))

        body = client.get("/users/", params={"recordPerPage": 2}).json()
        assert body["total_count"] == 3
        assert len(body["items"]) == 2
