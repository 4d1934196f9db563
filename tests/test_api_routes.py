from uuid import uuid4

import pytest

TEA = {"id": 1, "name": "Tea", "price": 20, "quantity": 2}


def _place(client, items=None, **extra):
    response = client.post("/api/orders", json={"items": items or [TEA], **extra})
    assert response.status_code == 201, response.text
    return response.json()["data"]


def _today_sales(client, headers):
    response = client.get("/api/daily-sales/today", headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["data"]


class TestOrderRoutes:
    def test_order_to_served_updates_todays_sales(self, client, chef_headers):
        before = _today_sales(client, chef_headers)

        order = _place(client)
        assert order["total"] == 40
        assert order["order_number"] == "001"
        assert order["status"] == "preparing"

        listed = client.get("/api/orders").json()["data"]
        assert [(o["id"], o["status"]) for o in listed] == [(order["id"], "preparing")]
        assert listed[0]["items"][0]["name"] == "Tea"

        response = client.put(f"/api/orders/{order['id']}", json={"status": "served"}, headers=chef_headers)
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "served"

        after = _today_sales(client, chef_headers)
        assert after["total_orders"] == before["total_orders"] + 1
        assert after["total_revenue"] == before["total_revenue"] + 40

        # Served orders leave the default queue
        assert client.get("/api/orders").json()["data"] == []
        served = client.get("/api/orders", params={"includeServed": "true"}).json()["data"]
        assert [o["id"] for o in served] == [order["id"]]

    def test_create_order_empty_items(self, client):
        """Test validation for empty items"""
        response = client.post("/api/orders", json={"items": []})
        assert response.status_code == 400

    def test_create_order_missing_items(self, client):
        response = client.post("/api/orders", json={"total": 10})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "validation_error"

    def test_invalid_status_filter(self, client):
        response = client.get("/api/orders", params={"status": "preparing,lost"})
        assert response.status_code == 400

    def test_status_filter(self, client, chef_headers):
        first = _place(client)
        second = _place(client)
        client.put(f"/api/orders/{second['id']}", json={"status": "ready"}, headers=chef_headers)

        ready = client.get("/api/orders", params={"status": "ready"}).json()["data"]
        assert [o["id"] for o in ready] == [second["id"]]
        both = client.get("/api/orders", params={"status": "preparing,ready"}).json()["data"]
        assert {o["id"] for o in both} == {first["id"], second["id"]}

    def test_served_status_filter_without_include_flag(self, client, chef_headers):
        order = _place(client)
        client.put(f"/api/orders/{order['id']}", json={"status": "served"}, headers=chef_headers)

        served = client.get("/api/orders", params={"status": "served"}).json()["data"]
        assert [o["id"] for o in served] == [order["id"]]

    def test_money_is_summed_exactly(self, client):
        order = _place(client, items=[
            {"id": 3, "name": "Mint", "price": 0.1, "quantity": 1},
            {"id": 4, "name": "Lemon", "price": 0.2, "quantity": 1},
        ])
        assert order["total"] == 0.3
        assert client.get(f"/api/orders/{order['id']}").json()["data"]["total"] == 0.3

    def test_get_order(self, client):
        order = _place(client)
        response = client.get(f"/api/orders/{order['id']}")
        assert response.status_code == 200
        assert response.json()["data"]["order_number"] == "001"

        assert client.get(f"/api/orders/{uuid4()}").status_code == 404

    def test_update_requires_staff(self, client):
        order = _place(client)
        response = client.put(f"/api/orders/{order['id']}", json={"status": "ready"})
        assert response.status_code == 401

        client_headers = {"Authorization": "Bearer bogus"}
        assert client.delete(f"/api/orders/{order['id']}", headers=client_headers).status_code == 401

    def test_update_validation(self, client, chef_headers):
        order = _place(client)
        url = f"/api/orders/{order['id']}"

        assert client.put(url, json={}, headers=chef_headers).status_code == 400
        assert client.put(url, json={"status": "eaten"}, headers=chef_headers).status_code == 400
        assert client.put(f"/api/orders/{uuid4()}", json={"status": "ready"}, headers=chef_headers).status_code == 404

    def test_edit_items_and_total(self, client, chef_headers):
        order = _place(client)
        items = [TEA, {"id": 2, "name": "Samosa", "price": 15, "quantity": 1}]

        response = client.put(f"/api/orders/{order['id']}", json={"items": items, "total": 55}, headers=chef_headers)

        data = response.json()["data"]
        assert data["total"] == 55
        assert len(data["items"]) == 2
        assert data["status"] == "preparing"
        assert data["updated_time"] is not None

    def test_saving_order_without_items_deletes_it(self, client, chef_headers):
        order = _place(client)

        response = client.put(f"/api/orders/{order['id']}", json={"items": []}, headers=chef_headers)

        assert response.status_code == 200
        assert response.json()["data"]["deleted"] is True
        assert client.get(f"/api/orders/{order['id']}").status_code == 404

    def test_delete_served_order_keeps_sales(self, client, chef_headers):
        order = _place(client)
        client.put(f"/api/orders/{order['id']}", json={"status": "served"}, headers=chef_headers)
        before = _today_sales(client, chef_headers)

        response = client.delete(f"/api/orders/{order['id']}", headers=chef_headers)

        assert response.status_code == 200
        assert _today_sales(client, chef_headers) == before
        assert client.delete(f"/api/orders/{order['id']}", headers=chef_headers).status_code == 404


class TestMenuRoutes:
    def _create(self, client, headers, **item):
        response = client.post("/api/menu", json=item, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    def test_reordering_changes_menu_order(self, client, admin_headers):
        tea = self._create(client, admin_headers, name="Tea", price=20, category="Hot Drinks")
        coffee = self._create(client, admin_headers, name="Coffee", price=30, category="Hot Drinks")
        samosa = self._create(client, admin_headers, name="Samosa", price=15, category="Snacks")

        names = [i["name"] for i in client.get("/api/menu").json()["data"]]
        assert names == ["Tea", "Coffee", "Samosa"]

        # Rows as the client holds them; the list order is the new order
        permuted = [{**item, "position": None} for item in (samosa, tea, coffee)]
        response = client.put("/api/menu/position", json={"menuItems": permuted}, headers=admin_headers)
        assert response.status_code == 200, response.text

        menu = client.get("/api/menu").json()["data"]
        assert [i["name"] for i in menu] == ["Samosa", "Tea", "Coffee"]
        assert [i["position"] for i in menu] == [0, 1, 2]

    def test_explicit_positions_are_kept(self, client, admin_headers):
        tea = self._create(client, admin_headers, name="Tea", price=20)
        coffee = self._create(client, admin_headers, name="Coffee", price=30)

        client.put(
            "/api/menu/position",
            json={"menuItems": [{"id": tea["id"], "position": 7}, {"id": coffee["id"], "position": 3}]},
            headers=admin_headers,
        )

        assert [i["name"] for i in client.get("/api/menu").json()["data"]] == ["Coffee", "Tea"]

    def test_reorder_with_unknown_id_fails(self, client, admin_headers):
        tea = self._create(client, admin_headers, name="Tea", price=20)
        response = client.put(
            "/api/menu/position",
            json={"menuItems": [{"id": tea["id"]}, {"id": 999}]},
            headers=admin_headers,
        )
        assert response.status_code == 400

    def test_unavailable_items_are_hidden(self, client, admin_headers):
        tea = self._create(client, admin_headers, name="Tea", price=20)
        response = client.put(f"/api/menu/{tea['id']}", json={"is_available": False}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Tea"

        assert client.get("/api/menu").json()["data"] == []
        everything = client.get("/api/menu", params={"includeUnavailable": "true"}).json()["data"]
        assert [i["is_available"] for i in everything] == [False]

    def test_menu_item_crud(self, client, admin_headers):
        tea = self._create(client, admin_headers, name="Tea", price=20)
        url = f"/api/menu/{tea['id']}"

        assert client.get(url).json()["data"]["price"] == 20
        client.put(url, json={"price": 25.5}, headers=admin_headers)
        assert client.get(url).json()["data"]["price"] == 25.5

        assert client.delete(url, headers=admin_headers).status_code == 200
        assert client.get(url).status_code == 404
        assert client.put(url, json={"price": 1}, headers=admin_headers).status_code == 404

    def test_menu_writes_need_admin(self, client, chef_headers):
        assert client.post("/api/menu", json={"name": "Tea", "price": 20}).status_code == 401
        assert client.post("/api/menu", json={"name": "Tea", "price": 20}, headers=chef_headers).status_code == 403


class TestSalesRoutes:
    def test_reset_today(self, client, admin_headers):
        order = _place(client)
        client.put(f"/api/orders/{order['id']}", json={"status": "served"}, headers=admin_headers)
        assert _today_sales(client, admin_headers)["total_orders"] == 1

        response = client.post("/api/daily-sales/reset", headers=admin_headers)

        assert response.status_code == 200
        today = _today_sales(client, admin_headers)
        assert today["total_orders"] == 0
        assert today["total_revenue"] == 0

    def test_reset_needs_admin(self, client, chef_headers):
        assert client.post("/api/daily-sales/reset", headers=chef_headers).status_code == 403

    def test_sales_report(self, client, admin_headers):
        order = _place(client, items=[TEA, {"id": 2, "name": "Samosa", "price": 15, "quantity": 1}])
        client.put(f"/api/orders/{order['id']}", json={"status": "served"}, headers=admin_headers)
        today = _today_sales(client, admin_headers)["sale_date"]

        response = client.get("/api/sales-report", params={"startDate": today, "endDate": today}, headers=admin_headers)

        assert response.status_code == 200, response.text
        report = response.json()["data"]
        assert report["total_orders"] == 1
        assert report["total_revenue"] == 55
        assert report["daily_sales"] == [{"date": today, "orders": 1, "revenue": 55}]
        assert [i["name"] for i in report["top_items"]] == ["Tea", "Samosa"]

        listed = client.get("/api/daily-sales", headers=admin_headers).json()["data"]
        assert [row["sale_date"] for row in listed] == [today]

    def test_sales_report_needs_dates(self, client, admin_headers):
        assert client.get("/api/sales-report", headers=admin_headers).status_code == 400
        response = client.get(
            "/api/sales-report",
            params={"startDate": "2026-10-18", "endDate": "2026-10-01"},
            headers=admin_headers,
        )
        assert response.status_code == 400


class TestInventoryRoutes:
    def test_adjust_stock_clamps_at_zero(self, client, admin_headers):
        tea = client.post("/api/menu", json={"name": "Tea", "price": 20}, headers=admin_headers).json()["data"]
        client.post("/api/inventory", json=[{"id": tea["id"], "stock_quantity": 3}], headers=admin_headers)

        response = client.patch(
            "/api/inventory",
            json=[{"id": tea["id"], "quantity": 10, "action": "subtract"}],
            headers=admin_headers,
        )

        assert response.status_code == 200, response.text
        inventory = client.get("/api/inventory", headers=admin_headers).json()["data"]
        assert inventory[0]["stock_quantity"] == 0

    def test_invalid_action(self, client, admin_headers):
        response = client.patch("/api/inventory", json=[{"id": 1, "quantity": 1, "action": "steal"}], headers=admin_headers)
        assert response.status_code == 400

    def test_raw_materials_and_links(self, client, admin_headers):
        tea = client.post("/api/menu", json={"name": "Tea", "price": 20}, headers=admin_headers).json()["data"]
        milk = client.post(
            "/api/raw-materials",
            json={"name": "Milk", "unit_type": "litre", "current_stock": 10, "min_stock_level": 2},
            headers=admin_headers,
        ).json()["data"]

        response = client.put(
            f"/api/inventory/{tea['id']}/raw-materials",
            json=[{"raw_material_id": milk["id"], "quantity_required": 0.2}],
            headers=admin_headers,
        )
        assert response.status_code == 200, response.text
        link = response.json()["data"]["raw_materials"][0]
        assert link["raw_material"]["name"] == "Milk"
        assert link["quantity_required"] == 0.2

        response = client.patch("/api/raw-materials", json=[{"id": milk["id"], "current_stock": 1}], headers=admin_headers)
        assert response.json()["data"][0]["is_low_stock"] is True

        assert client.delete(f"/api/raw-materials/{milk['id']}", headers=admin_headers).status_code == 200
        assert client.get("/api/raw-materials", headers=admin_headers).json()["data"] == []


class TestUserRoutes:
    def test_roles_are_seeded(self, client, admin_headers):
        roles = client.get("/api/user-roles", headers=admin_headers).json()["data"]
        assert {r["role_name"] for r in roles} == {"admin", "chef", "user"}

    def test_user_lifecycle(self, client, admin_headers, chef_headers):
        users = client.get("/api/users", headers=admin_headers).json()["data"]
        chef = next(u for u in users if u["username"] == "chef")
        assert chef["role_name"] == "chef"

        response = client.put(f"/api/users/{chef['id']}", json={"username": "head-chef"}, headers=admin_headers)
        assert response.json()["data"]["username"] == "head-chef"

        # Sessions survive a rename; the old password still works
        assert client.get("/api/auth/me", headers=chef_headers).json()["data"]["username"] == "head-chef"

        assert client.delete(f"/api/users/{chef['id']}", headers=admin_headers).status_code == 200
        assert client.get("/api/auth/me", headers=chef_headers).status_code == 401

    def test_duplicate_username(self, client, admin_headers):
        roles = client.get("/api/user-roles", headers=admin_headers).json()["data"]
        payload = {"username": "admin", "password": "secret", "role_id": roles[0]["id"]}
        assert client.post("/api/users", json=payload, headers=admin_headers).status_code == 400

    def test_chef_cannot_manage_users(self, client, chef_headers):
        assert client.get("/api/users", headers=chef_headers).status_code == 403

    def test_bad_login(self, client):
        response = client.post("/api/auth/login", json={"username": "admin", "password": "wrong"})
        assert response.status_code == 401

    def test_logout(self, client, admin_headers):
        assert client.post("/api/auth/logout", headers=admin_headers).status_code == 200
        assert client.get("/api/auth/me", headers=admin_headers).status_code == 401


class TestSettingsRoutes:
    def test_timezone_setting(self, client, admin_headers):
        response = client.put("/api/settings/timezone", json={"timezone": "pst"}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["setting_value"] == "PST"

        settings = client.get("/api/settings").json()["data"]
        assert settings == [{"setting_name": "timezone", "setting_value": "PST"}]

    @pytest.mark.parametrize("code", ["Mars", ""])
    def test_unknown_timezone(self, client, admin_headers, code):
        response = client.put("/api/settings/timezone", json={"timezone": code}, headers=admin_headers)
        assert response.status_code == 400
