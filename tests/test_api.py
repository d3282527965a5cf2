"""
End to end tests through the HTTP layer: routing, auth guards, the error
envelope and localized messages.
"""

import pytest

from app.controllers.product_controller import product_controller
from app.core.exceptions import QueryTimeoutError
from app.services.catalog_service import catalog_service

API = "/api/v1"


@pytest.fixture
def laptop(electronics_tree, make_product):
    return make_product(
        "Office Laptop",
        electronics_tree["laptops"],
        price="200.00",
        stock=4,
        attributes={"ram": "16GB", "screen_size": 14},
        supplier_price="150.00",
    )


class TestHealth:

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "is up and running" in response.json()["message"]


class TestErrorEnvelope:

    def test_not_found_shape(self, client):
        response = client.get(f"{API}/categories/missing")

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "message": "Category not found",
            "key": "category.categoryNotFound",
        }
        assert response.headers["content-language"] == "en"

    def test_arabic_via_query_parameter(self, client):
        response = client.get(f"{API}/categories/missing?lang=ar")

        assert response.status_code == 404
        assert response.json()["message"] == "الفئة غير موجودة"
        assert response.headers["content-language"] == "ar"

    def test_arabic_via_accept_language(self, client):
        response = client.get(
            f"{API}/categories/missing", headers={"Accept-Language": "ar,en;q=0.5"}
        )

        assert response.json()["key"] == "category.categoryNotFound"
        assert response.headers["content-language"] == "ar"

    def test_request_validation_is_400_with_field_errors(self, client, admin_headers):
        response = client.post(f"{API}/categories", json={}, headers=admin_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert "name" in body["errors"]

    def test_unknown_route(self, client):
        response = client.get(f"{API}/nothing-here")

        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_query_timeout_is_503(self, client, monkeypatch):
        def slow_list(db, filters):
            raise QueryTimeoutError()

        monkeypatch.setattr(catalog_service, "list_products", slow_list)

        response = client.get(f"{API}/products")

        assert response.status_code == 503
        assert response.json() == {
            "success": False,
            "message": "The request took too long to complete, please try again",
            "key": "common.queryTimeout",
        }


class TestAuth:

    def test_register_login_and_me(self, client):
        payload = {
            "phone_number": "+971 50 123 4567",
            "password": "long-enough",
            "first_name": "Sara",
            "last_name": "Ali",
            "email": "Sara@Example.com",
        }
        response = client.post(f"{API}/auth/register", json=payload)
        assert response.status_code == 201
        assert response.json()["user"]["phone_number"] == "+971501234567"
        assert response.json()["user"]["role"] == "customer"

        response = client.post(
            f"{API}/auth/login",
            json={"phone_number": "+971501234567", "password": "long-enough"},
        )
        assert response.status_code == 200
        token = response.json()["access_token"]

        response = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["email"] == "sara@example.com"

    def test_duplicate_phone(self, client, customer):
        response = client.post(
            f"{API}/auth/register",
            json={
                "phone_number": customer.phone_number,
                "password": "long-enough",
                "first_name": "A",
                "last_name": "B",
            },
        )

        assert response.status_code == 409
        assert response.json()["key"] == "auth.phoneAlreadyRegistered"

    def test_wrong_password(self, client, customer):
        response = client.post(
            f"{API}/auth/login",
            json={"phone_number": customer.phone_number, "password": "wrong-password"},
        )

        assert response.status_code == 401
        assert response.json()["key"] == "auth.invalidPhoneOrPassword"

    def test_deactivated_account(self, client, db, customer):
        customer.is_active = False
        db.commit()

        response = client.post(
            f"{API}/auth/login",
            json={"phone_number": customer.phone_number, "password": "secret-password"},
        )

        assert response.status_code == 403

    def test_missing_token(self, client):
        response = client.get(f"{API}/auth/me")

        assert response.status_code == 401
        assert response.json()["key"] == "auth.unauthorized"

    def test_garbage_token(self, client):
        response = client.get(f"{API}/auth/me", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401
        assert response.json()["key"] == "auth.invalidToken"

    def test_customer_cannot_use_admin_routes(self, client, customer_headers):
        response = client.post(
            f"{API}/categories", json={"name": "Nope"}, headers=customer_headers
        )

        assert response.status_code == 403
        assert response.json()["key"] == "auth.adminAccessRequired"


class TestCategoryRoutes:

    def test_admin_creates_and_customer_reads(self, client, admin_headers):
        response = client.post(
            f"{API}/categories", json={"name": "Shoes"}, headers=admin_headers
        )
        assert response.status_code == 201
        parent_id = response.json()["id"]

        response = client.post(
            f"{API}/categories",
            json={"name": "Running", "parent_id": parent_id},
            headers=admin_headers,
        )
        assert response.status_code == 201

        response = client.get(f"{API}/categories/path/shoes/running")
        assert response.status_code == 200
        assert [c["slug"] for c in response.json()["breadcrumb"]] == ["shoes", "running"]
        assert response.json()["is_leaf"] is True

        response = client.get(f"{API}/categories/tree")
        assert response.json()[0]["children"][0]["name"] == "Running"

    def test_circular_move_is_conflict(self, client, admin_headers, electronics_tree):
        response = client.put(
            f"{API}/categories/{electronics_tree['electronics'].id}",
            json={"parent_id": electronics_tree["gaming"].id},
            headers=admin_headers,
        )

        assert response.status_code == 409
        assert response.json()["key"] == "category.circularReference"

    def test_deactivate_reports_count(self, client, admin_headers, electronics_tree):
        response = client.patch(
            f"{API}/categories/{electronics_tree['electronics'].id}/deactivate",
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["data"] == {"updated": 3}
        assert client.get(f"{API}/categories/roots").json()[0]["name"] == "Home"

    def test_breadcrumb_and_filters(self, client, make_category):
        root = make_category(
            "Electronics",
            attributes=[
                {"key": "brand", "label": "Brand", "type": "select",
                 "options": [{"value": "Acme"}]},
            ],
        )
        child = make_category("Laptops", parent=root)

        crumbs = client.get(f"{API}/categories/{child.id}/breadcrumb").json()
        filters = client.get(f"{API}/categories/{child.id}/filters").json()

        assert [c["name"] for c in crumbs] == ["Electronics", "Laptops"]
        assert [f["key"] for f in filters["filters"]] == ["brand"]

    def test_attribute_definitions_admin(self, client, admin_headers, make_category):
        category = make_category("Books")
        url = f"{API}/admin/category-attributes/{category.id}"
        definition = {"key": "author", "label": "Author", "type": "select"}

        response = client.put(
            url, json={"attributes": [definition, definition]}, headers=admin_headers
        )
        assert response.status_code == 409
        assert response.json()["message"] == "Attribute key 'author' is defined more than once"

        response = client.put(url, json={"attributes": [definition]}, headers=admin_headers)
        assert response.status_code == 200
        assert client.get(url, headers=admin_headers).json()["attributes"][0]["key"] == "author"


class TestProductRoutes:

    def test_list_clamps_pagination(self, client, laptop):
        response = client.get(f"{API}/products?page=0&limit=500")

        assert response.status_code == 200
        assert response.json()["pagination"] == {
            "total": 1,
            "page": 1,
            "pages": 1,
            "limit": 100,
        }

    def test_attribute_query_parameters(self, client, laptop):
        hit = client.get(f"{API}/products?attr.ram=8GB,16GB&attr.screen_size.min=13")
        miss = client.get(f"{API}/products?attr.screen_size.max=13")

        assert [p["name"] for p in hit.json()["items"]] == ["Office Laptop"]
        assert miss.json()["items"] == []

    def test_bad_attribute_range(self, client, laptop):
        response = client.get(f"{API}/products?attr.screen_size.min=abc")

        assert response.status_code == 400
        assert "attr.screen_size.min" in response.json()["errors"]

    def test_customer_view_hides_supplier_data(self, client, laptop):
        response = client.get(f"{API}/products/{laptop.slug}")

        assert response.status_code == 200
        body = response.json()
        assert body["views"] == 1
        assert "supplier_price" not in body

    def test_admin_view_shows_supplier_data(self, client, admin_headers, laptop):
        response = client.get(f"{API}/products/admin/{laptop.id}", headers=admin_headers)

        assert response.json()["supplier_price"] == 150
        assert response.json()["profit_margin"] == 50

    def test_category_path_listing(self, client, laptop):
        response = client.get(f"{API}/products/category/electronics")

        assert response.status_code == 200
        assert response.json()["category"]["slug"] == "electronics"
        assert [p["name"] for p in response.json()["items"]] == ["Office Laptop"]

    def test_autocomplete(self, client, laptop):
        response = client.get(f"{API}/products/autocomplete?q=off")

        assert [s["name"] for s in response.json()["suggestions"]] == ["Office Laptop"]

    def test_admin_create_rejects_low_compare_at_price(self, client, admin_headers, electronics_tree):
        response = client.post(
            f"{API}/products",
            json={
                "name": "Tablet",
                "description": "A tablet",
                "price": 300,
                "compare_at_price": 250,
                "category_id": electronics_tree["laptops"].id,
            },
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["key"] == "product.invalidCompareAtPrice"

    def test_admin_create_and_adjust_stock(self, client, admin_headers, electronics_tree):
        response = client.post(
            f"{API}/products",
            json={
                "name": "Tablet",
                "description": "A tablet",
                "price": 300,
                "category_id": electronics_tree["laptops"].id,
                "sku": "tab-01",
            },
            headers=admin_headers,
        )
        assert response.status_code == 201
        product = response.json()
        assert product["sku"] == "TAB-01"
        assert product["in_stock"] is False

        url = f"{API}/products/{product['id']}/stock"
        response = client.patch(url, json={"delta": 5}, headers=admin_headers)
        assert response.json()["stock_quantity"] == 5
        assert response.json()["in_stock"] is True

        response = client.patch(url, json={"delta": -6}, headers=admin_headers)
        assert response.status_code == 409

    def test_admin_delete_detaches_cart_lines(
        self, client, admin_headers, customer_headers, laptop
    ):
        client.post(
            f"{API}/cart/items",
            json={"product_id": laptop.id, "quantity": 1},
            headers=customer_headers,
        )

        response = client.delete(f"{API}/products/{laptop.id}", headers=admin_headers)

        assert response.status_code == 200
        assert client.get(f"{API}/cart", headers=customer_headers).json()["items"] == []

    def test_slug_exhaustion_hides_details(
        self, client, admin_headers, electronics_tree, monkeypatch
    ):
        monkeypatch.setattr(
            product_controller, "slug_exists", lambda db, slug, exclude_id=None: True
        )

        response = client.post(
            f"{API}/products",
            json={
                "name": "Tablet",
                "description": "A tablet",
                "price": 300,
                "category_id": electronics_tree["laptops"].id,
            },
            headers=admin_headers,
        )

        assert response.status_code == 500
        assert response.json()["key"] == "common.serverError"


class TestShoppingFlow:

    def test_cart_checkout_and_cancel(self, client, customer_headers, address, laptop):
        response = client.post(
            f"{API}/cart/items",
            json={"product_id": laptop.id, "quantity": 2},
            headers=customer_headers,
        )
        assert response.status_code == 200
        assert response.json()["subtotal"] == 400

        response = client.post(
            f"{API}/cart/coupon", json={"code": "SAVE10"}, headers=customer_headers
        )
        assert response.json()["discount"] == 40

        summary = client.get(f"{API}/orders/checkout-summary", headers=customer_headers)
        assert summary.json()["total"] == 410

        response = client.post(
            f"{API}/orders", json={"address_id": address.id}, headers=customer_headers
        )
        assert response.status_code == 201
        order = response.json()
        assert order["total"] == 410
        assert order["shipping_address"]["city"] == "Dubai"

        listing = client.get(f"{API}/orders", headers=customer_headers).json()
        assert [o["id"] for o in listing["items"]] == [order["id"]]

        response = client.post(
            f"{API}/orders/{order['id']}/cancel", headers=customer_headers
        )
        assert response.json()["status"] == "cancelled"

    def test_invalid_coupon_message(self, client, customer_headers):
        response = client.post(
            f"{API}/cart/coupon?lang=ar", json={"code": "NOPE"}, headers=customer_headers
        )

        assert response.status_code == 400
        assert response.json()["key"] == "coupon.invalid"
        assert response.json()["message"] != "Invalid coupon code"

    def test_out_of_stock_message_names_product(self, client, db, customer_headers, address, laptop):
        client.post(
            f"{API}/cart/items",
            json={"product_id": laptop.id, "quantity": 1},
            headers=customer_headers,
        )
        laptop.stock_quantity = 0
        laptop.in_stock = False
        db.commit()

        response = client.post(
            f"{API}/orders", json={"address_id": address.id}, headers=customer_headers
        )

        assert response.status_code == 409
        assert response.json()["message"] == "Office Laptop is out of stock"

    def test_admin_status_update(self, client, admin_headers, customer_headers, address, laptop):
        client.post(
            f"{API}/cart/items",
            json={"product_id": laptop.id, "quantity": 1},
            headers=customer_headers,
        )
        order = client.post(
            f"{API}/orders", json={"address_id": address.id}, headers=customer_headers
        ).json()

        response = client.patch(
            f"{API}/orders/admin/{order['id']}/status",
            json={"status": "delivered"},
            headers=admin_headers,
        )
        assert response.status_code == 400

        response = client.patch(
            f"{API}/orders/admin/{order['id']}/status",
            json={"status": "confirmed"},
            headers=admin_headers,
        )
        assert response.json()["status"] == "confirmed"


class TestFavouritesAndAddresses:

    def test_favourites(self, client, customer_headers, laptop):
        url = f"{API}/favourites"

        client.post(f"{url}/{laptop.id}", headers=customer_headers)
        response = client.post(f"{url}/{laptop.id}", headers=customer_headers)
        assert response.json()["count"] == 1

        check = client.get(f"{url}/check/{laptop.id}", headers=customer_headers).json()
        assert check["is_favourite"] is True

        client.delete(f"{url}/{laptop.id}", headers=customer_headers)
        assert client.get(f"{url}/count", headers=customer_headers).json() == {"count": 0}

    def test_favourite_unknown_product(self, client, customer_headers):
        response = client.post(f"{API}/favourites/missing", headers=customer_headers)

        assert response.status_code == 404

    def test_first_address_becomes_default(self, client, customer_headers):
        payload = {
            "name": "Home",
            "phone": "+971500000001",
            "city": "Dubai",
            "area": "Marina",
            "street": "Street 1",
        }
        first = client.post(f"{API}/addresses", json=payload, headers=customer_headers).json()
        second = client.post(
            f"{API}/addresses", json={**payload, "name": "Work"}, headers=customer_headers
        ).json()
        assert first["is_default"] is True
        assert second["is_default"] is False

        client.patch(f"{API}/addresses/{second['id']}/default", headers=customer_headers)
        addresses = client.get(f"{API}/addresses", headers=customer_headers).json()
        assert [(a["name"], a["is_default"]) for a in addresses] == [
            ("Work", True),
            ("Home", False),
        ]

        client.delete(f"{API}/addresses/{second['id']}", headers=customer_headers)
        addresses = client.get(f"{API}/addresses", headers=customer_headers).json()
        assert [(a["name"], a["is_default"]) for a in addresses] == [("Home", True)]


class TestAdminUsers:

    def test_cursor_pages_through_users(self, client, admin_headers, customer, admin):
        first = client.get(f"{API}/admin/users?size=1", headers=admin_headers).json()

        assert len(first["items"]) == 1
        assert first["next_page"]

        second = client.get(
            f"{API}/admin/users",
            params={"size": 1, "cursor": first["next_page"]},
            headers=admin_headers,
        ).json()

        seen = {first["items"][0]["id"], second["items"][0]["id"]}
        assert seen == {customer.id, admin.id}
