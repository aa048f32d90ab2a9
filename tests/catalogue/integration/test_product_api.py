"""Product endpoints through the composed application."""

import base64
from datetime import UTC, datetime, timedelta

import pytest
from catalogue.product.product import Product
from protean.utils.globals import current_domain

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"


@pytest.fixture
def category(admin_headers, client):
    response = client.post("/category/create-category", json={"name": "Lighting"}, headers=admin_headers)
    return response.json()["category"]


def _payload(category_id, **overrides):
    payload = {
        "name": "Desk Lamp",
        "description": "Adjustable LED desk lamp",
        "price": 24.5,
        "quantity": 10,
        "category_id": category_id,
        "shipping": True,
    }
    payload.update(overrides)
    return payload


def _seed(category_id, count, start=datetime(2024, 1, 1, tzinfo=UTC)):
    repo = current_domain.repository_for(Product)
    for i in range(1, count + 1):
        repo.add(
            Product.create(
                name=f"Bulb {i:02d}",
                description="Warm white bulb",
                price=float(i),
                quantity=1,
                category_id=category_id,
                created_at=start + timedelta(minutes=i),
            )
        )


class TestCreateProductEndpoint:
    def test_create(self, client, admin_headers, category):
        response = client.post("/product/create-product", json=_payload(category["id"]), headers=admin_headers)
        assert response.status_code == 201

        product = current_domain.repository_for(Product).get(response.json()["product_id"])
        assert product.name == "Desk Lamp"

    def test_create_with_photo_and_fetch_it(self, client, admin_headers, category):
        photo = {"data": base64.b64encode(PNG_BYTES).decode(), "content_type": "image/png"}
        response = client.post(
            "/product/create-product", json=_payload(category["id"], photo=photo), headers=admin_headers
        )
        product_id = response.json()["product_id"]

        photo_response = client.get(f"/product/product-photo/{product_id}")
        assert photo_response.status_code == 200
        assert photo_response.content == PNG_BYTES
        assert photo_response.headers["content-type"] == "image/png"

    def test_oversized_photo_rejected(self, client, admin_headers, category):
        photo = {"data": base64.b64encode(b"x" * (1024 * 1024 + 1)).decode(), "content_type": "image/jpeg"}
        response = client.post(
            "/product/create-product", json=_payload(category["id"], photo=photo), headers=admin_headers
        )
        assert response.status_code == 400
        assert current_domain.repository_for(Product).count() == 0

    def test_duplicate_name_conflict(self, client, admin_headers, category):
        client.post("/product/create-product", json=_payload(category["id"]), headers=admin_headers)
        response = client.post(
            "/product/create-product", json=_payload(category["id"], name="desk lamp"), headers=admin_headers
        )
        assert response.status_code == 409

    @pytest.mark.parametrize(
        "overrides",
        [{"price": "cheap"}, {"price": -1}, {"quantity": 1.5}, {"quantity": -1}, {"description": ""}, {"name": " "}],
    )
    def test_invalid_input(self, client, admin_headers, category, overrides):
        response = client.post(
            "/product/create-product", json=_payload(category["id"], **overrides), headers=admin_headers
        )
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_requires_admin(self, client, buyer_headers, category):
        response = client.post("/product/create-product", json=_payload(category["id"]), headers=buyer_headers)
        assert response.status_code == 401


class TestUpdateAndDeleteEndpoints:
    def _create(self, client, headers, category_id, **overrides):
        response = client.post("/product/create-product", json=_payload(category_id, **overrides), headers=headers)
        return response.json()["product_id"]

    def test_update(self, client, admin_headers, category):
        product_id = self._create(client, admin_headers, category["id"])

        response = client.put(
            f"/product/update-product/{product_id}",
            json=_payload(category["id"], name="Floor Lamp", price=80),
            headers=admin_headers,
        )
        assert response.status_code == 200
        product = response.json()["product"]
        assert product["slug"] == "floor-lamp"
        assert product["category"]["name"] == "Lighting"

    def test_update_missing(self, client, admin_headers, category):
        response = client.put("/product/update-product/missing", json=_payload(category["id"]), headers=admin_headers)
        assert response.status_code == 404

    def test_update_conflict(self, client, admin_headers, category):
        self._create(client, admin_headers, category["id"], name="Desk Lamp")
        other_id = self._create(client, admin_headers, category["id"], name="Floor Lamp")

        response = client.put(
            f"/product/update-product/{other_id}", json=_payload(category["id"], name="DESK LAMP"), headers=admin_headers
        )
        assert response.status_code == 409

    def test_delete(self, client, admin_headers, category):
        product_id = self._create(client, admin_headers, category["id"])

        response = client.delete(f"/product/delete-product/{product_id}", headers=admin_headers)
        assert response.status_code == 200
        assert client.get("/product/get-product/desk-lamp").status_code == 404

    def test_delete_missing(self, client, admin_headers):
        assert client.delete("/product/delete-product/missing", headers=admin_headers).status_code == 404


class TestReadEndpoints:
    def test_list_and_single(self, client, admin_headers, category):
        client.post("/product/create-product", json=_payload(category["id"]), headers=admin_headers)

        listing = client.get("/product/get-product").json()
        assert listing["total"] == 1
        assert "photo" not in listing["products"][0]

        single = client.get("/product/get-product/desk-lamp")
        assert single.status_code == 200
        assert single.json()["product"]["category"]["slug"] == "lighting"

    def test_single_missing(self, client):
        assert client.get("/product/get-product/nothing").status_code == 404

    def test_photo_missing(self, client, admin_headers, category):
        response = client.post("/product/create-product", json=_payload(category["id"]), headers=admin_headers)
        product_id = response.json()["product_id"]
        assert client.get(f"/product/product-photo/{product_id}").status_code == 404

    def test_count(self, client, category):
        _seed(category["id"], 4)
        assert client.get("/product/product-count").json()["total"] == 4

    def test_search(self, client, category):
        _seed(category["id"], 2)
        response = client.get("/product/search/WARM")
        assert response.json()["total"] == 2

    def test_related(self, client, category):
        _seed(category["id"], 5)
        products = current_domain.repository_for(Product).find()

        response = client.get(f"/product/related-product/{products[0].id}/{category['id']}")
        related = response.json()["products"]
        assert len(related) == 3
        assert products[0].id not in [p["id"] for p in related]

    def test_products_in_category(self, client, category):
        _seed(category["id"], 2)
        response = client.get("/product/product-category/lighting")
        assert response.status_code == 200
        assert response.json()["category"]["name"] == "Lighting"
        assert len(response.json()["products"]) == 2

    def test_products_in_unknown_category(self, client):
        assert client.get("/product/product-category/nothing").status_code == 404


class TestListingEndpoints:
    def test_twelve_products_filtered_by_category(self, client, category):
        _seed(category["id"], 12)

        response = client.post("/product/product-filters", json={"checked": [category["id"]], "page": 1})
        assert response.status_code == 200

        body = response.json()
        assert len(body["products"]) == 6
        assert body["total"] == 12
        assert body["pages"] == 2
        assert [p["name"] for p in body["products"]] == [f"Bulb {i:02d}" for i in range(12, 6, -1)]

    def test_price_range(self, client, category):
        _seed(category["id"], 12)
        body = client.post("/product/product-filters", json={"radio": [10, 10]}).json()
        assert [p["price"] for p in body["products"]] == [10.0]

    def test_invalid_radio(self, client, category):
        response = client.post("/product/product-filters", json={"radio": [1, 2, 3]})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid radio field"

    def test_product_list_pages(self, client, category):
        _seed(category["id"], 8)

        first = client.get("/product/product-list/1").json()
        second = client.get("/product/product-list/2").json()
        assert len(first["products"]) == 6
        assert len(second["products"]) == 2
        assert client.get("/product/product-list/3").json()["products"] == []

    def test_product_list_rejects_non_positive_page(self, client):
        assert client.get("/product/product-list/0").status_code == 400
        assert client.get("/product/product-list/-2").status_code == 400
