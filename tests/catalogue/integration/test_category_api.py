"""Category endpoints through the composed application."""

from catalogue.category.category import Category
from protean.utils.globals import current_domain


def _create(client, headers, name="Electronics"):
    return client.post("/category/create-category", json={"name": name}, headers=headers)


class TestCreateCategoryEndpoint:
    def test_create(self, client, admin_headers):
        response = _create(client, admin_headers)
        assert response.status_code == 201

        body = response.json()
        assert body["success"] is True
        assert body["category"]["slug"] == "electronics"
        assert current_domain.repository_for(Category).count() == 1

    def test_duplicate_is_conflict(self, client, admin_headers):
        _create(client, admin_headers, "Electronics")
        response = _create(client, admin_headers, "electronics")

        assert response.status_code == 409
        assert response.json() == {"success": False, "message": "Category already exists"}

    def test_empty_name_is_invalid(self, client, admin_headers):
        response = _create(client, admin_headers, "")
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_requires_admin(self, client, buyer_headers):
        assert _create(client, {}).status_code == 401
        assert _create(client, buyer_headers).status_code == 401
        assert current_domain.repository_for(Category).count() == 0


class TestReadCategoryEndpoints:
    def test_list(self, client, admin_headers):
        _create(client, admin_headers, "Books")
        _create(client, admin_headers, "Music")

        response = client.get("/category/get-category")
        assert response.status_code == 200
        names = {c["name"] for c in response.json()["category"]}
        assert names == {"Books", "Music"}

    def test_single_by_slug(self, client, admin_headers):
        _create(client, admin_headers, "Home & Garden")

        response = client.get("/category/single-category/home-garden")
        assert response.status_code == 200
        assert response.json()["category"]["name"] == "Home & Garden"

    def test_single_unknown_slug(self, client):
        response = client.get("/category/single-category/nothing-here")
        assert response.status_code == 404
        assert response.json()["success"] is False


class TestUpdateCategoryEndpoint:
    def test_rename(self, client, admin_headers):
        category_id = _create(client, admin_headers, "Books").json()["category"]["id"]

        response = client.put(f"/category/update-category/{category_id}", json={"name": "Comics"}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["category"]["slug"] == "comics"

    def test_rename_to_own_name(self, client, admin_headers):
        category_id = _create(client, admin_headers, "Books").json()["category"]["id"]

        response = client.put(f"/category/update-category/{category_id}", json={"name": "Books"}, headers=admin_headers)
        assert response.status_code == 200

    def test_rename_conflict(self, client, admin_headers):
        _create(client, admin_headers, "Books")
        music_id = _create(client, admin_headers, "Music").json()["category"]["id"]

        response = client.put(f"/category/update-category/{music_id}", json={"name": "BOOKS"}, headers=admin_headers)
        assert response.status_code == 409

    def test_rename_missing(self, client, admin_headers):
        response = client.put("/category/update-category/missing", json={"name": "Books"}, headers=admin_headers)
        assert response.status_code == 404


class TestDeleteCategoryEndpoint:
    def _product(self, client, headers, category_id):
        payload = {
            "name": "Paperback",
            "description": "A book",
            "price": 9.99,
            "quantity": 3,
            "category_id": category_id,
        }
        return client.post("/product/create-product", json=payload, headers=headers)

    def test_delete_unused(self, client, admin_headers):
        category_id = _create(client, admin_headers, "Books").json()["category"]["id"]

        response = client.delete(f"/category/delete-category/{category_id}", headers=admin_headers)
        assert response.status_code == 200
        assert client.get("/category/single-category/books").status_code == 404

    def test_delete_in_use_is_conflict(self, client, admin_headers):
        category_id = _create(client, admin_headers, "Books").json()["category"]["id"]
        assert self._product(client, admin_headers, category_id).status_code == 201

        response = client.delete(f"/category/delete-category/{category_id}", headers=admin_headers)
        assert response.status_code == 409
        assert response.json()["message"] == "Category still has products"
        assert client.get("/category/single-category/books").status_code == 200

    def test_delete_missing(self, client, admin_headers):
        response = client.delete("/category/delete-category/missing", headers=admin_headers)
        assert response.status_code == 404
