"""
Integration tests for the master catalog and assignment endpoints
"""
from fastapi import status


def _create_master(client, headers, sku="M-100", name="Flour", price=2.5, unit="kg"):
    response = client.post(
        "/api/v1/catalog/products",
        json={"sku": sku, "name": name, "price": price, "unit": unit},
        headers=headers
    )
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


class TestCatalogCrud:

    def test_create_list_update(self, client, admin_headers):
        created = _create_master(client, admin_headers)

        listing = client.get("/api/v1/catalog/products", headers=admin_headers).json()
        assert [p["sku"] for p in listing] == ["M-100"]

        updated = client.put(
            f"/api/v1/catalog/products/{created['id']}",
            json={"price": 3.1},
            headers=admin_headers
        )
        assert updated.status_code == status.HTTP_200_OK
        assert updated.json()["price"] == 3.1
        assert updated.json()["name"] == "Flour"

    def test_duplicate_sku(self, client, admin_headers):
        _create_master(client, admin_headers)

        response = client.post(
            "/api/v1/catalog/products",
            json={"sku": "M-100", "name": "Again", "price": 1, "unit": "kg"},
            headers=admin_headers
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Master product with SKU 'M-100' already exists"}

    def test_negative_price_rejected(self, client, admin_headers):
        response = client.post(
            "/api/v1/catalog/products",
            json={"sku": "M-1", "name": "Bad", "price": -1, "unit": "kg"},
            headers=admin_headers
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_blank_name_and_unit_rejected(self, client, admin_headers):
        for field in ("name", "unit"):
            response = client.post(
                "/api/v1/catalog/products",
                json={"sku": "M-1", "name": "Flour", "price": 1, "unit": "kg", field: "   "},
                headers=admin_headers
            )

            assert response.status_code == status.HTTP_400_BAD_REQUEST
            assert response.json()["error"].startswith(field)

        assert client.get("/api/v1/catalog/products", headers=admin_headers).json() == []

    def test_infinite_price_rejected(self, client, admin_headers):
        response = client.post(
            "/api/v1/catalog/products",
            content='{"sku": "M-1", "name": "Flour", "price": Infinity, "unit": "kg"}',
            headers={**admin_headers, "Content-Type": "application/json"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete_master_removes_copies(self, client, admin_headers, tenant, tenant_headers):
        master = _create_master(client, admin_headers)
        client.post(
            "/api/v1/catalog/assign",
            json={"tenant_ids": [str(tenant.id)], "product_ids": [master["id"]]},
            headers=admin_headers
        )

        response = client.delete(f"/api/v1/catalog/products/{master['id']}", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["products_removed"] == 1
        assert client.get("/api/v1/products", headers=tenant_headers).json() == []

    def test_missing_master_product(self, client, admin_headers):
        response = client.get(
            "/api/v1/catalog/products/00000000-0000-0000-0000-000000000000",
            headers=admin_headers
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestAssignment:

    def test_assign_twice_skips_second_time(self, client, admin_headers, tenant, tenant_headers):
        master = _create_master(client, admin_headers)
        payload = {"tenant_ids": [str(tenant.id)], "product_ids": [master["id"]]}

        first = client.post("/api/v1/catalog/assign", json=payload, headers=admin_headers).json()
        second = client.post("/api/v1/catalog/assign", json=payload, headers=admin_headers).json()

        assert (first["assigned"], first["skipped"]) == (1, 0)
        assert (second["assigned"], second["skipped"]) == (0, 1)

        products = client.get("/api/v1/products", headers=tenant_headers).json()
        assert len(products) == 1
        assert products[0]["master_product_id"] == master["id"]

    def test_assignments_listing_and_unassign(self, client, admin_headers, tenant, other_tenant):
        master = _create_master(client, admin_headers)
        client.post(
            "/api/v1/catalog/assign",
            json={"tenant_ids": [str(tenant.id), str(other_tenant.id)], "product_ids": [master["id"]]},
            headers=admin_headers
        )

        assignments = client.get(
            f"/api/v1/catalog/products/{master['id']}/assignments", headers=admin_headers
        ).json()
        assert {a["tenant"]["username"] for a in assignments} == {"acme", "globex"}

        removed = client.post(
            "/api/v1/catalog/unassign",
            json={"tenant_ids": [str(tenant.id)], "product_ids": [master["id"]]},
            headers=admin_headers
        ).json()
        assert removed == {"removed": 1, "orders_removed": 0}

        remaining = client.get(
            f"/api/v1/catalog/products/{master['id']}/assignments", headers=admin_headers
        ).json()
        assert [a["tenant"]["username"] for a in remaining] == ["globex"]

    def test_empty_assignment_request(self, client, admin_headers):
        response = client.post(
            "/api/v1/catalog/assign",
            json={"tenant_ids": [], "product_ids": []},
            headers=admin_headers
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
