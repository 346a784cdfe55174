"""
Integration tests for tenant administration
"""
import uuid

from fastapi import status

from supplier_portal.database.models import Tenant


class TestTenantAdministration:

    def test_create_and_list_tenants(self, client, admin_headers, tenant_data):
        created = client.post("/api/v1/admin/tenants", json=tenant_data, headers=admin_headers)

        assert created.status_code == status.HTTP_201_CREATED
        body = created.json()
        assert body["username"] == "acme"
        assert body["product_count"] == 0
        assert "password" not in body and "password_hash" not in body

        listing = client.get("/api/v1/admin/tenants", headers=admin_headers)
        assert listing.status_code == status.HTTP_200_OK
        assert listing.json()["count"] == 1
        assert listing.json()["tenants"][0]["id"] == body["id"]

    def test_create_duplicate_username(self, client, admin_headers, tenant, tenant_data):
        response = client.post("/api/v1/admin/tenants", json=tenant_data, headers=admin_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Username already exists"}

    def test_get_tenant_not_found(self, client, admin_headers):
        response = client.get(f"/api/v1/admin/tenants/{uuid.uuid4()}", headers=admin_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "Tenant not found"}

    def test_invalid_tenant_id(self, client, admin_headers):
        response = client.get("/api/v1/admin/tenants/not-a-uuid", headers=admin_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_tenant(self, client, admin_headers, tenant):
        response = client.patch(
            f"/api/v1/admin/tenants/{tenant.id}",
            json={"company_name": "Acme Holdings", "is_active": False},
            headers=admin_headers
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["company_name"] == "Acme Holdings"
        assert response.json()["is_active"] is False

    def test_update_tenant_blank_company_rejected(self, client, admin_headers, tenant):
        response = client.patch(
            f"/api/v1/admin/tenants/{tenant.id}",
            json={"company_name": "   "},
            headers=admin_headers
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"].startswith("company_name")

    def test_reset_password(self, client, admin_headers, tenant):
        response = client.put(
            f"/api/v1/admin/tenants/{tenant.id}/password",
            json={"new_password": "fresh-password"},
            headers=admin_headers
        )
        assert response.status_code == status.HTTP_200_OK

        login = client.post(
            "/api/v1/auth/tenant/login",
            json={"username": "acme", "password": "fresh-password"}
        )
        assert login.status_code == status.HTTP_200_OK

    def test_delete_tenant_cascades(self, client, admin_headers, tenant_headers, tenant, db_session):
        tenant_id = tenant.id
        product = client.post(
            "/api/v1/products",
            json={"sku": "X1", "name": "Widget", "price": 9.99, "unit": "kg"},
            headers=tenant_headers
        ).json()
        client.put(f"/api/v1/orders/{product['id']}", json={"amount": 5}, headers=tenant_headers)

        response = client.delete(f"/api/v1/admin/tenants/{tenant_id}", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["products_removed"] == 1
        assert response.json()["orders_removed"] == 1
        assert db_session.query(Tenant).filter(Tenant.id == tenant_id).count() == 0

        stats = client.get("/api/v1/admin/stats", headers=admin_headers).json()
        assert stats["total_tenants"] == 0
        assert stats["tenant_products"] == 0
        assert stats["pending_orders"] == 0


class TestCrossTenantViews:

    def test_products_grouped_by_tenant(self, client, admin_headers, tenant, other_tenant, db_session):
        from supplier_portal.services import product_service

        product_service.create_product(db_session, tenant.id, "X1", "Widget", 9.99, "kg")
        product_service.create_product(db_session, other_tenant.id, "Y1", "Gizmo", 1.5, "pc")

        response = client.get("/api/v1/admin/products", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        groups = response.json()
        assert [g["tenant"]["username"] for g in groups] == ["acme", "globex"]
        assert groups[0]["products"][0]["sku"] == "X1"

    def test_orders_grouped_by_tenant(self, client, admin_headers, tenant_headers):
        product = client.post(
            "/api/v1/products",
            json={"sku": "X1", "name": "Widget", "price": 9.99, "unit": "kg"},
            headers=tenant_headers
        ).json()
        client.put(f"/api/v1/orders/{product['id']}", json={"amount": 5}, headers=tenant_headers)

        pending = client.get("/api/v1/admin/orders?submitted_only=true", headers=admin_headers)
        assert pending.json() == []

        client.post("/api/v1/orders/submit", headers=tenant_headers)

        submitted = client.get("/api/v1/admin/orders?submitted_only=true", headers=admin_headers).json()
        assert len(submitted) == 1
        item = submitted[0]["items"][0]
        assert item["sku"] == "X1"
        assert item["last_submitted_amount"] == 5
        assert item["draft_amount"] == 0
