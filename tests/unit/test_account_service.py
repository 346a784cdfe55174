"""
Unit tests for account management
"""
import uuid

import pytest
from sqlalchemy import func

from supplier_portal.auth import Principal, Role
from supplier_portal.database.models import AdminAccount, Order, Product, Tenant
from supplier_portal.services import account_service, order_service, product_service
from supplier_portal.utils.exceptions import (
    AuthenticationError,
    ConflictError,
    InvalidTokenError,
    NotFoundError,
    ValidationError,
)


class TestTenantAccounts:

    def test_create_tenant_hashes_password(self, db_session, tenant, tenant_data):
        assert tenant.username == "acme"
        assert tenant.password_hash != tenant_data["password"]
        assert tenant.is_active is True

    def test_username_is_case_insensitive(self, db_session, tenant, tenant_data):
        with pytest.raises(ConflictError):
            account_service.create_tenant(db_session, **{**tenant_data, "username": "ACME "})

    def test_empty_username_rejected(self, db_session, tenant_data):
        with pytest.raises(ValidationError):
            account_service.create_tenant(db_session, **{**tenant_data, "username": "   "})

    def test_login_with_mixed_case_username(self, db_session, tenant, tenant_data):
        authenticated = account_service.authenticate_tenant(db_session, "AcMe", tenant_data["password"])

        assert authenticated.id == tenant.id
        assert authenticated.last_login_at is not None

    def test_wrong_password_and_unknown_user_same_error(self, db_session, tenant):
        with pytest.raises(AuthenticationError) as wrong_password:
            account_service.authenticate_tenant(db_session, "acme", "nope-nope")
        with pytest.raises(AuthenticationError) as unknown_user:
            account_service.authenticate_tenant(db_session, "nobody", "nope-nope")

        assert wrong_password.value.message == unknown_user.value.message == "Invalid credentials"

    def test_disabled_tenant_cannot_login(self, db_session, tenant, tenant_data):
        account_service.update_tenant(db_session, tenant.id, is_active=False)

        with pytest.raises(AuthenticationError):
            account_service.authenticate_tenant(db_session, "acme", tenant_data["password"])

    def test_tenant_cannot_use_admin_login(self, db_session, tenant, tenant_data):
        with pytest.raises(AuthenticationError):
            account_service.authenticate_admin(db_session, "acme", tenant_data["password"])

    def test_list_tenants_counts_products(self, db_session, tenant, other_tenant, tenant_product):
        counts = {t.username: count for t, count in account_service.list_tenants(db_session)}
        assert counts == {"acme": 1, "globex": 0}

    def test_get_missing_tenant(self, db_session):
        with pytest.raises(NotFoundError):
            account_service.get_tenant(db_session, uuid.uuid4())


class TestDeleteTenant:

    def test_delete_removes_products_and_orders(self, db_session, tenant, other_tenant, tenant_product):
        tenant_id = tenant.id
        order_service.set_draft_amount(db_session, tenant_id, tenant_product.id, 3)
        other_product = product_service.create_product(
            db_session, other_tenant.id, sku="X1", name="Widget", price=1.0, unit="pc"
        )

        removed = account_service.delete_tenant(db_session, tenant_id)

        assert removed == {"products_removed": 1, "orders_removed": 1}
        assert db_session.query(Tenant).filter(Tenant.id == tenant_id).count() == 0
        assert db_session.query(Product).filter(Product.tenant_id == tenant_id).count() == 0
        assert db_session.query(Order).filter(Order.tenant_id == tenant_id).count() == 0
        # Other tenants are untouched
        assert db_session.query(Product).filter(Product.id == other_product.id).count() == 1

    def test_delete_missing_tenant(self, db_session):
        with pytest.raises(NotFoundError):
            account_service.delete_tenant(db_session, uuid.uuid4())


class TestPasswords:

    def test_change_password(self, db_session, tenant, tenant_data):
        principal = Principal(role=Role.TENANT, account_id=tenant.id, username=tenant.username)

        account_service.change_password(db_session, principal, tenant_data["password"], "brand-new-pass")

        assert account_service.authenticate_tenant(db_session, "acme", "brand-new-pass")

    def test_change_password_requires_current(self, db_session, tenant):
        principal = Principal(role=Role.TENANT, account_id=tenant.id, username=tenant.username)

        with pytest.raises(ValidationError):
            account_service.change_password(db_session, principal, "wrong-current", "brand-new-pass")

    def test_reset_tenant_password(self, db_session, tenant):
        account_service.reset_tenant_password(db_session, tenant.id, "reset-by-admin")

        assert account_service.authenticate_tenant(db_session, "acme", "reset-by-admin")

    def test_load_account_of_deleted_tenant(self, db_session, tenant):
        principal = Principal(role=Role.TENANT, account_id=tenant.id, username=tenant.username)
        account_service.delete_tenant(db_session, tenant.id)

        with pytest.raises(InvalidTokenError):
            account_service.load_account(db_session, principal)


class TestDefaultAdmin:

    def test_ensure_default_admin_is_idempotent(self, db_session):
        assert account_service.ensure_default_admin(db_session, "root", "root-password") is True
        assert account_service.ensure_default_admin(db_session, "root", "other-password") is False

        assert db_session.query(func.count(AdminAccount.id)).filter(
            AdminAccount.username == "root"
        ).scalar() == 1
        # The first password stays in effect
        assert account_service.authenticate_admin(db_session, "root", "root-password")

    def test_stats(self, db_session, tenant, other_tenant, tenant_product, master_product):
        order_service.set_draft_amount(db_session, tenant.id, tenant_product.id, 2)

        stats = account_service.get_stats(db_session)

        assert stats == {
            "total_tenants": 2,
            "active_tenants": 2,
            "master_products": 1,
            "tenant_products": 1,
            "pending_orders": 1,
            "submitted_orders": 0,
        }
