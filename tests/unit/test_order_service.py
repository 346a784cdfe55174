"""
Unit tests for order drafts and submission
"""
import pytest
from sqlalchemy.exc import OperationalError

from supplier_portal.database.models import Order
from supplier_portal.services import order_service, product_service
from supplier_portal.utils.exceptions import NotFoundError, ValidationError


class TestDraftAmount:

    def test_first_draft_creates_order(self, db_session, tenant, tenant_product):
        product, order = order_service.set_draft_amount(db_session, tenant.id, tenant_product.id, 5)

        assert product.id == tenant_product.id
        assert order.amount == 5
        assert order.last_submitted_amount is None

    def test_second_draft_updates_same_order(self, db_session, tenant, tenant_product):
        order_service.set_draft_amount(db_session, tenant.id, tenant_product.id, 5)
        order_service.set_draft_amount(db_session, tenant.id, tenant_product.id, 7.5)

        orders = db_session.query(Order).filter(Order.tenant_id == tenant.id).all()
        assert len(orders) == 1
        assert orders[0].amount == 7.5

    def test_negative_amount_rejected(self, db_session, tenant, tenant_product):
        with pytest.raises(ValidationError):
            order_service.set_draft_amount(db_session, tenant.id, tenant_product.id, -1)

    def test_other_tenants_product_not_found(self, db_session, other_tenant, tenant_product):
        with pytest.raises(NotFoundError):
            order_service.set_draft_amount(db_session, other_tenant.id, tenant_product.id, 1)

    def test_list_includes_products_without_order(self, db_session, tenant, tenant_product):
        second = product_service.create_product(db_session, tenant.id, "A0", "Apple", 1.0, "pc")
        order_service.set_draft_amount(db_session, tenant.id, tenant_product.id, 2)

        rows = order_service.list_tenant_orders(db_session, tenant.id)

        assert [(p.sku, o.amount if o else None) for p, o in rows] == [("A0", None), ("X1", 2)]
        assert second.id == rows[0][0].id


class TestSubmitAll:

    def test_submit_moves_drafts(self, db_session, tenant, tenant_product):
        second = product_service.create_product(db_session, tenant.id, "A0", "Apple", 1.0, "pc")
        order_service.set_draft_amount(db_session, tenant.id, tenant_product.id, 5)
        order_service.set_draft_amount(db_session, tenant.id, second.id, 0)

        result = order_service.submit_all(db_session, tenant.id)

        assert result["submitted"] == 1
        assert result["failed"] == 0
        assert [r["sku"] for r in result["results"]] == ["X1"]

        db_session.expire_all()
        submitted = db_session.query(Order).filter(Order.product_id == tenant_product.id).one()
        assert submitted.amount == 0
        assert submitted.last_submitted_amount == 5
        assert submitted.last_submitted_at is not None

        untouched = db_session.query(Order).filter(Order.product_id == second.id).one()
        assert untouched.last_submitted_amount is None

    def test_all_items_share_timestamp(self, db_session, tenant, tenant_product):
        second = product_service.create_product(db_session, tenant.id, "A0", "Apple", 1.0, "pc")
        order_service.set_draft_amount(db_session, tenant.id, tenant_product.id, 1)
        order_service.set_draft_amount(db_session, tenant.id, second.id, 2)

        order_service.submit_all(db_session, tenant.id)

        db_session.expire_all()
        stamps = {o.last_submitted_at for o in db_session.query(Order).all()}
        assert len(stamps) == 1

    def test_nothing_to_submit(self, db_session, tenant, tenant_product):
        result = order_service.submit_all(db_session, tenant.id)

        assert result["submitted"] == 0
        assert result["results"] == []

    def test_failed_item_reported_and_others_submitted(self, db_session, tenant, tenant_product, failing_commit):
        second = product_service.create_product(db_session, tenant.id, "A0", "Apple", 1.0, "pc")
        order_service.set_draft_amount(db_session, tenant.id, second.id, 2)
        order_service.set_draft_amount(db_session, tenant.id, tenant_product.id, 5)
        failing_commit(OperationalError("COMMIT", {}, Exception("database is locked")))

        result = order_service.submit_all(db_session, tenant.id)

        assert result["submitted"] == 1
        assert result["failed"] == 1
        failed, submitted = result["results"]
        assert (failed["sku"], failed["status"]) == ("A0", "failed")
        assert "database is locked" in failed["error"]
        assert (submitted["sku"], submitted["status"], submitted["error"]) == ("X1", "submitted", None)

        db_session.expire_all()
        kept = db_session.query(Order).filter(Order.product_id == second.id).one()
        assert kept.amount == 2
        assert kept.last_submitted_amount is None
        moved = db_session.query(Order).filter(Order.product_id == tenant_product.id).one()
        assert moved.last_submitted_amount == 5

    def test_submit_only_affects_caller(self, db_session, tenant, other_tenant, tenant_product):
        other_product = product_service.create_product(db_session, other_tenant.id, "X1", "Widget", 1.0, "pc")
        order_service.set_draft_amount(db_session, other_tenant.id, other_product.id, 9)

        order_service.submit_all(db_session, tenant.id)

        db_session.expire_all()
        other_order = db_session.query(Order).filter(Order.tenant_id == other_tenant.id).one()
        assert other_order.amount == 9
        assert other_order.last_submitted_amount is None


class TestOrdersByTenant:

    def test_submitted_only_filter(self, db_session, tenant, other_tenant, tenant_product):
        other_product = product_service.create_product(db_session, other_tenant.id, "Z9", "Zed", 1.0, "pc")
        order_service.set_draft_amount(db_session, tenant.id, tenant_product.id, 5)
        order_service.submit_all(db_session, tenant.id)
        order_service.set_draft_amount(db_session, other_tenant.id, other_product.id, 1)

        everything = order_service.orders_by_tenant(db_session)
        submitted = order_service.orders_by_tenant(db_session, submitted_only=True)

        assert [g["tenant"].username for g in everything] == ["acme", "globex"]
        assert [g["tenant"].username for g in submitted] == ["acme"]
        product, order = submitted[0]["items"][0]
        assert product.sku == "X1"
        assert order.last_submitted_amount == 5
