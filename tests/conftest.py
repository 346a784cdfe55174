"""
Test configuration and fixtures for Supplier Portal
"""
import os
import tempfile

# Configuration is read once on first import, so the environment must be
# in place before anything from supplier_portal is imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "admin-password"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["MAX_PRODUCTS_PER_TENANT"] = "50"
os.environ["ALLOW_SIGNUP"] = "true"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="supplier-portal-logs-")

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from supplier_portal.api.main import app
from supplier_portal.database.connection import SessionLocal, drop_db, init_db
from supplier_portal.services import account_service, catalog_service, product_service


ADMIN_CREDENTIALS = {"username": "admin", "password": "admin-password"}


# =============================================================================
# Test Database Setup
# =============================================================================

@pytest.fixture(autouse=True)
def reset_database():
    """Fresh schema for every test"""
    drop_db()
    init_db()
    yield


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Database session for direct service calls"""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def failing_commit(db_session, monkeypatch):
    """Make the n-th commit of ``db_session`` raise the given error"""
    def arm(error: Exception, on_call: int = 1):
        real_commit = db_session.commit
        calls = []

        def commit():
            calls.append(None)
            if len(calls) == on_call:
                raise error
            real_commit()

        monkeypatch.setattr(db_session, "commit", commit)

    return arm


# =============================================================================
# FastAPI Test Client
# =============================================================================

@pytest.fixture(scope="function")
def client() -> Generator[TestClient, None, None]:
    """Test client; entering it runs startup, which creates the default admin"""
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# Test Data Fixtures
# =============================================================================

@pytest.fixture
def tenant_data():
    """Tenant signup payload"""
    return {
        "username": "acme",
        "password": "acme-password",
        "company_name": "Acme Corp",
        "contact_person": "Jane Doe"
    }


@pytest.fixture
def tenant(db_session, tenant_data):
    """Create tenant through the account service"""
    return account_service.create_tenant(db_session, **tenant_data)


@pytest.fixture
def other_tenant(db_session):
    """Second tenant for isolation checks"""
    return account_service.create_tenant(
        db_session,
        username="globex",
        password="globex-password",
        company_name="Globex",
        contact_person="Hank Scorpio"
    )


@pytest.fixture
def master_product(db_session):
    """Catalog entry"""
    return catalog_service.create_master_product(
        db_session, sku="M-100", name="Flour", price=2.5, unit="kg"
    )


@pytest.fixture
def tenant_product(db_session, tenant):
    """Product owned by the tenant fixture"""
    return product_service.create_product(
        db_session, tenant.id, sku="X1", name="Widget", price=9.99, unit="kg"
    )


# =============================================================================
# Auth helpers
# =============================================================================

def _login(client: TestClient, role: str, username: str, password: str) -> str:
    response = client.post(
        f"/api/v1/auth/{role}/login",
        json={"username": username, "password": password}
    )
    assert response.status_code == 200, response.text
    return response.json()["access_token"]


@pytest.fixture
def login_as(client):
    """Log in and return authorization headers"""
    def _headers(role: str, username: str, password: str) -> dict:
        return {"Authorization": f"Bearer {_login(client, role, username, password)}"}
    return _headers


@pytest.fixture
def admin_headers(client) -> dict:
    """Authorization headers for the default admin"""
    token = _login(client, "admin", **ADMIN_CREDENTIALS)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def tenant_headers(client, tenant, tenant_data) -> dict:
    """Authorization headers for the tenant fixture"""
    token = _login(client, "tenant", tenant_data["username"], tenant_data["password"])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_tenant_headers(client, other_tenant) -> dict:
    token = _login(client, "tenant", "globex", "globex-password")
    return {"Authorization": f"Bearer {token}"}
