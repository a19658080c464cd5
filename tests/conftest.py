import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tool_directory.core.database import Base
from tool_directory.core.dependencies import get_db
from tool_directory.core.security import create_access_token
from tool_directory.crud import crud_category
from tool_directory.initial_data import seed_reference_data
from tool_directory.main import app
from tool_directory.models import Tool
from tool_directory.schemas.auth import RegisterRequest
from tool_directory.schemas.enums import Role
from tool_directory.services import user_service

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    seed_reference_data(session)
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_account(db):
    def _make_account(email, role=Role.USER, password="secret123", full_name="Test User"):
        return user_service.create_user(
            db,
            RegisterRequest(email=email, password=password, full_name=full_name),
            role=role,
        )
    return _make_account


@pytest.fixture
def auth_headers():
    def _auth_headers(profile):
        token = create_access_token({"sub": profile.id})
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers


@pytest.fixture
def vendor(make_account):
    return make_account("vendor@example.com", role=Role.VENDOR, full_name="Vera Vendor")


@pytest.fixture
def admin(make_account):
    return make_account("admin@example.com", role=Role.ADMIN, full_name="Ada Admin")


@pytest.fixture
def make_tool(db):
    counter = {"n": 0}

    def _make_tool(vendor, name=None, category="sales", use_cases=(), approved=True, featured=False, **fields):
        counter["n"] += 1
        name = name or f"Tool {counter['n']}"
        tool = Tool(
            name=name,
            slug=fields.pop("slug", name.lower().replace(" ", "-")),
            description=fields.pop("description", f"{name} does useful things"),
            website_url=fields.pop("website_url", "https://example.com"),
            primary_category_id=crud_category.get_category_by_slug(db, category).id,
            vendor_id=vendor.id,
            approved=approved,
            featured=featured,
            **fields,
        )
        for slug in use_cases:
            tool.use_cases.append(crud_category.get_use_case_by_slug(db, slug))
        db.add(tool)
        db.commit()
        db.refresh(tool)
        return tool
    return _make_tool
