import pytest
from sqlalchemy.exc import IntegrityError

from tool_directory.crud import crud_category, crud_tool
from tool_directory.models import Tool
from tool_directory.schemas.enums import PricingModel
from tool_directory.schemas.tool import ToolCreate
from tool_directory.services import tool_service


@pytest.mark.parametrize("name,slug", [
    ("HubSpot Marketing!", "hubspot-marketing"),
    ("SalesForce CRM", "salesforce-crm"),
    ("  Zendesk   Support  ", "zendesk-support"),
    ("A -- B", "a-b"),
    ("Café & Co", "caf-co"),
    ("!!!", "tool"),
])
def test_generate_slug(name, slug):
    assert tool_service.generate_slug(name) == slug


def test_generate_slug_is_deterministic():
    assert tool_service.generate_slug("HubSpot Marketing!") == tool_service.generate_slug("HubSpot Marketing!")


def test_unique_slug_appends_counter(db, vendor, make_tool):
    make_tool(vendor, name="Acme", slug="acme")
    make_tool(vendor, name="Acme Two", slug="acme-1")
    assert tool_service.unique_slug(db, "Acme") == "acme-2"
    assert tool_service.unique_slug(db, "Fresh Name") == "fresh-name"


def test_labels():
    assert tool_service.format_pricing_model(PricingModel.CUSTOM) == "Custom Pricing"
    assert tool_service.format_pricing_model("freemium") == "Freemium"
    assert tool_service.format_pricing_model("bartering") == "Unknown"
    assert tool_service.format_integration_difficulty(1) == "Very Easy"
    assert tool_service.format_integration_difficulty(9) == "Unknown"


@pytest.mark.parametrize("total,limit,pages", [(0, 20, 0), (1, 20, 1), (20, 20, 1), (21, 20, 2), (7, 3, 3)])
def test_build_pagination(total, limit, pages):
    pagination = tool_service.build_pagination(total, page=1, limit=limit)
    assert pagination.total == total
    assert pagination.total_pages == pages


def acme_submission(db):
    return ToolCreate(
        name="Acme",
        description="Acme does useful things",
        website_url="https://acme.example.com",
        primary_category_id=crud_category.get_category_by_slug(db, "sales").id,
    )


def test_submit_tool_retries_when_slug_taken_concurrently(db, vendor, make_tool, monkeypatch):
    make_tool(vendor, name="Acme", slug="acme")
    vendor_id = vendor.id
    real_slug_exists = crud_tool.slug_exists
    calls = {"n": 0}

    def stale_on_first_check(db, slug, exclude_id=None):
        calls["n"] += 1
        if calls["n"] == 1:
            return False
        return real_slug_exists(db, slug, exclude_id=exclude_id)

    monkeypatch.setattr(crud_tool, "slug_exists", stale_on_first_check)
    tool = tool_service.submit_tool(db, acme_submission(db), vendor_id=vendor_id)
    assert tool.slug == "acme-1"
    assert db.query(Tool).count() == 2


def test_submit_tool_gives_up_after_repeated_collisions(db, vendor, make_tool, monkeypatch):
    make_tool(vendor, name="Acme", slug="acme")
    vendor_id = vendor.id
    monkeypatch.setattr(crud_tool, "slug_exists", lambda db, slug, exclude_id=None: False)

    with pytest.raises(IntegrityError):
        tool_service.submit_tool(db, acme_submission(db), vendor_id=vendor_id)
    assert db.query(Tool).count() == 1
