import pytest

from tool_directory.schemas.enums import PricingModel
from tool_directory.schemas.tool import ToolFilters
from tool_directory.services import tool_service


@pytest.fixture
def catalogue(vendor, make_tool):
    return {
        "crm": make_tool(vendor, name="SalesForce CRM", category="sales",
                         use_cases=("lead-generation", "crm-management"), featured=True,
                         description="Comprehensive CRM solution for sales teams",
                         pricing_model="paid", integration_difficulty=3),
        "hubspot": make_tool(vendor, name="HubSpot Marketing", category="marketing",
                             use_cases=("email-marketing", "social-media"),
                             description="All-in-one marketing automation platform",
                             pricing_model="freemium", integration_difficulty=2),
        "zendesk": make_tool(vendor, name="Zendesk Support", category="customer-success",
                             use_cases=("help-desk",),
                             description="Customer support and help desk software",
                             pricing_model="paid", integration_difficulty=2),
        "pending": make_tool(vendor, name="Pending CRM", category="sales",
                             use_cases=("crm-management",), approved=False, featured=True),
    }


def names(db, **filters):
    tools, _ = tool_service.list_tools(db, ToolFilters(**filters), page=1, limit=50)
    return {tool.name for tool in tools}


def test_only_approved_tools_are_listed(db, catalogue):
    assert names(db) == {"SalesForce CRM", "HubSpot Marketing", "Zendesk Support"}


@pytest.mark.parametrize("filters", [
    {},
    {"category": "sales"},
    {"use_cases": ["crm-management"]},
    {"search": "crm"},
    {"featured": True},
])
def test_unapproved_tools_never_listed(db, catalogue, filters):
    assert "Pending CRM" not in names(db, **filters)


def test_category_filter(db, catalogue):
    assert names(db, category="marketing") == {"HubSpot Marketing"}


def test_unknown_category_does_not_narrow(db, catalogue):
    assert names(db, category="no-such-category") == names(db)


def test_use_case_filter_matches_any_overlap(db, catalogue):
    assert names(db, use_cases=["help-desk", "social-media"]) == {"HubSpot Marketing", "Zendesk Support"}


def test_unknown_use_case_matches_nothing(db, catalogue):
    assert names(db, use_cases=["no-such-use-case"]) == set()


def test_search_is_case_insensitive_on_name_and_description(db, catalogue):
    assert names(db, search="HUBSPOT") == {"HubSpot Marketing"}
    assert names(db, search="help desk") == {"Zendesk Support"}


def test_search_treats_wildcards_literally(db, catalogue):
    assert names(db, search="%") == set()


def test_featured_filter(db, catalogue):
    assert names(db, featured=True) == {"SalesForce CRM"}


def test_pricing_and_difficulty_filters(db, catalogue):
    assert names(db, pricing_model=[PricingModel.FREEMIUM]) == {"HubSpot Marketing"}
    assert names(db, integration_difficulty=[2]) == {"HubSpot Marketing", "Zendesk Support"}


def test_filters_compose(db, catalogue):
    assert names(db, category="sales", search="crm", featured=True) == {"SalesForce CRM"}
    assert names(db, category="sales", use_cases=["help-desk"]) == set()


def test_filtering_is_idempotent(db, catalogue):
    filters = {"category": "sales", "search": "crm"}
    assert names(db, **filters) == names(db, **filters)


@pytest.mark.parametrize("limit", [1, 2, 3, 5])
def test_walking_pages_covers_total_exactly(db, vendor, make_tool, limit):
    for i in range(7):
        make_tool(vendor, name=f"Bulk {i}")

    _, first = tool_service.list_tools(db, ToolFilters(), page=1, limit=limit)
    seen = []
    for page in range(1, first.total_pages + 1):
        items, pagination = tool_service.list_tools(db, ToolFilters(), page=page, limit=limit)
        assert len(items) <= limit
        assert pagination.total == 7
        seen.extend(tool.id for tool in items)

    assert len(seen) == 7
    assert len(set(seen)) == 7


def test_page_past_the_end_is_empty(db, catalogue):
    items, pagination = tool_service.list_tools(db, ToolFilters(), page=10, limit=20)
    assert items == []
    assert pagination.total == 3
    assert pagination.total_pages == 1
