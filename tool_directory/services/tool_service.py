import logging
import math
import re
from datetime import datetime, timezone
from typing import List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tool_directory.crud import crud_category, crud_tool
from tool_directory.models import tool as tool_model
from tool_directory.schemas import tool as tool_schema
from tool_directory.schemas.category import Category, UseCase
from tool_directory.schemas.enums import PricingModel

logger = logging.getLogger(__name__)

PRICING_LABELS = {
    PricingModel.FREE: "Free",
    PricingModel.FREEMIUM: "Freemium",
    PricingModel.PAID: "Paid",
    PricingModel.CUSTOM: "Custom Pricing",
}

SLUG_ATTEMPTS = 3

DIFFICULTY_LABELS = {
    1: "Very Easy",
    2: "Easy",
    3: "Moderate",
    4: "Hard",
    5: "Very Hard",
}


def generate_slug(name: str) -> str:
    """Convert a tool name to a URL-friendly slug."""
    slug = name.lower().strip()
    slug = re.sub(r'[^a-z0-9\s-]', '', slug)
    slug = re.sub(r'\s+', '-', slug)
    slug = re.sub(r'-+', '-', slug)
    return slug.strip('-') or "tool"


def unique_slug(db: Session, name: str, exclude_id: str = None) -> str:
    base_slug = generate_slug(name)
    slug = base_slug
    counter = 1
    while crud_tool.slug_exists(db, slug, exclude_id=exclude_id):
        slug = f"{base_slug}-{counter}"
        counter += 1
    return slug


def format_pricing_model(pricing_model) -> str:
    try:
        return PRICING_LABELS[PricingModel(pricing_model)]
    except ValueError:
        return "Unknown"


def format_integration_difficulty(difficulty: int) -> str:
    return DIFFICULTY_LABELS.get(difficulty, "Unknown")


def build_pagination(total: int, page: int, limit: int) -> tool_schema.Pagination:
    return tool_schema.Pagination(
        page=page,
        limit=limit,
        total=total,
        total_pages=math.ceil(total / limit) if total > 0 else 0,
    )


def list_tools(
    db: Session,
    filters: tool_schema.ToolFilters,
    page: int = 1,
    limit: int = 20
) -> Tuple[List[tool_model.Tool], tool_schema.Pagination]:
    """
    Return one page of approved tools matching ``filters`` plus pagination
    metadata. Pages past the end yield an empty list.
    """
    skip = (page - 1) * limit
    items, total = crud_tool.get_tools(db, filters, skip=skip, limit=limit)
    return items, build_pagination(total, page, limit)


def search_tools(
    db: Session,
    filters: tool_schema.ToolFilters,
    limit: int = 20,
    suggestion_limit: int = 5
) -> tool_schema.SearchResult:
    """
    Free-text search over approved tools. ``filters.search`` holds the
    query; category and use case filters narrow it the same way as the
    listing does.
    """
    items, total = crud_tool.get_tools(db, filters, skip=0, limit=limit)
    return tool_schema.SearchResult(
        tools=[tool_schema.Tool.model_validate(tool) for tool in items],
        suggestions=crud_tool.get_name_suggestions(db, filters.search, limit=suggestion_limit),
        total_results=total,
    )


def _resolve_use_cases(db: Session, use_case_ids: List[str]):
    unique_ids = list(dict.fromkeys(use_case_ids))
    use_cases = crud_category.get_use_cases_by_ids(db, unique_ids)
    if len(use_cases) != len(unique_ids):
        found = {use_case.id for use_case in use_cases}
        missing = [use_case_id for use_case_id in unique_ids if use_case_id not in found]
        raise ValueError(f"Unknown use case: {', '.join(missing)}")
    return use_cases


def submit_tool(db: Session, tool: tool_schema.ToolCreate, vendor_id: str) -> tool_model.Tool:
    """
    Store a vendor submission. The tool starts unapproved and unfeatured.
    Raises ValueError when the category or a use case does not exist.
    """
    if not crud_category.get_category(db, tool.primary_category_id):
        raise ValueError("Unknown category")
    use_cases = _resolve_use_cases(db, tool.use_case_ids)

    attempt = 1
    while True:
        slug = unique_slug(db, tool.name)
        try:
            db_tool = crud_tool.create_tool(db, tool, vendor_id=vendor_id, slug=slug, use_cases=use_cases)
            break
        except IntegrityError:
            # Another submission took the slug between the check and the insert
            db.rollback()
            if attempt >= SLUG_ATTEMPTS:
                raise
            logger.warning(f"[Tools] Slug {slug} taken concurrently, retrying ({attempt}/{SLUG_ATTEMPTS})")
            attempt += 1
    logger.info(f"[Tools] Tool submitted: id={db_tool.id} slug={db_tool.slug} vendor={vendor_id}")
    return db_tool


def update_tool(db: Session, db_tool: tool_model.Tool, tool_in: tool_schema.ToolUpdate) -> tool_model.Tool:
    update_data = tool_in.model_dump(exclude_unset=True)

    # Required columns cannot be cleared
    for field in ("name", "description", "website_url", "primary_category_id",
                  "pricing_model", "integration_difficulty"):
        if field in update_data and update_data[field] is None:
            raise ValueError(f"{field} cannot be empty")

    if "primary_category_id" in update_data:
        if not crud_category.get_category(db, update_data["primary_category_id"]):
            raise ValueError("Unknown category")

    if "use_case_ids" in update_data:
        update_data["use_cases"] = _resolve_use_cases(db, update_data.pop("use_case_ids") or [])

    for field in ("website_url", "logo_url"):
        if update_data.get(field) is not None:
            update_data[field] = str(update_data[field])

    if update_data.get("pricing_model") is not None:
        update_data["pricing_model"] = update_data["pricing_model"].value

    if update_data.get("name") and update_data["name"] != db_tool.name:
        update_data["slug"] = unique_slug(db, update_data["name"], exclude_id=db_tool.id)

    update_data["updated_at"] = datetime.now(timezone.utc)
    return crud_tool.update_tool(db, db_tool, update_data)


def set_approval(db: Session, db_tool: tool_model.Tool, approval: tool_schema.ToolApproval) -> tool_model.Tool:
    update_data = {"approved": approval.approved, "updated_at": datetime.now(timezone.utc)}
    if approval.featured is not None:
        update_data["featured"] = approval.featured
    db_tool = crud_tool.update_tool(db, db_tool, update_data)
    logger.info(f"[Tools] Approval changed: id={db_tool.id} approved={db_tool.approved} featured={db_tool.featured}")
    return db_tool


def get_vendor_tools(db: Session, vendor_id: str) -> tool_schema.VendorTools:
    tools = crud_tool.get_tools_by_vendor(db, vendor_id)
    approved = sum(1 for tool in tools if tool.approved)
    return tool_schema.VendorTools(
        tools=[tool_schema.Tool.model_validate(tool) for tool in tools],
        total_tools=len(tools),
        approved_tools=approved,
        pending_tools=len(tools) - approved,
    )


def build_tool_detail(db_tool: tool_model.Tool) -> tool_schema.ToolDetail:
    base = tool_schema.Tool.model_validate(db_tool).model_dump()
    return tool_schema.ToolDetail(
        **base,
        category=Category.model_validate(db_tool.primary_category),
        use_cases=[UseCase.model_validate(use_case) for use_case in db_tool.use_cases],
        vendor=tool_schema.VendorSummary.model_validate(db_tool.vendor),
        pricing_label=format_pricing_model(db_tool.pricing_model),
        difficulty_label=format_integration_difficulty(db_tool.integration_difficulty),
    )
