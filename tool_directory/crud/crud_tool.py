from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from tool_directory.crud import crud_category
from tool_directory.models import tool as tool_model, use_case as use_case_model
from tool_directory.schemas import tool as tool_schema

Tool = tool_model.Tool


def get_tool(db: Session, tool_id: str) -> Optional[tool_model.Tool]:
    return db.query(Tool).filter(Tool.id == tool_id).first()


def get_tool_by_slug(db: Session, slug: str) -> Optional[tool_model.Tool]:
    return db.query(Tool).filter(Tool.slug == slug).first()


def get_tool_by_id_or_slug(db: Session, id_or_slug: str) -> Optional[tool_model.Tool]:
    return get_tool(db, id_or_slug) or get_tool_by_slug(db, id_or_slug)


def filter_tools_query(db: Session, filters: tool_schema.ToolFilters):
    """
    Build the narrowed query for public listings.

    Steps are applied in order: approval, category, use cases, free-text
    search, featured flag, pricing model and integration difficulty.
    """
    query = db.query(Tool).filter(Tool.approved.is_(True))

    if filters.category:
        category = crud_category.get_category_by_slug(db, filters.category)
        # Unknown category slugs do not narrow the result
        if category:
            query = query.filter(Tool.primary_category_id == category.id)

    if filters.use_cases:
        use_case_ids = crud_category.get_use_case_ids_by_slugs(db, filters.use_cases)
        query = query.filter(Tool.use_cases.any(use_case_model.UseCase.id.in_(use_case_ids)))

    if filters.search:
        term = filters.search.lower()
        query = query.filter(
            or_(
                func.lower(Tool.name).contains(term, autoescape=True),
                func.lower(Tool.description).contains(term, autoescape=True),
            )
        )

    if filters.featured:
        query = query.filter(Tool.featured.is_(True))

    if filters.pricing_model:
        query = query.filter(Tool.pricing_model.in_([model.value for model in filters.pricing_model]))

    if filters.integration_difficulty:
        query = query.filter(Tool.integration_difficulty.in_(filters.integration_difficulty))

    return query


def get_tools(
    db: Session,
    filters: tool_schema.ToolFilters,
    skip: int = 0,
    limit: int = 20
) -> Tuple[List[tool_model.Tool], int]:
    query = filter_tools_query(db, filters)
    total = query.count()
    items = (
        query.options(selectinload(Tool.use_cases))
        .order_by(Tool.created_at.desc(), Tool.id)
        .offset(skip)
        .limit(limit)
        .all()
    )
    return items, total


def get_name_suggestions(db: Session, query: str, limit: int = 5) -> List[str]:
    """Names of approved tools containing ``query``, alphabetically."""
    rows = (
        db.query(Tool.name)
        .filter(Tool.approved.is_(True))
        .filter(func.lower(Tool.name).contains(query.lower(), autoescape=True))
        .distinct()
        .order_by(Tool.name)
        .limit(limit)
        .all()
    )
    return [row.name for row in rows]


def get_tools_by_vendor(db: Session, vendor_id: str) -> List[tool_model.Tool]:
    return (
        db.query(Tool)
        .options(selectinload(Tool.use_cases))
        .filter(Tool.vendor_id == vendor_id)
        .order_by(Tool.created_at.desc(), Tool.id)
        .all()
    )


def slug_exists(db: Session, slug: str, exclude_id: str = None) -> bool:
    query = db.query(Tool.id).filter(Tool.slug == slug)
    if exclude_id:
        query = query.filter(Tool.id != exclude_id)
    return query.first() is not None


def create_tool(
    db: Session,
    tool: tool_schema.ToolCreate,
    vendor_id: str,
    slug: str,
    use_cases: List[use_case_model.UseCase]
) -> tool_model.Tool:
    db_tool = Tool(
        name=tool.name,
        slug=slug,
        description=tool.description,
        long_description=tool.long_description,
        website_url=str(tool.website_url),
        logo_url=str(tool.logo_url) if tool.logo_url else None,
        primary_category_id=tool.primary_category_id,
        vendor_id=vendor_id,
        vendor_contact_email=tool.vendor_contact_email,
        pricing_model=tool.pricing_model.value,
        pricing_details=tool.pricing_details,
        integration_difficulty=tool.integration_difficulty,
        approved=False,
        featured=False,
        view_count=0,
    )
    db_tool.use_cases.extend(use_cases)
    db.add(db_tool)
    db.commit()
    db.refresh(db_tool)
    return db_tool


def update_tool(db: Session, db_tool: tool_model.Tool, update_data: dict) -> tool_model.Tool:
    use_cases = update_data.pop("use_cases", None)
    for field, value in update_data.items():
        setattr(db_tool, field, value)
    if use_cases is not None:
        db_tool.use_cases = use_cases
    db.commit()
    db.refresh(db_tool)
    return db_tool


def increment_views(db: Session, db_tool: tool_model.Tool) -> tool_model.Tool:
    db_tool.view_count = Tool.view_count + 1
    db.commit()
    db.refresh(db_tool)
    return db_tool
