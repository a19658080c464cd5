import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tool_directory.core.config import settings
from tool_directory.core.dependencies import (
    SessionContext,
    get_current_session,
    get_db,
    get_optional_session,
    require_role,
)
from tool_directory.core.responses import success_response
from tool_directory.crud import crud_tool
from tool_directory.schemas import tool as tool_schema
from tool_directory.schemas.enums import PricingModel, Role
from tool_directory.services import category_service, role_service, tool_service

logger = logging.getLogger(__name__)

router = APIRouter()


def _can_manage(session: Optional[SessionContext], tool) -> bool:
    if session is None:
        return False
    return session.user.id == tool.vendor_id or role_service.is_admin(session.profile)


@router.get("")
def read_tools(
    category: Optional[str] = None,
    use_cases: List[str] = Query([], alias="useCases"),
    search: Optional[str] = None,
    featured: bool = False,
    pricing_model: List[PricingModel] = Query([], alias="pricingModel"),
    integration_difficulty: List[int] = Query([], alias="integrationDifficulty"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    filters = tool_schema.ToolFilters(
        category=category,
        use_cases=use_cases,
        search=search,
        featured=featured,
        pricing_model=pricing_model,
        integration_difficulty=integration_difficulty,
    )
    try:
        tools, pagination = tool_service.list_tools(db, filters, page=page, limit=limit)
    except SQLAlchemyError:
        logger.exception("[Tools] Error fetching tools")
        raise HTTPException(status_code=500, detail="Failed to fetch tools")

    return success_response(
        tool_schema.ToolList(
            tools=[tool_schema.Tool.model_validate(tool) for tool in tools],
            pagination=pagination,
        )
    )


@router.post("")
def submit_tool(
    tool_in: tool_schema.ToolCreate,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_role(Role.VENDOR, "Vendor access required")),
):
    try:
        tool = tool_service.submit_tool(db, tool_in, vendor_id=session.user.id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError:
        db.rollback()
        logger.exception("[Tools] Error submitting tool")
        raise HTTPException(status_code=500, detail="Failed to submit tool")

    return success_response(tool_schema.Tool.model_validate(tool), message="Tool submitted for approval")


@router.get("/categories")
def read_categories(db: Session = Depends(get_db)):
    try:
        categories = category_service.get_categories_with_counts(db)
    except SQLAlchemyError:
        logger.exception("[Tools] Error fetching categories")
        raise HTTPException(status_code=500, detail="Failed to fetch categories")
    return success_response({"categories": categories})


@router.get("/search")
def search_tools(
    q: str = Query(..., min_length=1),
    category: Optional[str] = None,
    use_cases: List[str] = Query([], alias="useCases"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    suggestions: int = Query(5, ge=1, le=10),
    db: Session = Depends(get_db),
):
    filters = tool_schema.ToolFilters(category=category, use_cases=use_cases, search=q)
    try:
        result = tool_service.search_tools(db, filters, limit=limit, suggestion_limit=suggestions)
    except SQLAlchemyError:
        logger.exception("[Tools] Error searching tools")
        raise HTTPException(status_code=500, detail="Failed to search tools")
    return success_response(result)


@router.get("/suggestions")
def read_suggestions(
    query: str = Query(..., min_length=1),
    limit: int = Query(5, ge=1, le=10),
    db: Session = Depends(get_db),
):
    try:
        names = crud_tool.get_name_suggestions(db, query, limit=limit)
    except SQLAlchemyError:
        logger.exception("[Tools] Error fetching suggestions")
        raise HTTPException(status_code=500, detail="Failed to fetch suggestions")
    return success_response({"suggestions": names})


@router.get("/vendor/{vendor_id}")
def read_vendor_tools(
    vendor_id: str,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    if session.user.id != vendor_id and not role_service.is_admin(session.profile):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to view these tools")
    return success_response(tool_service.get_vendor_tools(db, vendor_id))


@router.get("/{id_or_slug}")
def read_tool(
    id_or_slug: str,
    db: Session = Depends(get_db),
    session: Optional[SessionContext] = Depends(get_optional_session),
):
    tool = crud_tool.get_tool_by_id_or_slug(db, id_or_slug)
    # Pending tools are only visible to their vendor and admins
    if tool is None or (not tool.approved and not _can_manage(session, tool)):
        raise HTTPException(status_code=404, detail="Tool not found")
    return success_response(tool_service.build_tool_detail(tool))


@router.put("/{tool_id}")
def update_tool(
    tool_id: str,
    tool_in: tool_schema.ToolUpdate,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_role(Role.VENDOR, "Vendor access required")),
):
    tool = crud_tool.get_tool(db, tool_id)
    if tool is None:
        raise HTTPException(status_code=404, detail="Tool not found")
    if not _can_manage(session, tool):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only update your own tools")

    try:
        tool = tool_service.update_tool(db, tool, tool_in)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError:
        db.rollback()
        logger.exception("[Tools] Error updating tool")
        raise HTTPException(status_code=500, detail="Failed to update tool")

    return success_response(tool_schema.Tool.model_validate(tool), message="Tool updated successfully")


@router.post("/{tool_id}/views")
def increment_tool_views(tool_id: str, db: Session = Depends(get_db)):
    tool = crud_tool.get_tool(db, tool_id)
    if tool is None or not tool.approved:
        raise HTTPException(status_code=404, detail="Tool not found")

    try:
        tool = crud_tool.increment_views(db, tool)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("[Tools] Error recording tool view")
        raise HTTPException(status_code=500, detail="Failed to record view")

    return success_response({"view_count": tool.view_count})


@router.put("/{tool_id}/approval")
def update_tool_approval(
    tool_id: str,
    approval: tool_schema.ToolApproval,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_role(Role.ADMIN)),
):
    tool = crud_tool.get_tool(db, tool_id)
    if tool is None:
        raise HTTPException(status_code=404, detail="Tool not found")

    try:
        tool = tool_service.set_approval(db, tool, approval)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("[Tools] Error updating tool approval")
        raise HTTPException(status_code=500, detail="Failed to update tool approval")

    message = "Tool approved" if tool.approved else "Tool approval revoked"
    return success_response(tool_schema.Tool.model_validate(tool), message=message)
