from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from tool_directory.models import category as category_model, use_case as use_case_model, tool as tool_model


def get_category(db: Session, category_id: str) -> Optional[category_model.Category]:
    return db.query(category_model.Category).filter(category_model.Category.id == category_id).first()


def get_category_by_slug(db: Session, slug: str) -> Optional[category_model.Category]:
    return db.query(category_model.Category).filter(category_model.Category.slug == slug).first()


def get_categories(db: Session) -> List[category_model.Category]:
    return (
        db.query(category_model.Category)
        .options(joinedload(category_model.Category.use_cases))
        .order_by(category_model.Category.created_at, category_model.Category.name)
        .all()
    )


def create_category(db: Session, name: str, slug: str, description: str = None, icon: str = None) -> category_model.Category:
    db_category = category_model.Category(name=name, slug=slug, description=description, icon=icon)
    db.add(db_category)
    db.commit()
    db.refresh(db_category)
    return db_category


def get_use_case_by_slug(db: Session, slug: str) -> Optional[use_case_model.UseCase]:
    return db.query(use_case_model.UseCase).filter(use_case_model.UseCase.slug == slug).first()


def get_use_cases_by_ids(db: Session, use_case_ids: List[str]) -> List[use_case_model.UseCase]:
    if not use_case_ids:
        return []
    return db.query(use_case_model.UseCase).filter(use_case_model.UseCase.id.in_(use_case_ids)).all()


def get_use_case_ids_by_slugs(db: Session, slugs: List[str]) -> List[str]:
    rows = db.query(use_case_model.UseCase.id).filter(use_case_model.UseCase.slug.in_(slugs)).all()
    return [row.id for row in rows]


def create_use_case(db: Session, category_id: str, name: str, slug: str, description: str = None) -> use_case_model.UseCase:
    db_use_case = use_case_model.UseCase(category_id=category_id, name=name, slug=slug, description=description)
    db.add(db_use_case)
    db.commit()
    db.refresh(db_use_case)
    return db_use_case


def get_approved_tool_counts(db: Session) -> Dict[str, int]:
    """Approved tool count keyed by primary category id."""
    rows = (
        db.query(tool_model.Tool.primary_category_id, func.count(tool_model.Tool.id))
        .filter(tool_model.Tool.approved.is_(True))
        .group_by(tool_model.Tool.primary_category_id)
        .all()
    )
    return {category_id: count for category_id, count in rows}
