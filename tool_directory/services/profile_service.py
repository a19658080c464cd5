import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from tool_directory.models import profile as models_profile
from tool_directory.schemas import profile as schemas_profile
from tool_directory.schemas.enums import Role

logger = logging.getLogger(__name__)


def get_profile(db: Session, profile_id: str, refresh: bool = False) -> Optional[models_profile.Profile]:
    query = db.query(models_profile.Profile)
    if refresh:
        # Overwrite anything already loaded in this session with the stored row
        query = query.populate_existing()
    return query.filter(models_profile.Profile.id == profile_id).first()


def update_profile(
    db: Session,
    db_obj: models_profile.Profile,
    obj_in: schemas_profile.ProfileUpdate
) -> models_profile.Profile:
    update_data = obj_in.model_dump(exclude_unset=True)

    if update_data.get("avatar_url") is not None:
        # Stored as plain text; "" clears the avatar
        update_data["avatar_url"] = str(update_data["avatar_url"]) or None

    for field, value in update_data.items():
        setattr(db_obj, field, value)
    db_obj.updated_at = datetime.now(timezone.utc)

    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj


def update_role(db: Session, db_obj: models_profile.Profile, role: Role) -> models_profile.Profile:
    previous = db_obj.role
    db_obj.role = role.value
    db_obj.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(db_obj)

    logger.info(f"[Auth] Role changed for profile={db_obj.id}: {previous} -> {db_obj.role}")
    return db_obj
