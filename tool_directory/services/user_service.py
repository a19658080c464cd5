import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from tool_directory.core.security import get_password_hash, verify_password
from tool_directory.models import user as models_user, profile as models_profile
from tool_directory.schemas import auth as schemas_auth
from tool_directory.schemas.enums import Role

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: str) -> Optional[models_user.User]:
    return db.query(models_user.User).filter(models_user.User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[models_user.User]:
    return db.query(models_user.User).filter(models_user.User.email == email).first()


def create_user(db: Session, user: schemas_auth.RegisterRequest, role: Role = None) -> models_profile.Profile:
    """
    Create the login account and its profile in one transaction.
    Returns the new profile.
    """
    db_user = models_user.User(
        email=user.email,
        hashed_password=get_password_hash(user.password),
        is_active=True,
    )
    db.add(db_user)
    db.flush()

    db_profile = models_profile.Profile(
        id=db_user.id,
        email=db_user.email,
        full_name=user.full_name,
        company_name=user.company_name,
        role=(role or user.role).value,
    )
    db.add(db_profile)
    db.commit()
    db.refresh(db_profile)

    logger.info(f"[Auth] Registered user id={db_user.id} role={db_profile.role}")
    return db_profile


def authenticate(db: Session, email: str, password: str) -> Optional[models_user.User]:
    user = get_user_by_email(db, email)
    if not user or not user.is_active:
        return None
    if not verify_password(password, user.hashed_password):
        return None

    user.last_sign_in_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)
    return user
