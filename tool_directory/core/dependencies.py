from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from tool_directory.core.database import SessionLocal
from tool_directory.core.security import decode_access_token
from tool_directory.models import user as models_user, profile as models_profile
from tool_directory.schemas.enums import Role
from tool_directory.services import role_service, user_service

bearer = HTTPBearer(auto_error=False, description="Access token issued by /auth/login")


@dataclass
class SessionContext:
    """The authenticated caller for a single request."""
    user: models_user.User
    profile: Optional[models_profile.Profile]


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_optional_session(
    db: Session = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> Optional[SessionContext]:
    if credentials is None:
        return None

    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        return None

    user = user_service.get_user(db, user_id)
    if user is None or not user.is_active:
        return None
    return SessionContext(user=user, profile=user.profile)


def get_current_session(
    session: Optional[SessionContext] = Depends(get_optional_session),
) -> SessionContext:
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session


def require_role(required_role: Role, detail: str = None):
    """
    Dependency factory that requires the caller's role to rank at least
    ``required_role``.
    """
    def role_checker(session: SessionContext = Depends(get_current_session)) -> SessionContext:
        if not role_service.has_role(session.profile, required_role):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=detail or f"{required_role.value.capitalize()} access required",
            )
        return session
    return role_checker
