import logging
from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tool_directory.core import security
from tool_directory.core.config import settings
from tool_directory.core.dependencies import SessionContext, get_current_session, get_db, get_optional_session
from tool_directory.core.responses import success_response
from tool_directory.schemas import auth as schemas_auth, profile as schemas_profile
from tool_directory.services import profile_service, role_service, user_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register")
def register(user_in: schemas_auth.RegisterRequest, db: Session = Depends(get_db)):
    if user_service.get_user_by_email(db, email=user_in.email):
        raise HTTPException(status_code=400, detail="Email already registered")

    try:
        profile = user_service.create_user(db, user_in)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("[Auth] Registration failed")
        raise HTTPException(status_code=500, detail="Registration failed")

    return success_response(
        schemas_profile.Profile.model_validate(profile),
        message="Registration successful",
    )


@router.post("/login")
def login(credentials: schemas_auth.LoginRequest, db: Session = Depends(get_db)):
    user = user_service.authenticate(db, email=credentials.email, password=credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = security.create_access_token(
        data={"sub": user.id},
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    token = schemas_auth.Token(
        access_token=access_token,
        token_type="bearer",
        profile=schemas_profile.Profile.model_validate(user.profile) if user.profile else None,
    )
    return success_response(token, message="Login successful")


@router.post("/logout")
def logout(session: SessionContext = Depends(get_current_session)):
    # Tokens are stateless; the client discards its copy
    logger.info(f"[Auth] Logout user id={session.user.id}")
    return success_response(message="Logged out successfully")


@router.get("/profile")
def read_profile(session: SessionContext = Depends(get_current_session)):
    if session.profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return success_response(schemas_profile.Profile.model_validate(session.profile))


@router.put("/profile")
def update_profile(
    *,
    db: Session = Depends(get_db),
    profile_in: schemas_profile.ProfileUpdate,
    session: SessionContext = Depends(get_current_session)
):
    if session.profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")

    try:
        profile = profile_service.update_profile(db, db_obj=session.profile, obj_in=profile_in)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("[Auth] Profile update failed")
        raise HTTPException(status_code=500, detail="Failed to update profile")

    return success_response(
        schemas_profile.Profile.model_validate(profile),
        message="Profile updated successfully",
    )


@router.put("/update-role")
def update_role(
    role_in: schemas_profile.RoleUpdate,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(get_current_session)
):
    """
    Change another account's role. The caller's own role is re-read from
    the database right before the change; the token alone is not trusted.
    """
    admin_profile = profile_service.get_profile(db, session.user.id, refresh=True)
    if not role_service.is_admin(admin_profile):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")

    target = profile_service.get_profile(db, str(role_in.user_id))
    if target is None:
        raise HTTPException(status_code=404, detail="User not found")

    try:
        profile = profile_service.update_role(db, target, role_in.role)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("[Auth] Role update failed")
        raise HTTPException(status_code=500, detail="Failed to update user role")

    return success_response(
        schemas_profile.Profile.model_validate(profile),
        message=f"User role updated to {role_in.role.value}",
    )


@router.api_route("/validate-session", methods=["GET", "POST"])
def validate_session(session: Optional[SessionContext] = Depends(get_optional_session)):
    if session is None:
        return success_response(schemas_auth.SessionStatus(is_valid=False))

    user = session.user
    return success_response(
        schemas_auth.SessionStatus(
            user=schemas_auth.SessionUser(
                id=user.id,
                email=user.email,
                email_confirmed=user.email_confirmed_at is not None,
                last_sign_in=user.last_sign_in_at,
            ),
            profile=schemas_profile.Profile.model_validate(session.profile) if session.profile else None,
            is_valid=True,
        )
    )
