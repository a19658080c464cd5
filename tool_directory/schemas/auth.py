from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
import datetime

from tool_directory.schemas.enums import Role
from tool_directory.schemas.profile import Profile


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    full_name: str = Field(..., min_length=2)
    company_name: Optional[str] = None
    role: Role = Role.USER

    @field_validator('role')
    @classmethod
    def validate_role(cls, v):
        if v == Role.ADMIN:
            raise ValueError('Role must be either user or vendor')
        return v


class Token(BaseModel):
    access_token: str
    token_type: str
    profile: Optional[Profile] = None


class SessionUser(BaseModel):
    id: str
    email: str
    email_confirmed: bool
    last_sign_in: Optional[datetime.datetime] = None


class SessionStatus(BaseModel):
    user: Optional[SessionUser] = None
    profile: Optional[Profile] = None
    is_valid: bool
