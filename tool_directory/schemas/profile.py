from pydantic import BaseModel, ConfigDict, Field, AnyHttpUrl
from typing import Literal, Optional, Union
import datetime
import uuid

from tool_directory.schemas.enums import Role


class Profile(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None
    company_name: Optional[str] = None
    role: Role
    avatar_url: Optional[str] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=2)
    company_name: Optional[str] = None
    # An empty string clears the avatar
    avatar_url: Optional[Union[AnyHttpUrl, Literal[""]]] = None


class RoleUpdate(BaseModel):
    user_id: uuid.UUID
    role: Role
