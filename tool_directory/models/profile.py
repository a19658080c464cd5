from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from tool_directory.core.database import Base
from tool_directory.models.user import utcnow
from tool_directory.schemas.enums import Role


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), ForeignKey("users.id"), primary_key=True)
    email = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String, nullable=True)
    company_name = Column(String, nullable=True)
    role = Column(String(20), nullable=False, default=Role.USER.value, index=True)
    avatar_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow)

    user = relationship("User", back_populates="profile")
    tools = relationship("Tool", back_populates="vendor")
