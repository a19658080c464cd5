from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
import uuid

from tool_directory.core.database import Base
from tool_directory.models.user import utcnow


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False, unique=True)
    slug = Column(String, nullable=False, unique=True, index=True)
    description = Column(String, nullable=True)
    icon = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    use_cases = relationship("UseCase", back_populates="category", order_by="UseCase.name")
    tools = relationship("Tool", back_populates="primary_category")
