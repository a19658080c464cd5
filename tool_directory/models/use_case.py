from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
import uuid

from tool_directory.core.database import Base
from tool_directory.models.user import utcnow


class UseCase(Base):
    __tablename__ = "use_cases"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True, index=True)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=False, index=True)
    description = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    category = relationship("Category", back_populates="use_cases")
