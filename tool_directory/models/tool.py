from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship
import uuid

from tool_directory.core.database import Base
from tool_directory.models.user import utcnow
from tool_directory.schemas.enums import PricingModel

tool_use_cases = Table(
    'tool_use_cases',
    Base.metadata,
    Column('tool_id', String(36), ForeignKey('tools.id'), primary_key=True),
    Column('use_case_id', String(36), ForeignKey('use_cases.id'), primary_key=True)
)


class Tool(Base):
    __tablename__ = "tools"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False, index=True)
    slug = Column(String, nullable=False, unique=True, index=True)
    description = Column(String, nullable=False)
    long_description = Column(Text, nullable=True)
    website_url = Column(String, nullable=False)
    logo_url = Column(String, nullable=True)

    primary_category_id = Column(String(36), ForeignKey("categories.id"), nullable=False, index=True)
    vendor_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    vendor_contact_email = Column(String, nullable=True)

    pricing_model = Column(String(20), nullable=False, default=PricingModel.CUSTOM.value)
    pricing_details = Column(String, nullable=True)
    integration_difficulty = Column(Integer, nullable=False, default=3)

    # New submissions stay hidden until an admin approves them
    approved = Column(Boolean, nullable=False, default=False, index=True)
    featured = Column(Boolean, nullable=False, default=False)
    view_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow)

    primary_category = relationship("Category", back_populates="tools")
    use_cases = relationship("UseCase", secondary=tool_use_cases)
    vendor = relationship("Profile", back_populates="tools")

    @property
    def use_case_ids(self):
        return [use_case.id for use_case in self.use_cases]
