from pydantic import BaseModel, ConfigDict, EmailStr, Field, AnyHttpUrl
from typing import List, Optional
import datetime

from tool_directory.schemas.category import Category, UseCase
from tool_directory.schemas.enums import PricingModel


class ToolCreate(BaseModel):
    name: str = Field(..., min_length=2)
    description: str = Field(..., min_length=10)
    long_description: Optional[str] = None
    website_url: AnyHttpUrl
    logo_url: Optional[AnyHttpUrl] = None
    primary_category_id: str = Field(..., min_length=1)
    use_case_ids: List[str] = []
    pricing_model: PricingModel = PricingModel.CUSTOM
    pricing_details: Optional[str] = None
    integration_difficulty: int = Field(3, ge=1, le=5)
    vendor_contact_email: Optional[EmailStr] = None


class ToolUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2)
    description: Optional[str] = Field(None, min_length=10)
    long_description: Optional[str] = None
    website_url: Optional[AnyHttpUrl] = None
    logo_url: Optional[AnyHttpUrl] = None
    primary_category_id: Optional[str] = Field(None, min_length=1)
    use_case_ids: Optional[List[str]] = None
    pricing_model: Optional[PricingModel] = None
    pricing_details: Optional[str] = None
    integration_difficulty: Optional[int] = Field(None, ge=1, le=5)
    vendor_contact_email: Optional[EmailStr] = None


class ToolApproval(BaseModel):
    approved: bool
    featured: Optional[bool] = None


class Tool(BaseModel):
    id: str
    name: str
    slug: str
    description: str
    long_description: Optional[str] = None
    website_url: str
    logo_url: Optional[str] = None
    primary_category_id: str
    use_case_ids: List[str] = []
    vendor_id: str
    vendor_contact_email: Optional[str] = None
    pricing_model: PricingModel
    pricing_details: Optional[str] = None
    integration_difficulty: int
    approved: bool
    featured: bool
    view_count: int
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None

    model_config = ConfigDict(from_attributes=True)


class VendorSummary(BaseModel):
    id: str
    full_name: Optional[str] = None
    company_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ToolDetail(Tool):
    category: Category
    use_cases: List[UseCase] = []
    vendor: VendorSummary
    pricing_label: str
    difficulty_label: str


class ToolFilters(BaseModel):
    category: Optional[str] = None
    use_cases: List[str] = []
    search: Optional[str] = None
    featured: bool = False
    pricing_model: List[PricingModel] = []
    integration_difficulty: List[int] = []


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class ToolList(BaseModel):
    tools: List[Tool]
    pagination: Pagination


class VendorTools(BaseModel):
    tools: List[Tool]
    total_tools: int
    approved_tools: int
    pending_tools: int


class SearchResult(BaseModel):
    tools: List[Tool]
    suggestions: List[str] = []
    total_results: int
