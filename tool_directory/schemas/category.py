from pydantic import BaseModel, ConfigDict
from typing import List, Optional
import datetime


class UseCase(BaseModel):
    id: str
    name: str
    slug: str
    category_id: str
    description: Optional[str] = None
    created_at: Optional[datetime.datetime] = None

    model_config = ConfigDict(from_attributes=True)


class Category(BaseModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    icon: Optional[str] = None
    created_at: Optional[datetime.datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CategoryWithUseCases(Category):
    use_cases: List[UseCase] = []
    tool_count: int = 0
