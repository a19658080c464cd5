from typing import List

from sqlalchemy.orm import Session

from tool_directory.crud import crud_category
from tool_directory.schemas import category as category_schema


def get_categories_with_counts(db: Session) -> List[category_schema.CategoryWithUseCases]:
    """Categories with their use cases and the number of approved tools filed under each."""
    counts = crud_category.get_approved_tool_counts(db)
    categories = []
    for category in crud_category.get_categories(db):
        categories.append(
            category_schema.CategoryWithUseCases(
                **category_schema.Category.model_validate(category).model_dump(),
                use_cases=[category_schema.UseCase.model_validate(uc) for uc in category.use_cases],
                tool_count=counts.get(category.id, 0),
            )
        )
    return categories
