"""
Utility functions for the application.
"""
from datetime import datetime, timezone
from typing import Type, TypeVar, List, Dict, Any, Optional, Tuple

from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shopkeep.core.exceptions import EntityError

T = TypeVar('T', bound=BaseModel)


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in every TIMESTAMP column."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


async def model_to_schema(db_model: Any, schema_class: Type[T]) -> T:
    """
    Convert a SQLAlchemy model instance to a Pydantic schema instance.

    Args:
        db_model: SQLAlchemy model instance
        schema_class: Pydantic schema class

    Returns:
        Instance of the Pydantic schema
    """
    return schema_class.model_validate(db_model, from_attributes=True)


async def models_to_schemas(db_models: List[Any], schema_class: Type[T]) -> List[T]:
    """Convert a list of SQLAlchemy model instances to Pydantic schema instances."""
    return [await model_to_schema(model, schema_class) for model in db_models]


async def paginate_query(
    query: Select,
    db: AsyncSession,
    page: int = 1,
    page_size: int = 10
) -> Dict[str, Any]:
    """
    Paginate a SQLAlchemy select.

    Args:
        query: select() statement returning ORM entities
        db: Database session
        page: Page number (1-indexed)
        page_size: Number of items per page

    Returns:
        Dictionary with pagination information and items
    """
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total = await db.scalar(count_query) or 0

    offset = (page - 1) * page_size
    result = await db.execute(query.offset(offset).limit(page_size))
    items = list(result.scalars().all())

    total_pages = (total + page_size - 1) // page_size if total > 0 else 1

    return {
        "items": items,
        "total": total,
        "page": page,
        "page_size": page_size,
        "total_pages": total_pages,
        "has_next": page < total_pages,
        "has_prev": page > 1
    }


def resolve_sort(
    error_prefix: str,
    sort_by: Optional[str],
    sort_direction: Optional[str],
    sortable: Dict[str, str],
    default: str,
) -> Tuple[str, bool]:
    """
    Map a client sort request onto a model attribute.

    Args:
        error_prefix: Prefix for the InvalidArgument code
        sort_by: Requested key (wire or attribute name), None for the default
        sort_direction: "ASC" or "DESC" (any case), None for ascending
        sortable: Accepted keys mapped to model attribute names
        default: Key used when sort_by is None

    Returns:
        (attribute name, descending)
    """
    key = sort_by or default
    field = sortable.get(key)
    if field is None:
        raise EntityError.invalid_argument(
            error_prefix, f"Cannot sort by '{key}', expected one of {sorted(sortable)}"
        )
    direction = (sort_direction or "ASC").upper()
    if direction not in ("ASC", "DESC"):
        raise EntityError.invalid_argument(error_prefix, f"Sort direction must be ASC or DESC, got '{sort_direction}'")
    return field, direction == "DESC"
