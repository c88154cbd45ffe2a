"""
Base schemas with common functionality.
"""
from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar('T', bound='BaseSchema')
ItemT = TypeVar('ItemT')


class BaseSchema(BaseModel):
    """
    Base schema with common functionality for all schemas.

    Fields are snake_case in Python and camelCase on the wire; both forms
    are accepted on input.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel
    )

    @classmethod
    def from_orm_model(cls: Type[T], orm_model: Any) -> T:
        """Create a schema instance from an ORM model"""
        return cls.model_validate(orm_model)


def id_field(wire_name: str, python_name: str):
    """
    Identifier exposed as e.g. ``locationId`` but read from the ORM ``id``
    attribute.
    """
    return Field(
        validation_alias=AliasChoices(python_name, wire_name, "id"),
        serialization_alias=wire_name,
    )


class AuditedReadOnly(BaseSchema):
    """Read-model fields common to soft-deletable entities"""
    created_at: datetime
    updated_at: datetime
    created_by: Optional[str] = None
    last_updated_by: Optional[str] = None
    is_active: bool
    deleted_at: Optional[datetime] = None


class Paginated(BaseSchema, Generic[ItemT]):
    """One page of a list endpoint"""
    data: List[ItemT]
    total_elements: int
    total_pages: int
    current_page: int
    page_size: int
    has_next: bool
    has_previous: bool

    @classmethod
    def from_page(cls, page: Dict[str, Any], data: List[Any]) -> "Paginated":
        """Build from the dict returned by ``paginate_query``"""
        return cls(
            data=data,
            total_elements=page["total"],
            total_pages=page["total_pages"],
            current_page=page["page"],
            page_size=page["page_size"],
            has_next=page["has_next"],
            has_previous=page["has_prev"],
        )
