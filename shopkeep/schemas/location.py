"""
Schemas for locations.
"""

from pydantic import Field, field_validator, model_validator

from .base import BaseSchema, AuditedReadOnly, id_field


class LocationInsert(BaseSchema):
    name: str = Field(min_length=1, max_length=100)

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class LocationUpdate(LocationInsert):
    pass


class LocationReadOnly(AuditedReadOnly):
    location_id: int = id_field("locationId", "location_id")
    name: str

    @model_validator(mode='after')
    def check_soft_delete_state(self):
        # deleted_at is set exactly when the location is inactive
        if self.is_active == (self.deleted_at is not None):
            raise ValueError('deletedAt must be set if and only if isActive is false')
        return self
