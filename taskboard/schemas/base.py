"""
Base Pydantic schemas with common fields.

Wire names are camelCase (``dueDate``, ``assignedTo``); Python code
uses the snake_case field names, and both spellings are accepted on input.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every request and response schema."""
    
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StoredRead(CamelModel):
    """
    Base schema for reading stored records.
    
    Includes the fields every table gets from TimestampedModel.
    """
    
    id: UUID
    created_at: datetime
    updated_at: datetime
    
    # Read straight from SQLAlchemy models
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)
