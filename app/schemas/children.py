from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ChildBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    date_of_birth: date
    diagnosis: Optional[str] = Field(None, max_length=255)
    diagnosis_date: Optional[date] = None
    notes: Optional[str] = None


class ChildCreate(ChildBase):
    """Schema for creating a new child"""

    pass


class ChildUpdate(BaseModel):
    """Schema for updating a child, only provided fields are changed"""

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    date_of_birth: Optional[date] = None
    diagnosis: Optional[str] = Field(None, max_length=255)
    diagnosis_date: Optional[date] = None
    notes: Optional[str] = None


class ChildResponse(ChildBase):
    """Schema for child response"""

    id: UUID
    parent_id: UUID
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ChildrenListResponse(BaseModel):
    """Schema for listing children"""

    children: list[ChildResponse]
