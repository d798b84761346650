"""
Pydantic schemas for Project entity.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import date as dt_date, datetime
from decimal import Decimal
from app.core.config import settings
from app.schemas.settlement import Transfer


class ProjectCreate(BaseModel):
    """Schema for project creation."""
    name: str = Field(..., min_length=2, max_length=80)
    description: Optional[str] = Field(None, max_length=300)
    currency: str = Field(settings.DEFAULT_CURRENCY, min_length=3, max_length=3)
    participants: List[str] = Field(..., min_length=1, max_length=settings.MAX_PARTICIPANTS)

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v):
        """Currency must be a three-letter code."""
        if not v.isalpha():
            raise ValueError("Currency must be a three-letter code")
        return v.upper()

    @field_validator("participants")
    @classmethod
    def unique_participants(cls, v):
        """Participant names must be 1-50 characters and unique within the project."""
        names = [name.strip() for name in v]
        for name in names:
            if not name:
                raise ValueError("Participant name is required")
            if len(name) > 50:
                raise ValueError("Participant name is too long")
        if len(set(names)) != len(names):
            raise ValueError("Participant names must be unique")
        return names


class ProjectUpdate(BaseModel):
    """Schema for project update."""
    name: Optional[str] = Field(None, min_length=2, max_length=80)
    description: Optional[str] = Field(None, max_length=300)


class ParticipantResponse(BaseModel):
    """Schema for participant response."""
    id: int
    name: str

    class Config:
        from_attributes = True


class ProjectResponse(BaseModel):
    """Schema for project response."""
    id: int
    name: str
    description: Optional[str] = None
    currency: str
    participants: List[ParticipantResponse] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProjectSummaryResponse(ProjectResponse):
    """Schema for a project in the project list."""
    total_spent: Decimal
    expense_count: int


class ParticipantTotal(BaseModel):
    """Amount paid by one participant."""
    id: int
    name: str
    total: Decimal


class DailyTotal(BaseModel):
    """Amount spent on one day."""
    date: dt_date
    total: Decimal


class ProjectDetailResponse(ProjectResponse):
    """Schema for detailed project response with aggregations."""
    participant_totals: List[ParticipantTotal]
    daily_totals: List[DailyTotal]
    grand_total: Decimal
    settlements: List[Transfer]
