"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import date as dt_date, datetime
from decimal import Decimal
from app.core.config import settings


class ExpenseItemCreate(BaseModel):
    """Schema for one line item of a new expense."""
    name: str = Field(..., min_length=1, max_length=100)
    price: Decimal = Field(..., gt=0, le=1_000_000)
    quantity: int = Field(1, ge=1)


class ExpenseCreate(BaseModel):
    """Schema for expense creation."""
    project_id: int
    payer_id: int  # Participant who paid
    date: dt_date
    note: Optional[str] = Field(None, max_length=200)
    items: List[ExpenseItemCreate] = Field(..., min_length=1)

    @field_validator("note")
    @classmethod
    def blank_note_is_none(cls, v):
        """Treat an empty note as no note."""
        if v is not None and not v.strip():
            return None
        return v


class ExpenseItemResponse(BaseModel):
    """Schema for expense item response."""
    id: int
    name: str
    price: Decimal
    quantity: int

    class Config:
        from_attributes = True


class ExpenseResponse(BaseModel):
    """Schema for expense response."""
    id: int
    project_id: int
    payer_id: int
    payer_name: str
    date: dt_date
    note: Optional[str] = None
    total: Decimal
    currency: str
    items: List[ExpenseItemResponse] = []
    created_at: datetime
    updated_at: datetime


class ExpenseFilter(BaseModel):
    """Query parameters for listing expenses."""
    project_id: int
    start_date: Optional[dt_date] = None
    end_date: Optional[dt_date] = None
    payer_id: Optional[int] = None
    search: Optional[str] = Field(None, max_length=100)
    page: int = Field(1, ge=1)
    page_size: int = Field(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE)


class PaginationMeta(BaseModel):
    """Schema for pagination metadata."""
    page: int
    page_size: int
    total: int
    total_pages: int


class ExpenseListResponse(BaseModel):
    """Schema for a page of expenses."""
    expenses: List[ExpenseResponse]
    pagination: PaginationMeta
