"""
Pydantic schemas for period reports handed to document renderers.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import date as dt_date
from decimal import Decimal
from app.schemas.settlement import Transfer


class ReportItem(BaseModel):
    """Line item as shown in a report."""
    name: str
    price: Decimal
    quantity: int


class ReportExpense(BaseModel):
    """Expense as shown in a report."""
    date: dt_date
    note: Optional[str] = None
    total: Decimal
    payer_name: str
    items: List[ReportItem] = []


class ReportParticipant(BaseModel):
    """Amount a participant paid within the period."""
    name: str
    total: Decimal


class ProjectReport(BaseModel):
    """Everything a renderer needs to produce a project report."""
    project_id: int
    project_name: str
    currency: str
    period_type: str  # weekly, monthly or yearly
    period_label: str
    start_date: dt_date
    end_date: dt_date
    participants: List[ReportParticipant]
    grand_total: Decimal
    expenses: List[ReportExpense]
    settlements: List[Transfer]  # Settlement guide over the whole project
    filename: str
