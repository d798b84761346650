"""
Pydantic schemas for settlement results.
"""
from pydantic import BaseModel
from typing import List
from decimal import Decimal


class Transfer(BaseModel):
    """Schema for a single transfer in settlement."""
    from_participant_id: int
    from_name: str
    to_participant_id: int
    to_name: str
    amount: Decimal  # In the project's currency


class ParticipantBalanceResponse(BaseModel):
    """Schema for one participant's position."""
    participant_id: int
    name: str
    paid_total: Decimal
    balance: Decimal  # Positive = should receive, negative = should pay


class SettlementSummary(BaseModel):
    """Schema for settlement summary."""
    project_id: int
    currency: str
    total_expenses: Decimal
    participant_count: int
    fair_share: Decimal
    balances: List[ParticipantBalanceResponse]
    transfers: List[Transfer]
    summary: str
