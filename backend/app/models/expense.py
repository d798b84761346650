"""
Expense model for tracking spending.
"""
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class Expense(BaseModel):
    """A single purchase paid by one participant."""
    __tablename__ = "expenses"

    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    payer_id = Column(Integer, ForeignKey("participants.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    note = Column(Text, nullable=True)
    total = Column(Numeric(18, 4), nullable=False)  # Sum of price * quantity over items

    # Relationships
    project = relationship("Project", back_populates="expenses")
    payer = relationship("Participant", back_populates="expenses_paid")
    items = relationship("ExpenseItem", back_populates="expense", cascade="all, delete-orphan")


class ExpenseItem(BaseModel):
    """Line item of an expense."""
    __tablename__ = "expense_items"

    expense_id = Column(Integer, ForeignKey("expenses.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    price = Column(Numeric(18, 4), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)

    # Relationships
    expense = relationship("Expense", back_populates="items")
