"""Models package - Import all models for SQLAlchemy registration."""
from app.models.project import Project, Participant
from app.models.expense import Expense, ExpenseItem

__all__ = [
    "Project",
    "Participant",
    "Expense",
    "ExpenseItem",
]
