"""
Project model grouping participants and their shared expenses.
"""
from sqlalchemy import Column, String, Text, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class Project(BaseModel):
    """A shared-expense group reconciled in a single currency."""
    __tablename__ = "projects"

    name = Column(String(80), nullable=False)
    description = Column(Text, nullable=True)
    currency = Column(String(3), nullable=False, default="INR")

    # Relationships
    participants = relationship(
        "Participant",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="Participant.name"
    )
    expenses = relationship("Expense", back_populates="project", cascade="all, delete-orphan")


class Participant(BaseModel):
    """A named party of a project."""
    __tablename__ = "participants"
    __table_args__ = (UniqueConstraint("project_id", "name", name="uq_participant_project_name"),)

    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    name = Column(String(50), nullable=False)

    # Relationships
    project = relationship("Project", back_populates="participants")
    expenses_paid = relationship("Expense", back_populates="payer")
