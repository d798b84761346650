"""
Project service for project management and aggregations.
"""
import logging
from collections import defaultdict
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from app.core.money import from_minor_units, quantize_amount, to_minor_units
from app.models.expense import Expense
from app.models.project import Project, Participant
from app.schemas.project import (
    ProjectCreate, ProjectUpdate, ProjectSummaryResponse, ProjectDetailResponse,
    ParticipantResponse, ParticipantTotal, DailyTotal
)
from app.services.settlement_service import calculate_project_settlement

logger = logging.getLogger(__name__)


def create_project(data: ProjectCreate, db: Session) -> Project:
    """Create a project together with its participants."""
    project = Project(
        name=data.name,
        description=data.description,
        currency=data.currency
    )
    for name in data.participants:
        project.participants.append(Participant(name=name))
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info(f"Created project {project.id} with {len(data.participants)} participants")
    return project


def get_project(project_id: int, db: Session) -> Optional[Project]:
    """Get a project with its participants loaded."""
    return db.query(Project).options(
        selectinload(Project.participants)
    ).filter(Project.id == project_id).first()


def list_projects(db: Session) -> List[ProjectSummaryResponse]:
    """List all projects, newest first, with total spent and expense count."""
    projects = db.query(Project).options(
        selectinload(Project.participants)
    ).order_by(Project.created_at.desc(), Project.id.desc()).all()

    # Per-project sum and count in one query
    aggregates = {
        project_id: (total, count)
        for project_id, total, count in db.query(
            Expense.project_id,
            func.sum(Expense.total),
            func.count(Expense.id)
        ).group_by(Expense.project_id).all()
    }

    summaries = []
    for project in projects:
        total, count = aggregates.get(project.id, (Decimal(0), 0))
        summaries.append(ProjectSummaryResponse(
            id=project.id,
            name=project.name,
            description=project.description,
            currency=project.currency,
            participants=[ParticipantResponse.model_validate(p) for p in project.participants],
            created_at=project.created_at,
            updated_at=project.updated_at,
            total_spent=quantize_amount(Decimal(str(total or 0)), project.currency),
            expense_count=count
        ))
    return summaries


def update_project(project: Project, data: ProjectUpdate, db: Session) -> Project:
    """Update name or description; omitted fields keep their values."""
    if data.name is not None:
        project.name = data.name
    if data.description is not None:
        project.description = data.description
    db.commit()
    db.refresh(project)
    return project


def delete_project(project: Project, db: Session):
    """Delete a project; participants and expenses cascade."""
    project_id = project.id
    db.delete(project)
    db.commit()
    logger.info(f"Deleted project {project_id}")


def project_detail(project: Project, db: Session) -> ProjectDetailResponse:
    """Project with per-participant totals, daily totals and the settlement guide."""
    currency = project.currency
    expenses = db.query(Expense).filter(Expense.project_id == project.id).all()

    paid = defaultdict(int)
    daily = defaultdict(int)
    for expense in expenses:
        units = to_minor_units(expense.total, currency)
        paid[expense.payer_id] += units
        daily[expense.date] += units

    participant_totals = [
        ParticipantTotal(id=p.id, name=p.name, total=from_minor_units(paid[p.id], currency))
        for p in project.participants
    ]
    daily_totals = [
        DailyTotal(date=day, total=from_minor_units(units, currency))
        for day, units in sorted(daily.items())
    ]

    settlement = calculate_project_settlement(project, db)

    return ProjectDetailResponse(
        id=project.id,
        name=project.name,
        description=project.description,
        currency=currency,
        participants=[ParticipantResponse.model_validate(p) for p in project.participants],
        created_at=project.created_at,
        updated_at=project.updated_at,
        participant_totals=participant_totals,
        daily_totals=daily_totals,
        grand_total=from_minor_units(sum(daily.values()), currency),
        settlements=settlement.transfers
    )
