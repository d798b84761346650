"""
Expense service for expense-related business logic.
"""
import logging
import math
from decimal import Decimal
from typing import List, Optional, Tuple
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload, selectinload

from app.core.money import quantize_amount, to_minor_units
from app.models.expense import Expense, ExpenseItem
from app.models.project import Project
from app.schemas.expense import ExpenseCreate, ExpenseFilter, ExpenseResponse, ExpenseItemResponse, PaginationMeta
from app.schemas.ledger import ExpenseRecord

logger = logging.getLogger(__name__)


def create_expense(project: Project, data: ExpenseCreate, db: Session) -> Expense:
    """
    Create an expense with its items.
    The total is the sum of price * quantity; the payer must belong to the project.
    """
    participant_ids = {p.id for p in project.participants}
    if data.payer_id not in participant_ids:
        raise ValueError("Payer is not a participant of this project")

    total = sum((item.price * item.quantity for item in data.items), Decimal(0))

    expense = Expense(
        project_id=project.id,
        payer_id=data.payer_id,
        date=data.date,
        note=data.note,
        total=total
    )
    for item in data.items:
        expense.items.append(ExpenseItem(
            name=item.name,
            price=item.price,
            quantity=item.quantity
        ))
    db.add(expense)
    db.commit()
    db.refresh(expense)

    logger.info(f"Created expense {expense.id} in project {project.id} for {total} {project.currency}")
    return expense


def get_expense(project_id: int, expense_id: int, db: Session) -> Optional[Expense]:
    """Get an expense of a project with payer and items loaded."""
    return db.query(Expense).options(
        joinedload(Expense.payer),
        selectinload(Expense.items)
    ).filter(
        Expense.id == expense_id,
        Expense.project_id == project_id
    ).first()


def delete_expense(project_id: int, expense_id: int, db: Session) -> bool:
    """Delete an expense. Returns False if it does not exist in the project."""
    expense = get_expense(project_id, expense_id, db)
    if not expense:
        return False
    db.delete(expense)
    db.commit()
    logger.info(f"Deleted expense {expense_id} from project {project_id}")
    return True


def list_expenses(filters: ExpenseFilter, db: Session) -> Tuple[List[Expense], PaginationMeta]:
    """
    List expenses of a project, newest first.

    Filtering only narrows what is displayed; balances are always computed from
    get_expense_records.
    """
    query = db.query(Expense).filter(Expense.project_id == filters.project_id)

    if filters.payer_id is not None:
        query = query.filter(Expense.payer_id == filters.payer_id)
    if filters.start_date:
        query = query.filter(Expense.date >= filters.start_date)
    if filters.end_date:
        query = query.filter(Expense.date <= filters.end_date)
    if filters.search:
        pattern = f"%{filters.search}%"
        # Case-insensitive match on the note or any item name
        query = query.filter(or_(
            Expense.note.ilike(pattern),
            Expense.items.any(ExpenseItem.name.ilike(pattern))
        ))

    total = query.count()
    expenses = query.options(
        joinedload(Expense.payer),
        selectinload(Expense.items)
    ).order_by(
        Expense.date.desc(),
        Expense.id.desc()
    ).offset(
        (filters.page - 1) * filters.page_size
    ).limit(filters.page_size).all()

    pagination = PaginationMeta(
        page=filters.page,
        page_size=filters.page_size,
        total=total,
        total_pages=math.ceil(total / filters.page_size)
    )
    return expenses, pagination


def get_expense_records(project: Project, db: Session) -> List[ExpenseRecord]:
    """
    Complete, unfiltered expense ledger of a project as engine input.
    Payers are identified by participant name.
    """
    names = {p.id: p.name for p in project.participants}
    expenses = db.query(Expense).filter(
        Expense.project_id == project.id
    ).order_by(Expense.id).all()

    return [
        ExpenseRecord(
            # A payer outside the project surfaces as an unknown reference in the engine
            payer_id=names.get(expense.payer_id, f"#{expense.payer_id}"),
            amount=to_minor_units(expense.total, project.currency)
        )
        for expense in expenses
    ]


def to_expense_response(expense: Expense, currency: str) -> ExpenseResponse:
    """Build the API representation of an expense."""
    return ExpenseResponse(
        id=expense.id,
        project_id=expense.project_id,
        payer_id=expense.payer_id,
        payer_name=expense.payer.name,
        date=expense.date,
        note=expense.note,
        total=quantize_amount(expense.total, currency),
        currency=currency,
        items=[
            ExpenseItemResponse(
                id=item.id,
                name=item.name,
                price=quantize_amount(item.price, currency),
                quantity=item.quantity
            )
            for item in expense.items
        ],
        created_at=expense.created_at,
        updated_at=expense.updated_at
    )
