"""
Expense management routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date

from app.core.config import settings
from app.db.session import get_db
from app.schemas.expense import ExpenseCreate, ExpenseFilter, ExpenseListResponse, ExpenseResponse
from app.services import expense_service
from app.api.routes.projects import check_project_exists

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.get("", response_model=ExpenseListResponse)
async def list_expenses(
    project_id: int,
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    search: Optional[str] = Query(None, max_length=100),
    payer_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db)
):
    """List expenses of a project, filtered and paginated."""
    project = check_project_exists(project_id, db)

    filters = ExpenseFilter(
        project_id=project_id,
        page=page,
        page_size=page_size,
        search=search or None,
        payer_id=payer_id,
        start_date=start_date,
        end_date=end_date
    )

    expenses, pagination = expense_service.list_expenses(filters, db)
    return ExpenseListResponse(
        expenses=[expense_service.to_expense_response(e, project.currency) for e in expenses],
        pagination=pagination
    )


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_data: ExpenseCreate,
    db: Session = Depends(get_db)
):
    """Create a new expense with its items."""
    project = check_project_exists(expense_data.project_id, db)

    try:
        expense = expense_service.create_expense(project, expense_data, db)
    except ValueError as e:
        logger.warning(f"Rejected expense for project {project.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    expense = expense_service.get_expense(project.id, expense.id, db)
    return expense_service.to_expense_response(expense, project.currency)


@router.delete("/{expense_id}")
async def delete_expense(
    expense_id: int,
    project_id: int,
    db: Session = Depends(get_db)
):
    """Delete a single expense."""
    check_project_exists(project_id, db)

    if not expense_service.delete_expense(project_id, expense_id, db):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Expense not found"
        )
    return {"success": True}
