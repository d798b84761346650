"""
Settlement routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.schemas.settlement import SettlementSummary
from app.services.settlement_service import calculate_project_settlement
from app.api.routes.projects import check_project_exists

router = APIRouter(prefix="/settlement", tags=["settlement"])


@router.get("/{project_id}", response_model=SettlementSummary)
async def get_settlement(
    project_id: int,
    db: Session = Depends(get_db)
):
    """Balances and the minimal transfers that settle a project."""
    project = check_project_exists(project_id, db)
    return calculate_project_settlement(project, db)
