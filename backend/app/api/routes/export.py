"""
Report export routes.
"""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date as dt_date
from app.db.session import get_db
from app.schemas.report import ProjectReport
from app.services.report_service import build_report, content_disposition, render_text
from app.api.routes.projects import check_project_exists

router = APIRouter(prefix="/export", tags=["export"])


@router.get("/{project_id}", response_model=ProjectReport)
async def export_report(
    project_id: int,
    type: str = Query("monthly"),
    date: Optional[dt_date] = None,
    db: Session = Depends(get_db)
):
    """
    Report data for the weekly, monthly or yearly period containing ``date`` (default today).
    This is the payload a PDF or spreadsheet renderer consumes.
    """
    project = check_project_exists(project_id, db)
    return build_report(project, type, date or dt_date.today(), db)


@router.get("/{project_id}/text", response_class=PlainTextResponse)
async def export_report_text(
    project_id: int,
    type: str = Query("monthly"),
    date: Optional[dt_date] = None,
    db: Session = Depends(get_db)
):
    """
    Download the report as a plain-text document.
    PDF rendering is left to external renderers, which consume the JSON export above.
    """
    project = check_project_exists(project_id, db)
    report = build_report(project, type, date or dt_date.today(), db)
    return PlainTextResponse(
        render_text(report),
        headers={"Content-Disposition": content_disposition(report.filename)}
    )
