"""
Project management routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.models.project import Project
from app.schemas.project import (
    ProjectCreate, ProjectUpdate, ProjectResponse,
    ProjectSummaryResponse, ProjectDetailResponse
)
from app.services import project_service

router = APIRouter(prefix="/projects", tags=["projects"])


def check_project_exists(project_id: int, db: Session) -> Project:
    """Load a project or fail with 404."""
    project = project_service.get_project(project_id, db)
    if not project:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found"
        )
    return project


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    db: Session = Depends(get_db)
):
    """Create a new project with its participants."""
    return project_service.create_project(project_data, db)


@router.get("", response_model=List[ProjectSummaryResponse])
async def list_projects(db: Session = Depends(get_db)):
    """List all projects with their total spent."""
    return project_service.list_projects(db)


@router.get("/{project_id}", response_model=ProjectDetailResponse)
async def get_project(
    project_id: int,
    db: Session = Depends(get_db)
):
    """Get a project with participant totals, daily totals and settlements."""
    project = check_project_exists(project_id, db)
    return project_service.project_detail(project, db)


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: int,
    project_data: ProjectUpdate,
    db: Session = Depends(get_db)
):
    """Update project name or description."""
    project = check_project_exists(project_id, db)
    return project_service.update_project(project, project_data, db)


@router.delete("/{project_id}")
async def delete_project(
    project_id: int,
    db: Session = Depends(get_db)
):
    """Delete a project together with its expenses."""
    project = check_project_exists(project_id, db)
    project_service.delete_project(project, db)
    return {"success": True}
