"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from app.api.routes import projects, expenses, settlements, export

api_router = APIRouter()

# Include all route modules
api_router.include_router(projects.router)
api_router.include_router(expenses.router)
api_router.include_router(settlements.router)
api_router.include_router(export.router)
