"""
FastAPI entrypoint for the ledger reconciliation service.
"""
import logging
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.core.config import settings
from app.core.exceptions import InvalidReference, UnbalancedInput
from app.core.utils import format_error
from app.api.router import api_router
from app.db.session import init_db

logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Shared expense ledgers and minimal settlement transfers",
    version="1.0.0",
    debug=settings.DEBUG
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    """Create tables if they do not exist yet."""
    init_db()


@app.exception_handler(InvalidReference)
async def invalid_reference_handler(request: Request, exc: InvalidReference):
    """An expense points at a payer outside the project."""
    logger.warning(f"{request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=format_error(str(exc), {"payer_id": exc.payer_id})
    )


@app.exception_handler(UnbalancedInput)
async def unbalanced_input_handler(request: Request, exc: UnbalancedInput):
    """Balances were built inconsistently; this is a server-side bug."""
    logger.error(f"{request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=format_error("Ledger is out of balance", {"imbalance": str(exc.imbalance)})
    )


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": f"{settings.APP_NAME} API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
