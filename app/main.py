"""
Career Fair Platform - Main Application

FastAPI backend with:
- MongoDB document store for fairs and their per-fair booth/job copies
- JWT bearer authentication
- Enrollment of companies into fairs with booth/job snapshots
- Live status gating for public fair content

Run: uvicorn app.main:app --reload
"""

import logging

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes import api_router
from app.core.config import get_settings
from app.core.errors import AppError
from app.core.logging_config import configure_logging
from app.db.document_store import DocumentStore, get_document_store
from app.db.mongodb import init_mongo_indexes

settings = get_settings()
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Career Fair Platform",
    description="""
    Employers register booths and jobs, students browse them, administrators
    decide when a fair is publicly visible.

    ## Features
    - **Fairs**: create, schedule, toggle live, rotate invite codes
    - **Enrollment**: companies join fairs by id or invite code; their booth
      and jobs are copied into the fair
    - **Fair content**: booths and jobs per fair, visible while the fair is live
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


# ============================================================
# ERROR HANDLERS - every error body is {"error": message}
# ============================================================

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Startup event
@app.on_event("startup")
async def startup_event():
    """Configure logging and create MongoDB indexes."""
    configure_logging()
    try:
        init_mongo_indexes()
        logger.info("MongoDB indexes initialized")
    except Exception as e:
        logger.warning("MongoDB index initialization failed: %s", e)


@app.get("/health", tags=["Health"])
def health_check(store: DocumentStore = Depends(get_document_store)):
    """Document store connectivity check."""
    connected = store.ping()
    return {
        "status": "healthy" if connected else "degraded",
        "mongodb": "connected" if connected else "disconnected",
    }
