"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from app.api.routes.enrollment_routes import router as enrollment_router
from app.api.routes.fair_routes import router as fair_router
from app.api.routes.fair_resource_routes import router as fair_resource_router
from app.api.routes.company_routes import router as company_router
from app.schemas.schemas import ErrorResponse

# Every failure renders as {"error": message}
ERROR_RESPONSES = {
    status: {"model": ErrorResponse}
    for status in (400, 401, 403, 404, 500)
}

# Main API router
api_router = APIRouter()

# Enrollment routes first: /fairs/my-enrollments must win over /fairs/{fair_id}
api_router.include_router(enrollment_router, responses=ERROR_RESPONSES)
api_router.include_router(fair_router, responses=ERROR_RESPONSES)
api_router.include_router(fair_resource_router, responses=ERROR_RESPONSES)
api_router.include_router(company_router, responses=ERROR_RESPONSES)
