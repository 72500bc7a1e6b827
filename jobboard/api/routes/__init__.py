"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from jobboard.api.routes.company_routes import router as company_router
from jobboard.api.routes.verify_routes import router as verify_router
from jobboard.api.routes.event_routes import router as event_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(company_router)
api_router.include_router(verify_router)
api_router.include_router(event_router)
