"""
Job Board Backend - Main Application

FastAPI backend with:
- MongoDB for company records
- Perceptual-hash logo verification for companies
- WebSocket channel for company profile updates

Run: uvicorn jobboard.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobboard.api.routes import api_router
from jobboard.core.config import get_settings
from jobboard.core.logging_setup import setup_logging
from jobboard.db.mongodb import init_mongo_indexes, test_mongo_connection

settings = get_settings()
setup_logging(settings.log_level)

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Job Board API",
    description="""
    Backend for the job board / education platform.

    ## Features
    - **Companies**: Registration with an official logo, listing, logo updates
    - **Verification**: Check an uploaded logo against the registered one
    - **Events**: `company:update` pushed over WebSocket

    ## Logo verification
    Logos are reduced to a perceptual hash (fingerprint). An upload verifies
    when its Hamming distance to the stored fingerprint is within the
    configured threshold.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes on startup."""
    try:
        init_mongo_indexes()
    except Exception as e:
        logger.warning("MongoDB index initialization failed: %s", e)


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "Job Board API"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
