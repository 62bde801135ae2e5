#!/usr/bin/env python3
"""
Admissions Portal - FastAPI Application

HTTP surface over the admissions core: eligibility and applications,
admission selection, staff review, job matching and notifications.

Usage:
    python -m web.backend.app

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging

from fastapi import FastAPI, HTTPException

from core.config_loader import get_config
from core.exceptions import ServiceException
from .exceptions import (
    service_exception_handler,
    value_error_handler,
    http_exception_handler,
    general_exception_handler
)
from .routers import (
    applications_router,
    admissions_router,
    jobs_router,
    notifications_router
)

# Load configuration
config = get_config()

# Configure logging
logging.basicConfig(
    level=config.logging.level,
    format=config.logging.format
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Admissions Portal API",
    description="Course admissions and job applications: eligibility, arbitration and matching",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Register exception handlers
app.add_exception_handler(ServiceException, service_exception_handler)
app.add_exception_handler(ValueError, value_error_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Include routers
app.include_router(applications_router)
app.include_router(admissions_router)
app.include_router(jobs_router)
app.include_router(notifications_router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "admissions-portal"}


def main():
    """Create tables if needed and run the web server."""
    import uvicorn
    from database.init_db import init_db

    init_db()

    logger.info(f"Starting Admissions Portal on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level=config.logging.level.lower()
    )


if __name__ == "__main__":
    main()
