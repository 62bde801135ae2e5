#!/usr/bin/env python3
"""
Error handlers for the web application.

Maps the service exception taxonomy (core.exceptions) onto HTTP status
codes with one consistent JSON error body.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

from core.exceptions import (
    ServiceException,
    NotFound,
    AlreadyApplied,
    ApplicationCapExceeded,
    TargetUnavailable,
    NotQualified,
    InvalidSelection,
    Unauthorized,
    StoreConflict
)

logger = logging.getLogger(__name__)

# Checked in order; SelectionUnauthorized is both Unauthorized and InvalidSelection
_STATUS_CODES = (
    (NotFound, 404),
    (Unauthorized, 403),
    ((AlreadyApplied, ApplicationCapExceeded, TargetUnavailable), 409),
    ((NotQualified, InvalidSelection), 400),
    (StoreConflict, 503),
)


def status_code_for(exc: ServiceException) -> int:
    for exc_types, status_code in _STATUS_CODES:
        if isinstance(exc, exc_types):
            return status_code
    return 500


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle service layer exceptions.

    Args:
        request: The FastAPI request.
        exc: The service exception.

    Returns:
        JSONResponse with error details.
    """
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"{exc.__class__.__name__} in {request.url.path}: {exc}")

    content = {
        "success": False,
        "error": str(exc),
        "type": exc.__class__.__name__
    }
    if isinstance(exc, NotQualified):
        content["missing_requirements"] = exc.missing_requirements

    return JSONResponse(status_code=status_code, content=content)


async def value_error_handler(
    request: Request,
    exc: ValueError
) -> JSONResponse:
    """Invalid arguments that passed request validation (unknown kind, status, ...)."""
    logger.info(f"Bad request in {request.url.path}: {exc}")

    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": str(exc),
            "type": "ValueError"
        }
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "type": "HTTPException"
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.
    """
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        }
    )
