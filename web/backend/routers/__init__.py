"""API route handlers."""

from .applications import router as applications_router
from .admissions import router as admissions_router
from .jobs import router as jobs_router
from .notifications import router as notifications_router
