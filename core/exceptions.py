#!/usr/bin/env python3
"""
Domain exceptions surfaced by the gatekeeper and the arbitrator.

Store-level errors (SQLAlchemy) never reach callers directly; they are
logged and re-raised as StoreConflict.
"""


class ServiceException(Exception):
    """Base exception for service layer errors."""
    pass


class NotFound(ServiceException):
    """Referenced student, target or application does not exist."""
    pass


class AlreadyApplied(ServiceException):
    """A non-rejected application to the same target already exists."""
    pass


class ApplicationCapExceeded(ServiceException):
    """Student already holds the maximum live applications for the institution/company."""
    pass


class TargetUnavailable(ServiceException):
    """The course or job is not accepting applications."""
    pass


class NotQualified(ServiceException):
    """Candidate does not meet the target's requirements."""

    def __init__(self, message: str, missing_requirements=None):
        super().__init__(message)
        self.missing_requirements = list(missing_requirements or [])


class InvalidSelection(ServiceException):
    """Admission selection or status change not allowed in the current state."""
    pass


class InvalidTransition(InvalidSelection):
    """Staff status change not allowed from the application's current status."""
    pass


class Unauthorized(ServiceException):
    """Actor has no rights over the entity."""
    pass


class SelectionUnauthorized(InvalidSelection, Unauthorized):
    """Student tried to select an admission that belongs to someone else."""
    pass


class StoreConflict(ServiceException):
    """Transaction could not commit; the whole operation may be retried."""
    pass
