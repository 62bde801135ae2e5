#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.

Every service is built per request from the session factory, so tests can
swap the database with a single override:

    app.dependency_overrides[get_session_factory] = lambda: TestingSessionLocal
"""

from fastapi import Depends

from core.admissions import AdmissionArbitrator, ApplicationGatekeeper, ApplicationService
from core.config_loader import get_config
from core.matcher import JobMatchingService
from database.uow import SessionFactory
from notification import NotificationService


def get_session_factory() -> SessionFactory:
    """
    FastAPI dependency that returns the application's session factory.

    Imported lazily so the engine is only created when a request needs it.
    """
    from database.database import SessionLocal
    return SessionLocal


def get_notification_service(
    session_factory: SessionFactory = Depends(get_session_factory)
) -> NotificationService:
    return NotificationService(session_factory, enabled=get_config().notifications.enabled)


def get_gatekeeper(
    session_factory: SessionFactory = Depends(get_session_factory),
    notifications: NotificationService = Depends(get_notification_service)
) -> ApplicationGatekeeper:
    config = get_config()
    return ApplicationGatekeeper(
        session_factory,
        notifications=notifications,
        admissions_config=config.admissions,
        scoring_config=config.scoring
    )


def get_arbitrator(
    session_factory: SessionFactory = Depends(get_session_factory),
    notifications: NotificationService = Depends(get_notification_service)
) -> AdmissionArbitrator:
    return AdmissionArbitrator(
        session_factory,
        notifications=notifications,
        admissions_config=get_config().admissions
    )


def get_application_service(
    session_factory: SessionFactory = Depends(get_session_factory)
) -> ApplicationService:
    return ApplicationService(session_factory, scoring_config=get_config().scoring)


def get_matching_service(
    session_factory: SessionFactory = Depends(get_session_factory)
) -> JobMatchingService:
    config = get_config()
    return JobMatchingService(
        session_factory,
        ranking_config=config.ranking,
        scoring_config=config.scoring
    )
