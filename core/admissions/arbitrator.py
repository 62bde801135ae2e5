#!/usr/bin/env python3
"""
Admission Arbitrator - owns every status change of an application.

Course application lifecycle:

    pending  -> admitted | rejected        (staff)
    admitted -> pending | rejected         (staff)
    rejected -> pending                    (staff revert)
    admitted -> accepted                   (student, select_admission only)

select_admission() accepts one admitted offer and declines every other
admitted offer of the same student in a single transaction. Concurrent
writers are detected through row versions (applications and the student's
AdmissionLock); the losing transaction is rolled back and the whole
selection is retried a bounded number of times before StoreConflict
surfaces to the caller.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from tenacity import (
    retry,
    stop_after_attempt,
    wait_fixed,
    retry_if_exception_type,
    before_sleep_log
)

from core.config_loader import AdmissionsConfig
from core.exceptions import (
    InvalidSelection, InvalidTransition, NotFound, SelectionUnauthorized, StoreConflict
)
from core.transaction import transaction
from database.models import utcnow
from database.repositories import (
    AdmissionLockRepository, ApplicationRepository, JobApplicationRepository
)
from database.store import BatchOperation, to_document
from database.uow import SessionFactory
from notification.message_builder import NotificationMessageBuilder
from notification.service import NotificationService

logger = logging.getLogger(__name__)

DECLINE_REASON = "Student selected another institution"

COURSE_TRANSITIONS = {
    'pending': {'admitted', 'rejected'},
    'admitted': {'pending', 'rejected'},
    'rejected': {'pending'},
    'accepted': set(),
}

JOB_TRANSITIONS = {
    'pending': {'shortlisted', 'interview', 'rejected'},
    'shortlisted': {'interview', 'rejected', 'pending'},
    'interview': {'rejected', 'shortlisted'},
    'rejected': {'pending'},
}


@dataclass
class SelectionOutcome:
    application: Dict[str, Any]
    declined_application_ids: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'application': self.application,
            'declined_application_ids': list(self.declined_application_ids),
            'declined_count': len(self.declined_application_ids),
        }


def _conflict_retry(attempts: int, wait_seconds: float):
    """Return a tenacity @retry decorator that re-runs a transaction on StoreConflict."""
    return retry(
        retry=retry_if_exception_type(StoreConflict),
        stop=stop_after_attempt(attempts),
        wait=wait_fixed(wait_seconds),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


class AdmissionArbitrator:
    def __init__(
        self,
        session_factory: Optional[SessionFactory] = None,
        notifications: Optional[NotificationService] = None,
        admissions_config: Optional[AdmissionsConfig] = None
    ):
        self.session_factory = session_factory
        self.notifications = notifications or NotificationService(session_factory)
        self.config = admissions_config or AdmissionsConfig()
        self._select_with_retry = _conflict_retry(
            self.config.select_retry_attempts,
            self.config.select_retry_wait_seconds
        )(self._select_once)

    def select_admission(self, student_id: str, application_id: str) -> SelectionOutcome:
        """
        Accept one admitted offer and decline the student's other admitted offers.

        Raises:
            NotFound: application does not exist.
            SelectionUnauthorized: application belongs to another student.
            InvalidSelection: application is not 'admitted', or the student
                has already accepted an offer.
            StoreConflict: still conflicting after the configured retries.
        """
        outcome = self._select_with_retry(student_id, application_id)

        content = NotificationMessageBuilder.admission_selected(
            outcome.application.get('course_name'),
            len(outcome.declined_application_ids)
        )
        self.notifications.emit(student_id, content, application_id)

        logger.info(
            f"Student {student_id} accepted application {application_id}, "
            f"declined {len(outcome.declined_application_ids)} other offer(s)"
        )
        return outcome

    def _select_once(self, student_id: str, application_id: str) -> SelectionOutcome:
        with transaction(self.session_factory) as store:
            repo = ApplicationRepository(store)

            application = repo.get(application_id)
            if application is None:
                raise NotFound(f"Application {application_id} not found")
            if application.student_id != student_id:
                logger.warning(f"Student {student_id} tried to select application {application_id} of another student")
                raise SelectionUnauthorized("You can only select your own admissions")
            if application.status != 'admitted':
                raise InvalidSelection(
                    f"Only admitted applications can be selected (current status: {application.status})"
                )

            AdmissionLockRepository(store).bump(student_id)

            if repo.get_by_status(student_id, 'accepted'):
                raise InvalidSelection("You have already accepted an admission offer")

            now = utcnow()
            declined_ids = [
                other.id for other in repo.get_by_status(student_id, 'admitted')
                if other.id != application_id
            ]

            operations = [
                BatchOperation.update('applications', application_id, {
                    'status': 'accepted',
                    'student_selected': True,
                    'selected_at': now,
                    'updated_at': now,
                })
            ]
            operations.extend(
                BatchOperation.update('applications', other_id, {
                    'status': 'rejected',
                    'rejection_reason': DECLINE_REASON,
                    'updated_at': now,
                })
                for other_id in declined_ids
            )
            store.run_batch(operations)

            return SelectionOutcome(
                application=to_document(application),
                declined_application_ids=declined_ids
            )

    def update_application_status(
        self,
        application_id: str,
        new_status: str,
        reviewer: Optional[str] = None,
        notes: str = ''
    ) -> Dict[str, Any]:
        """
        Staff review of a course application.

        Raises:
            NotFound: application does not exist.
            InvalidTransition: the change is not allowed from the current status.
            StoreConflict: a concurrent change to the student's applications won.
        """
        with transaction(self.session_factory) as store:
            repo = ApplicationRepository(store)

            application = repo.get(application_id)
            if application is None:
                raise NotFound(f"Application {application_id} not found")

            current = application.status
            if new_status not in COURSE_TRANSITIONS.get(current, set()):
                raise InvalidTransition(f"Cannot change application status from '{current}' to '{new_status}'")

            if current == 'rejected':
                others = [
                    a for a in repo.get_live_for_student_and_course(application.student_id, application.course_id)
                    if a.id != application.id
                ]
                if others:
                    raise InvalidTransition("The student already has a live application for this course")

            AdmissionLockRepository(store).bump(application.student_id)

            now = utcnow()
            application.status = new_status
            application.reviewed_at = now
            application.updated_at = now
            if reviewer:
                application.reviewed_by = reviewer
            if notes:
                application.reviewer_notes = notes
            if new_status == 'pending':
                application.rejection_reason = None
            store.db.flush()

            document = to_document(application)

        content = NotificationMessageBuilder.application_status(
            new_status, document['course_name'], document['institution_name']
        )
        self.notifications.emit(document['student_id'], content, application_id)

        logger.info(f"Application {application_id} moved from {current} to {new_status} by {reviewer or 'unknown'}")
        return document

    def update_job_application_status(
        self,
        application_id: str,
        new_status: str,
        reviewer: Optional[str] = None,
        notes: str = ''
    ) -> Dict[str, Any]:
        """Company review of a job application; same rules as update_application_status."""
        with transaction(self.session_factory) as store:
            repo = JobApplicationRepository(store)

            application = repo.get(application_id)
            if application is None:
                raise NotFound(f"Job application {application_id} not found")

            current = application.status
            if new_status not in JOB_TRANSITIONS.get(current, set()):
                raise InvalidTransition(f"Cannot change job application status from '{current}' to '{new_status}'")

            if current == 'rejected':
                others = [
                    a for a in repo.get_live_for_student_and_job(application.student_id, application.job_id)
                    if a.id != application.id
                ]
                if others:
                    raise InvalidTransition("The student already has a live application for this job")

            now = utcnow()
            application.status = new_status
            application.reviewed_at = now
            application.updated_at = now
            if reviewer:
                application.reviewed_by = reviewer
            if notes:
                application.reviewer_notes = notes
            store.db.flush()

            document = to_document(application)

        content = NotificationMessageBuilder.job_application_status(
            new_status, document['job_title'], document['company_name']
        )
        self.notifications.emit(document['student_id'], content, application_id)

        logger.info(f"Job application {application_id} moved from {current} to {new_status}")
        return document
