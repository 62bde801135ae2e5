#!/usr/bin/env python3
"""
Application Gatekeeper - eligibility checks and application creation.

check_eligibility() evaluates every rule and reports all failures at once:

1. already_applied: a non-rejected application to this target exists
2. can_apply_to_target: fewer than `application_cap` non-rejected
   applications to the same institution/company
3. target_available: the course/job status is 'active'
4. qualified: course targets need every requirement fully met; job
   targets need a job-ranking score >= the configured threshold

apply_for_target() re-runs the same checks inside its own transaction and
raises on the first failing rule. The student's AdmissionLock is bumped
before those checks read anything, and the live-application unique index
is enforced in the same transaction, so two racing applications cannot
both commit past the cap or duplicate rule; the loser gets StoreConflict
or AlreadyApplied.
"""

import logging
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from core.admissions.targets import COURSE, Target, load_target, validate_kind
from core.config_loader import AdmissionsConfig, ScoringConfig
from core.exceptions import (
    AlreadyApplied, ApplicationCapExceeded, NotFound, NotQualified, TargetUnavailable
)
from core.scorer import COURSE_APPLICATION, JOB_RANKING, Candidate, score
from core.transaction import transaction
from database.repositories import (
    AdmissionLockRepository, ApplicationRepository, JobApplicationRepository,
    StudentRepository, TargetRepository
)
from database.store import DocumentStore, to_document
from database.uow import SessionFactory
from notification.message_builder import NotificationMessageBuilder
from notification.service import NotificationService

logger = logging.getLogger(__name__)


@dataclass
class EligibilityReport:
    qualified: bool
    can_apply_to_target: bool
    target_available: bool
    already_applied: bool
    missing_requirements: List[str] = field(default_factory=list)
    current_application_count: int = 0
    application_cap: int = 2
    score: int = 0
    kind: str = COURSE
    target_id: Optional[str] = None
    owner_id: Optional[str] = None

    @property
    def can_apply(self) -> bool:
        return (
            self.qualified and self.can_apply_to_target
            and self.target_available and not self.already_applied
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['can_apply'] = self.can_apply
        return data


class ApplicationGatekeeper:
    def __init__(
        self,
        session_factory: Optional[SessionFactory] = None,
        notifications: Optional[NotificationService] = None,
        admissions_config: Optional[AdmissionsConfig] = None,
        scoring_config: Optional[ScoringConfig] = None
    ):
        self.session_factory = session_factory
        self.notifications = notifications or NotificationService(session_factory)
        self.config = admissions_config or AdmissionsConfig()
        scoring_config = scoring_config or ScoringConfig()
        self.job_profile = JOB_RANKING.with_threshold(scoring_config.job_qualification_threshold)

    def check_eligibility(self, student_id: str, target_id: str, kind: str = COURSE) -> EligibilityReport:
        """
        Evaluate all eligibility rules without writing anything.

        Raises:
            NotFound: student or target does not exist.
        """
        with transaction(self.session_factory) as store:
            report, _ = self._evaluate(store, student_id, target_id, kind)
            return report

    def apply_for_target(self, student_id: str, target_id: str, kind: str = COURSE) -> Dict[str, Any]:
        """
        Create a pending application after re-checking eligibility.

        Returns:
            The created application as a dict.

        Raises:
            NotFound, NotQualified, ApplicationCapExceeded, TargetUnavailable,
            AlreadyApplied, StoreConflict
        """
        with transaction(self.session_factory) as store:
            # Claimed before any read, so the cap and duplicate checks below
            # see every application committed under an earlier lock version
            AdmissionLockRepository(store).bump(student_id)
            report, target = self._evaluate(store, student_id, target_id, kind)

            if not report.qualified:
                raise NotQualified(
                    "You do not meet the requirements for this "
                    f"{'course' if target.kind == COURSE else 'job'}",
                    report.missing_requirements
                )
            if not report.can_apply_to_target:
                raise ApplicationCapExceeded(
                    f"You have reached the maximum applications ({self.config.application_cap}) "
                    f"for this {'institution' if target.kind == COURSE else 'company'}"
                )
            if not report.target_available:
                raise TargetUnavailable(f"{target.name} is no longer accepting applications")
            if report.already_applied:
                raise AlreadyApplied(f"You have already applied to {target.name}")

            try:
                if target.kind == COURSE:
                    application = ApplicationRepository(store).create({
                        'student_id': student_id,
                        'course_id': target.id,
                        'institution_id': target.owner_id,
                        'course_name': target.name,
                        'course_code': target.code,
                        'institution_name': target.owner_name,
                        'faculty_name': target.faculty_name,
                    })
                else:
                    application = JobApplicationRepository(store).create({
                        'student_id': student_id,
                        'job_id': target.id,
                        'company_id': target.owner_id,
                        'job_title': target.name,
                        'company_name': target.owner_name,
                    })
                    target_repo = TargetRepository(store)
                    target_repo.increment_job_applications(target_repo.get_job(target.id))
                    store.db.flush()
            except IntegrityError as e:
                logger.warning(f"Duplicate live application by {student_id} for {target.kind} {target.id}: {e}")
                raise AlreadyApplied(f"You have already applied to {target.name}") from e

            document = to_document(application)

        if target.kind == COURSE:
            content = NotificationMessageBuilder.application_submitted(target.name)
        else:
            content = NotificationMessageBuilder.job_application_submitted(target.name, target.owner_name)
        self.notifications.emit(student_id, content, document['id'])

        logger.info(f"Student {student_id} applied to {target.kind} {target.id} (application {document['id']})")
        return document

    def _evaluate(
        self,
        store: DocumentStore,
        student_id: str,
        target_id: str,
        kind: str
    ) -> Tuple[EligibilityReport, Target]:
        validate_kind(kind)

        target = load_target(store, kind, target_id)
        if target is None:
            raise NotFound(f"{kind.capitalize()} {target_id} not found")

        profile = StudentRepository(store).get(student_id)
        if profile is None:
            raise NotFound(f"Student {student_id} not found")

        candidate = Candidate.from_profile(profile)

        if kind == COURSE:
            result = score(candidate, target.requirements, COURSE_APPLICATION)
            repo = ApplicationRepository(store)
            already_applied = bool(repo.get_live_for_student_and_course(student_id, target.id))
            count = repo.count_live_for_institution(student_id, target.owner_id)
        else:
            result = score(candidate, target.requirements, self.job_profile)
            repo = JobApplicationRepository(store)
            already_applied = bool(repo.get_live_for_student_and_job(student_id, target.id))
            count = repo.count_live_for_company(student_id, target.owner_id)

        report = EligibilityReport(
            qualified=result.qualified,
            can_apply_to_target=count < self.config.application_cap,
            target_available=target.available,
            already_applied=already_applied,
            missing_requirements=result.missing_requirements,
            current_application_count=count,
            application_cap=self.config.application_cap,
            score=result.score,
            kind=kind,
            target_id=target.id,
            owner_id=target.owner_id,
        )
        logger.debug(f"Eligibility for {student_id} -> {kind} {target_id}: {report}")
        return report, target
