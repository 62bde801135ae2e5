#!/usr/bin/env python3
"""
Application read service.

Course applications carry denormalized display fields from the moment they
are created, so the normal read path needs no joins. Older or imported rows
without them are enriched from the course, institution and student records
on read; enrichment is best effort and a failure only loses the extra
fields, never the read.
"""

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from core.config_loader import ScoringConfig
from core.exceptions import NotFound
from core.scorer import JOB_RANKING, Candidate, RequirementSet, score
from core.transaction import transaction
from database.models import COURSE_APPLICATION_STATUSES, CourseApplication
from database.repositories import (
    AdmissionLockRepository, ApplicationRepository, JobApplicationRepository,
    StudentRepository, TargetRepository
)
from database.store import DocumentStore, to_document
from database.uow import SessionFactory

logger = logging.getLogger(__name__)


class ApplicationService:
    def __init__(
        self,
        session_factory: Optional[SessionFactory] = None,
        scoring_config: Optional[ScoringConfig] = None
    ):
        self.session_factory = session_factory
        scoring_config = scoring_config or ScoringConfig()
        self.job_profile = JOB_RANKING.with_threshold(scoring_config.job_qualification_threshold)

    def get_application(self, application_id: str, enrich: bool = True) -> Dict[str, Any]:
        """
        Fetch one course application.

        With enrich=True the student's contact details are attached, and
        course details are fetched when the stored display fields are missing.

        Raises:
            NotFound: application does not exist.
        """
        with transaction(self.session_factory) as store:
            application = ApplicationRepository(store).get(application_id)
            if application is None:
                raise NotFound(f"Application {application_id} not found")

            document = to_document(application)
            if enrich:
                self._enrich(store, application, document, with_student=True, with_course=True)
            return document

    def get_student_applications(self, student_id: str) -> List[Dict[str, Any]]:
        """All course applications of a student, newest first."""
        with transaction(self.session_factory) as store:
            documents = []
            for application in ApplicationRepository(store).get_for_student(student_id):
                document = to_document(application)
                self._enrich(store, application, document, with_course=True)
                documents.append(document)
            return documents

    def get_student_admissions(self, student_id: str) -> List[Dict[str, Any]]:
        """Admitted (not yet selected) offers of a student, newest first, with institution location."""
        with transaction(self.session_factory) as store:
            documents = []
            for application in ApplicationRepository(store).get_by_status(student_id, 'admitted'):
                document = to_document(application)
                self._enrich(store, application, document, with_course=True, with_location=True)
                documents.append(document)
            return documents

    def get_applications_by_institution(self, institution_id: str) -> List[Dict[str, Any]]:
        with transaction(self.session_factory) as store:
            documents = []
            for application in ApplicationRepository(store).get_by_institution(institution_id):
                document = to_document(application)
                self._enrich(store, application, document, with_student=True)
                documents.append(document)
            return documents

    def get_applications_by_course(self, course_id: str) -> List[Dict[str, Any]]:
        with transaction(self.session_factory) as store:
            documents = []
            for application in ApplicationRepository(store).get_by_course(course_id):
                document = to_document(application)
                self._enrich(store, application, document, with_student=True)
                documents.append(document)
            return documents

    def get_application_stats(self, institution_id: Optional[str] = None) -> Dict[str, int]:
        """Counts per status, over one institution or all applications."""
        with transaction(self.session_factory) as store:
            statuses = [a.status for a in ApplicationRepository(store).get_all(institution_id)]

        stats = {'total': len(statuses)}
        for status in COURSE_APPLICATION_STATUSES:
            stats[status] = statuses.count(status)
        return stats

    def delete_application(self, application_id: str) -> None:
        """
        Admin hard delete.

        Raises:
            NotFound: application does not exist.
        """
        with transaction(self.session_factory) as store:
            repo = ApplicationRepository(store)
            application = repo.get(application_id)
            if application is None:
                raise NotFound(f"Application {application_id} not found")

            AdmissionLockRepository(store).bump(application.student_id)
            repo.delete(application_id)

        logger.info(f"Application {application_id} deleted")

    def get_qualified_applicants(self, job_id: str) -> List[Dict[str, Any]]:
        """
        Job applicants whose job-ranking score reaches the qualification
        threshold, best first, with their per-category match details.

        Raises:
            NotFound: job does not exist.
        """
        with transaction(self.session_factory) as store:
            targets = TargetRepository(store)
            job = targets.get_job(job_id)
            if job is None:
                raise NotFound(f"Job {job_id} not found")

            requirements = RequirementSet.from_dict(job.requirements)
            students = StudentRepository(store)

            applicants = []
            for application in JobApplicationRepository(store).get_by_job(job_id):
                profile = students.get(application.student_id)
                if profile is None:
                    logger.warning(f"Job application {application.id} references missing student {application.student_id}")
                    continue

                result = score(Candidate.from_profile(profile), requirements, self.job_profile)
                if not result.qualified:
                    continue

                document = to_document(application)
                document.update({
                    'student_name': profile.full_name,
                    'student_email': profile.email,
                    'match_score': result.score,
                    'matched_categories': [asdict(m) for m in result.matched_categories],
                    'missing_requirements': result.missing_requirements,
                })
                applicants.append(document)

        applicants.sort(key=lambda a: a['match_score'], reverse=True)
        logger.info(f"Job {job_id}: {len(applicants)} qualified applicant(s)")
        return applicants

    def _enrich(
        self,
        store: DocumentStore,
        application: CourseApplication,
        document: Dict[str, Any],
        with_student: bool = False,
        with_course: bool = False,
        with_location: bool = False
    ) -> None:
        try:
            targets = TargetRepository(store)

            if with_student and application.student_id:
                student = StudentRepository(store).get(application.student_id)
                if student is not None:
                    document['student_name'] = student.full_name
                    document['student_email'] = student.email
                    document['student_phone'] = student.phone

            if with_course and application.course_id and not application.course_name:
                course = targets.get_course(application.course_id)
                if course is not None:
                    document.update({
                        'course_name': course.name,
                        'course_code': course.code,
                        'course_description': course.description,
                        'course_duration': course.duration,
                        'course_fees': course.fees,
                        'course_requirements': course.requirements,
                        'faculty_name': course.faculty_name,
                        'institution_name': course.institution.name if course.institution else None,
                    })

            if with_location and application.institution_id:
                institution = targets.get_institution(application.institution_id)
                if institution is not None:
                    document['institution_location'] = institution.location
        except Exception as e:
            logger.error(f"Error enriching application {application.id}: {e}", exc_info=True)
