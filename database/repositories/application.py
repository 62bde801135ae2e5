import logging
from typing import Any, Dict, List, Optional

from database.models import CourseApplication, JobApplication, utcnow
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

# Statuses that still occupy a slot against the cap / duplicate rule
LIVE_COURSE_STATUSES = ('pending', 'admitted', 'accepted')
LIVE_JOB_STATUSES = ('pending', 'shortlisted', 'interview')


class ApplicationRepository(BaseRepository):
    """Queries over course applications ('applications' collection)."""

    collection = 'applications'

    def get(self, application_id: Any) -> Optional[CourseApplication]:
        return self.store.get(self.collection, application_id)

    def get_for_student(self, student_id: str) -> List[CourseApplication]:
        return self.store.query(
            self.collection,
            [('student_id', '==', student_id)],
            order_by='-created_at'
        )

    def get_live_for_student(self, student_id: str) -> List[CourseApplication]:
        return self.store.query(self.collection, [
            ('student_id', '==', student_id),
            ('status', 'in', LIVE_COURSE_STATUSES),
        ])

    def get_live_for_student_and_course(self, student_id: str, course_id: str) -> List[CourseApplication]:
        return self.store.query(self.collection, [
            ('student_id', '==', student_id),
            ('course_id', '==', course_id),
            ('status', 'in', LIVE_COURSE_STATUSES),
        ])

    def count_live_for_institution(self, student_id: str, institution_id: str) -> int:
        return len(self.store.query(self.collection, [
            ('student_id', '==', student_id),
            ('institution_id', '==', institution_id),
            ('status', 'in', LIVE_COURSE_STATUSES),
        ]))

    def get_by_status(self, student_id: str, status: str) -> List[CourseApplication]:
        return self.store.query(
            self.collection,
            [('student_id', '==', student_id), ('status', '==', status)],
            order_by='-created_at'
        )

    def get_by_institution(self, institution_id: str) -> List[CourseApplication]:
        return self.store.query(
            self.collection,
            [('institution_id', '==', institution_id)],
            order_by='-created_at'
        )

    def get_by_course(self, course_id: str) -> List[CourseApplication]:
        return self.store.query(
            self.collection,
            [('course_id', '==', course_id)],
            order_by='-created_at'
        )

    def get_all(self, institution_id: Optional[str] = None) -> List[CourseApplication]:
        filters = [('institution_id', '==', institution_id)] if institution_id else []
        return self.store.query(self.collection, filters)

    def create(self, data: Dict[str, Any]) -> CourseApplication:
        now = utcnow()
        payload = {
            'status': 'pending',
            'applied_at': now,
            'created_at': now,
            'updated_at': now,
            **data,
        }
        application_id = self.store.create(self.collection, payload)
        logger.info(f"Created course application {application_id} for student {payload['student_id']}")
        return self.get(application_id)

    def delete(self, application_id: Any) -> None:
        self.store.delete(self.collection, application_id)


class JobApplicationRepository(BaseRepository):
    """Queries over job applications ('job_applications' collection)."""

    collection = 'job_applications'

    def get(self, application_id: Any) -> Optional[JobApplication]:
        return self.store.get(self.collection, application_id)

    def get_for_student(self, student_id: str) -> List[JobApplication]:
        return self.store.query(
            self.collection,
            [('student_id', '==', student_id)],
            order_by='-applied_at'
        )

    def get_by_job(self, job_id: str) -> List[JobApplication]:
        return self.store.query(
            self.collection,
            [('job_id', '==', job_id)],
            order_by='-applied_at'
        )

    def get_live_for_student_and_job(self, student_id: str, job_id: str) -> List[JobApplication]:
        return self.store.query(self.collection, [
            ('student_id', '==', student_id),
            ('job_id', '==', job_id),
            ('status', 'in', LIVE_JOB_STATUSES),
        ])

    def count_live_for_company(self, student_id: str, company_id: str) -> int:
        return len(self.store.query(self.collection, [
            ('student_id', '==', student_id),
            ('company_id', '==', company_id),
            ('status', 'in', LIVE_JOB_STATUSES),
        ]))

    def create(self, data: Dict[str, Any]) -> JobApplication:
        now = utcnow()
        payload = {
            'status': 'pending',
            'applied_at': now,
            'updated_at': now,
            **data,
        }
        application_id = self.store.create(self.collection, payload)
        logger.info(f"Created job application {application_id} for student {payload['student_id']}")
        return self.get(application_id)
