from typing import Any, List, Optional

from database.models import Course, Job, Institution
from database.repositories.base import BaseRepository


class TargetRepository(BaseRepository):
    """Read access to the things students apply to: courses and jobs."""

    def get_course(self, course_id: Any) -> Optional[Course]:
        return self.store.get('courses', course_id)

    def get_job(self, job_id: Any) -> Optional[Job]:
        return self.store.get('jobs', job_id)

    def get_institution(self, institution_id: Any) -> Optional[Institution]:
        return self.store.get('institutions', institution_id)

    def get_active_jobs(self) -> List[Job]:
        return self.store.query('jobs', [('status', '==', 'active')], order_by='-created_at')

    def get_active_courses(self, institution_id: Optional[str] = None) -> List[Course]:
        filters = [('status', '==', 'active')]
        if institution_id:
            filters.append(('institution_id', '==', institution_id))
        return self.store.query('courses', filters, order_by='-created_at')

    def increment_job_applications(self, job: Job) -> None:
        # Evaluated in SQL, so concurrent applicants do not lose increments
        job.applications_count = Job.applications_count + 1
