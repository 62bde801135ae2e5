from .base import Base, utcnow, new_id
from .student import StudentProfile
from .institution import Institution, Course
from .company import Company, Job
from .application import (
    CourseApplication, JobApplication,
    COURSE_APPLICATION_STATUSES, JOB_APPLICATION_STATUSES
)
from .notification import Notification
from .admission_lock import AdmissionLock

__all__ = [
    'Base',
    'utcnow',
    'new_id',
    'StudentProfile',
    'Institution',
    'Course',
    'Company',
    'Job',
    'CourseApplication',
    'JobApplication',
    'COURSE_APPLICATION_STATUSES',
    'JOB_APPLICATION_STATUSES',
    'Notification',
    'AdmissionLock',
]
