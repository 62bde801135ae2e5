from database.repositories.base import BaseRepository
from database.repositories.application import (
    ApplicationRepository, JobApplicationRepository,
    LIVE_COURSE_STATUSES, LIVE_JOB_STATUSES
)
from database.repositories.target import TargetRepository
from database.repositories.student import StudentRepository
from database.repositories.notification import NotificationRepository
from database.repositories.admission_lock import AdmissionLockRepository

__all__ = [
    'BaseRepository',
    'ApplicationRepository',
    'JobApplicationRepository',
    'LIVE_COURSE_STATUSES',
    'LIVE_JOB_STATUSES',
    'TargetRepository',
    'StudentRepository',
    'NotificationRepository',
    'AdmissionLockRepository',
]
