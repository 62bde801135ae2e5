import logging

from database.models import AdmissionLock, utcnow
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class AdmissionLockRepository(BaseRepository):
    """Per-student optimistic lock rows (see AdmissionLock)."""

    def bump(self, student_id: str) -> AdmissionLock:
        """
        Claim the student's application set for this transaction.

        Creates the lock row on first use, otherwise touches it so the flush
        issues a version-checked UPDATE. A concurrent writer that already
        committed a bump makes this flush raise StaleDataError (or
        IntegrityError when both raced to create the row).
        """
        lock = self.store.get('admission_locks', student_id)
        if lock is None:
            lock = AdmissionLock(student_id=student_id, updated_at=utcnow())
            self.db.add(lock)
        else:
            lock.updated_at = utcnow()
        self.db.flush()
        logger.debug(f"Admission lock for {student_id} at version {lock.version_id}")
        return lock
