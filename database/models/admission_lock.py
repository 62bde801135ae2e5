from sqlalchemy import Column, String, Integer, TIMESTAMP

from .base import Base, utcnow


class AdmissionLock(Base):
    """
    Per-student optimistic lock over the student's application set.

    Every write that changes which applications a student holds (apply,
    staff status change, admission selection) bumps this row inside the same
    transaction. Two such writers for one student cannot both commit: the
    second fails with StaleDataError and must redo its work.
    """
    __tablename__ = 'admission_locks'

    student_id = Column(String(36), primary_key=True)
    version_id = Column(Integer, nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __mapper_args__ = {"version_id_col": version_id}
