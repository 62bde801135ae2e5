from sqlalchemy import Column, Text, String, Integer, Boolean, TIMESTAMP, ForeignKey, Index
from sqlalchemy.sql import text as sql_text

from .base import Base, utcnow, new_id

COURSE_APPLICATION_STATUSES = ('pending', 'admitted', 'accepted', 'rejected')
JOB_APPLICATION_STATUSES = ('pending', 'shortlisted', 'interview', 'rejected')


class CourseApplication(Base):
    """
    A student's application to a course.

    Display fields (course_name, institution_name, ...) are denormalized at
    creation so reads need no joins; they may go stale if the course is
    edited afterwards.

    At most one row per student may be 'accepted'. Only the admission
    arbitrator writes that status.
    """
    __tablename__ = 'applications'

    id = Column(String(36), primary_key=True, default=new_id)
    student_id = Column(String(36), ForeignKey('students.id', ondelete='CASCADE'), nullable=False)
    course_id = Column(String(36), ForeignKey('courses.id'), nullable=False)
    institution_id = Column(String(36), ForeignKey('institutions.id'), nullable=False)

    # Denormalized display fields
    course_name = Column(Text)
    course_code = Column(Text)
    institution_name = Column(Text)
    faculty_name = Column(Text)

    status = Column(Text, nullable=False, default='pending')  # pending|admitted|accepted|rejected
    student_selected = Column(Boolean, nullable=False, default=False)
    selected_at = Column(TIMESTAMP(timezone=True))
    rejection_reason = Column(Text)

    reviewed_at = Column(TIMESTAMP(timezone=True))
    reviewed_by = Column(Text)
    reviewer_notes = Column(Text)

    applied_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    # Optimistic concurrency: a commit against a stale version raises StaleDataError
    version_id = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version_id}

    __table_args__ = (
        Index('idx_application_student_status', 'student_id', 'status'),
        Index('idx_application_institution', 'institution_id'),
        Index('idx_application_course', 'course_id'),
        # One live (non-rejected) application per student and course
        Index(
            'uq_application_student_course_live', 'student_id', 'course_id',
            unique=True,
            postgresql_where=sql_text("status <> 'rejected'"),
            sqlite_where=sql_text("status <> 'rejected'"),
        ),
    )


class JobApplication(Base):
    """A student's application to a job."""
    __tablename__ = 'job_applications'

    id = Column(String(36), primary_key=True, default=new_id)
    student_id = Column(String(36), ForeignKey('students.id', ondelete='CASCADE'), nullable=False)
    job_id = Column(String(36), ForeignKey('jobs.id'), nullable=False)
    company_id = Column(String(36), ForeignKey('companies.id'), nullable=False)

    job_title = Column(Text)
    company_name = Column(Text)
    cover_letter = Column(Text)

    status = Column(Text, nullable=False, default='pending')  # pending|shortlisted|interview|rejected

    reviewed_at = Column(TIMESTAMP(timezone=True))
    reviewed_by = Column(Text)
    reviewer_notes = Column(Text)

    applied_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    version_id = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version_id}

    __table_args__ = (
        Index('idx_job_application_student_status', 'student_id', 'status'),
        Index('idx_job_application_job', 'job_id'),
        Index(
            'uq_job_application_student_job_live', 'student_id', 'job_id',
            unique=True,
            postgresql_where=sql_text("status <> 'rejected'"),
            sqlite_where=sql_text("status <> 'rejected'"),
        ),
    )
