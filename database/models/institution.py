from sqlalchemy import Column, Text, String, TIMESTAMP, JSON, ForeignKey, Index
from sqlalchemy.orm import relationship

from .base import Base, utcnow, new_id


class Institution(Base):
    __tablename__ = 'institutions'

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(Text, nullable=False)
    location = Column(Text)
    status = Column(Text, nullable=False, default='active')  # active|inactive
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    courses = relationship("Course", back_populates="institution")


class Course(Base):
    """
    A course offered by an institution.

    `requirements` holds the RequirementSet as JSON:
    {education, experience_level, skills, min_gpa, required_certificates}.
    Courses are never deleted while applications reference them; they are
    closed by setting status to 'inactive'.
    """
    __tablename__ = 'courses'

    id = Column(String(36), primary_key=True, default=new_id)
    institution_id = Column(String(36), ForeignKey('institutions.id', ondelete='CASCADE'), nullable=False)

    name = Column(Text, nullable=False)
    code = Column(Text)
    faculty_name = Column(Text)
    description = Column(Text)
    duration = Column(Text)
    fees = Column(Text)
    requirements = Column(JSON, default=dict)
    status = Column(Text, nullable=False, default='active')  # active|inactive

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    institution = relationship("Institution", back_populates="courses")

    __table_args__ = (
        Index('idx_course_institution', 'institution_id'),
        Index('idx_course_status', 'status'),
    )
