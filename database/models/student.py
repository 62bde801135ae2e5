from sqlalchemy import Column, Text, String, TIMESTAMP, JSON

from .base import Base, utcnow, new_id


class StudentProfile(Base):
    """
    Student profile as the core sees it.

    Owned and edited by the student; scoring only ever reads a
    Candidate snapshot built from it (see core.scorer.models).
    """
    __tablename__ = 'students'

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(Text)
    first_name = Column(Text)
    last_name = Column(Text)
    phone = Column(Text)

    # [{level, field, gpa, institution, start_year, end_year}]
    education = Column(JSON, default=list)
    skills = Column(JSON, default=list)
    # [{position, company, years, start_date, end_date}]
    work_experience = Column(JSON, default=list)
    # [{name, issuer, issue_date}]
    certificates = Column(JSON, default=list)
    preferred_location = Column(Text)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()
