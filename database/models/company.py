from sqlalchemy import Column, Text, String, Integer, TIMESTAMP, JSON, ForeignKey, Index
from sqlalchemy.orm import relationship

from .base import Base, utcnow, new_id


class Company(Base):
    __tablename__ = 'companies'

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(Text, nullable=False)
    location = Column(Text)
    industry = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    jobs = relationship("Job", back_populates="company")


class Job(Base):
    """
    A job posted by a company. Same `requirements` JSON shape as Course.
    """
    __tablename__ = 'jobs'

    id = Column(String(36), primary_key=True, default=new_id)
    company_id = Column(String(36), ForeignKey('companies.id', ondelete='CASCADE'), nullable=False)

    title = Column(Text, nullable=False)
    description = Column(Text)
    location = Column(Text)
    job_type = Column(Text)
    industry = Column(Text)
    requirements = Column(JSON, default=dict)
    status = Column(Text, nullable=False, default='active')  # active|closed

    applications_count = Column(Integer, nullable=False, default=0)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    company = relationship("Company", back_populates="jobs")

    __table_args__ = (
        Index('idx_job_company', 'company_id'),
        Index('idx_job_status', 'status'),
    )
