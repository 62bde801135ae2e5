"""
Profile and target providers.

Turns stored rows into the immutable snapshots the scorer and gatekeeper
work on: a Candidate for a student and a Target (with its RequirementSet)
for a course or job.
"""

from dataclasses import dataclass
from typing import List, Optional

from core.scorer import Candidate, RequirementSet
from database.models import Course, Job
from database.repositories import StudentRepository, TargetRepository
from database.store import DocumentStore

COURSE = 'course'
JOB = 'job'
TARGET_KINDS = (COURSE, JOB)


@dataclass(frozen=True)
class Target:
    kind: str
    id: str
    owner_id: str  # institution_id for courses, company_id for jobs
    status: str
    requirements: RequirementSet
    name: str
    code: Optional[str] = None
    owner_name: Optional[str] = None
    faculty_name: Optional[str] = None

    @property
    def available(self) -> bool:
        return self.status == 'active'

    @classmethod
    def from_course(cls, course: Course) -> 'Target':
        return cls(
            kind=COURSE,
            id=course.id,
            owner_id=course.institution_id,
            status=course.status,
            requirements=RequirementSet.from_dict(course.requirements),
            name=course.name,
            code=course.code,
            owner_name=course.institution.name if course.institution else None,
            faculty_name=course.faculty_name,
        )

    @classmethod
    def from_job(cls, job: Job) -> 'Target':
        return cls(
            kind=JOB,
            id=job.id,
            owner_id=job.company_id,
            status=job.status,
            requirements=RequirementSet.from_dict(job.requirements),
            name=job.title,
            owner_name=job.company.name if job.company else None,
        )


def validate_kind(kind: str) -> str:
    if kind not in TARGET_KINDS:
        raise ValueError(f"Unknown target kind '{kind}', expected one of {TARGET_KINDS}")
    return kind


def load_target(store: DocumentStore, kind: str, target_id: str) -> Optional[Target]:
    repo = TargetRepository(store)
    if validate_kind(kind) == COURSE:
        course = repo.get_course(target_id)
        return Target.from_course(course) if course else None
    job = repo.get_job(target_id)
    return Target.from_job(job) if job else None


def get_requirement_set(store: DocumentStore, kind: str, target_id: str) -> Optional[RequirementSet]:
    target = load_target(store, kind, target_id)
    return target.requirements if target else None


def list_open_targets(store: DocumentStore, kind: str, owner_id: Optional[str] = None) -> List[Target]:
    repo = TargetRepository(store)
    if validate_kind(kind) == COURSE:
        return [Target.from_course(c) for c in repo.get_active_courses(owner_id)]
    jobs = repo.get_active_jobs()
    if owner_id:
        jobs = [j for j in jobs if j.company_id == owner_id]
    return [Target.from_job(j) for j in jobs]


def get_candidate_profile(store: DocumentStore, student_id: str) -> Optional[Candidate]:
    profile = StudentRepository(store).get(student_id)
    return Candidate.from_profile(profile) if profile else None
