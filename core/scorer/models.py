#!/usr/bin/env python3
"""
Scoring Models - Candidate, RequirementSet and QualificationResult.

Candidate and RequirementSet are immutable snapshots built from stored
profiles / courses / jobs at scoring time. QualificationResult is derived
and never persisted.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


def _as_float(value: Any, default: float = 0.0) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    # "nan" and "inf" parse but would poison every weighted sum
    return number if math.isfinite(number) else default


def _clean_strings(values: Optional[List[Any]]) -> Tuple[str, ...]:
    """Drop blank/non-string entries; a blank skill would substring-match everything."""
    return tuple(str(v).strip() for v in (values or []) if v is not None and str(v).strip())


@dataclass(frozen=True)
class EducationEntry:
    level: Optional[str] = None
    field: Optional[str] = None
    gpa: float = 0.0
    institution: Optional[str] = None
    start_year: Optional[int] = None
    end_year: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EducationEntry':
        return cls(
            level=data.get('level'),
            field=data.get('field'),
            gpa=_as_float(data.get('gpa')),
            institution=data.get('institution'),
            start_year=data.get('start_year'),
            end_year=data.get('end_year'),
        )


@dataclass(frozen=True)
class WorkExperience:
    position: Optional[str] = None
    company: Optional[str] = None
    years: float = 0.0
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WorkExperience':
        return cls(
            position=data.get('position'),
            company=data.get('company'),
            years=_as_float(data.get('years')),
            start_date=data.get('start_date'),
            end_date=data.get('end_date'),
        )


@dataclass(frozen=True)
class Certificate:
    name: str
    issuer: Optional[str] = None
    issue_date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Certificate':
        return cls(
            name=str(data.get('name') or '').strip(),
            issuer=data.get('issuer'),
            issue_date=data.get('issue_date'),
        )


@dataclass(frozen=True)
class Candidate:
    """Read-only projection of a student profile used as scoring input."""
    student_id: str
    education: Tuple[EducationEntry, ...] = ()
    skills: Tuple[str, ...] = ()
    work_experience: Tuple[WorkExperience, ...] = ()
    certificates: Tuple[Certificate, ...] = ()
    preferred_location: Optional[str] = None

    @classmethod
    def from_profile(cls, profile) -> 'Candidate':
        """Build a snapshot from a StudentProfile row (or anything with the same attributes)."""
        return cls(
            student_id=str(profile.id),
            education=tuple(EducationEntry.from_dict(e) for e in (profile.education or []) if isinstance(e, dict)),
            skills=_clean_strings(profile.skills),
            work_experience=tuple(
                WorkExperience.from_dict(w) for w in (profile.work_experience or []) if isinstance(w, dict)
            ),
            certificates=tuple(
                c for c in (Certificate.from_dict(c) for c in (profile.certificates or []) if isinstance(c, dict))
                if c.name
            ),
            preferred_location=profile.preferred_location,
        )


@dataclass(frozen=True)
class RequirementSet:
    """Qualification criteria attached to a course or job."""
    education: Optional[str] = None
    experience_level: Optional[str] = None
    skills: Tuple[str, ...] = ()
    min_gpa: Optional[float] = None
    required_certificates: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'RequirementSet':
        if not data:
            return cls()
        min_gpa = data.get('min_gpa')
        return cls(
            education=(data.get('education') or None),
            experience_level=(data.get('experience_level') or None),
            skills=_clean_strings(data.get('skills')),
            min_gpa=_as_float(min_gpa) if min_gpa not in (None, '') else None,
            required_certificates=_clean_strings(data.get('required_certificates')),
        )

    def is_empty(self) -> bool:
        return not (
            self.education or self.experience_level or self.skills
            or self.min_gpa is not None or self.required_certificates
        )


@dataclass
class CategoryMatch:
    """Per-category outcome, for display."""
    category: str
    matched: bool
    match_percentage: Optional[int] = None
    requirement: Optional[str] = None


@dataclass
class QualificationResult:
    score: int = 0
    qualified: bool = False
    matched_categories: List[CategoryMatch] = field(default_factory=list)
    missing_requirements: List[str] = field(default_factory=list)
    profile: str = ""
