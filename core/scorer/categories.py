#!/usr/bin/env python3
"""
Category Sub-scores - one function per qualification category.

Each *_match function returns a credit in [0, 1], or None when the
requirement set does not ask for that category (the category is then left
out of both the numerator and the denominator of the final score).

Skills and certificates use a deliberately loose bidirectional,
case-insensitive substring match: "reactjs" satisfies "React" and "Java"
satisfies "JavaScript". Changing this changes scoring outcomes.
"""

import math
from typing import Iterable, List, Optional, Sequence

from core.scorer.models import Candidate, EducationEntry, WorkExperience

EDUCATION_RANKS = {
    'high-school': 1,
    'diploma': 2,
    'bachelors': 3,
    'masters': 4,
    'phd': 5,
}

# Minimum total years of work experience per experience level
EXPERIENCE_THRESHOLDS = {
    'internship': 0.5,
    'entry-level': 1.0,
    'mid-level': 3.0,
    'senior': 5.0,
}


def fuzzy_match(a: str, b: str) -> bool:
    a, b = a.lower(), b.lower()
    return a in b or b in a


def education_rank(level: Optional[str]) -> int:
    if not level:
        return 0
    return EDUCATION_RANKS.get(level.strip().lower(), 0)


def highest_education_rank(education: Iterable[EducationEntry]) -> int:
    return max((education_rank(e.level) for e in education), default=0)


def _non_negative(value: float) -> float:
    return value if math.isfinite(value) and value > 0 else 0.0


def highest_gpa(education: Iterable[EducationEntry]) -> float:
    return max((_non_negative(e.gpa) for e in education), default=0.0)


def total_experience_years(work_experience: Iterable[WorkExperience]) -> float:
    return sum(_non_negative(w.years) for w in work_experience)


def education_match(candidate: Candidate, required_level: Optional[str]) -> Optional[float]:
    """Binary: highest level held meets or exceeds the required rank."""
    required_rank = education_rank(required_level)
    if required_rank == 0:
        return None
    return 1.0 if highest_education_rank(candidate.education) >= required_rank else 0.0


def matching_items(candidate_items: Sequence[str], required: Sequence[str]) -> List[str]:
    """Candidate items that fuzzy-match at least one required item."""
    return [c for c in candidate_items if any(fuzzy_match(c, r) for r in required)]


def uncovered_items(candidate_items: Sequence[str], required: Sequence[str]) -> List[str]:
    """Required items no candidate item fuzzy-matches."""
    return [r for r in required if not any(fuzzy_match(c, r) for c in candidate_items)]


def ratio_match(candidate_items: Sequence[str], required: Sequence[str]) -> Optional[float]:
    if not required:
        return None
    matched = matching_items(candidate_items, required)
    return min(len(matched) / len(required), 1.0)


def skills_match(candidate: Candidate, required_skills: Sequence[str]) -> Optional[float]:
    return ratio_match(candidate.skills, required_skills)


def certificates_match(candidate: Candidate, required_certificates: Sequence[str]) -> Optional[float]:
    return ratio_match([c.name for c in candidate.certificates], required_certificates)


def experience_threshold(level: Optional[str]) -> float:
    if not level:
        return 0.0
    return EXPERIENCE_THRESHOLDS.get(level.strip().lower(), 0.0)


def experience_match(candidate: Candidate, required_level: Optional[str]) -> Optional[float]:
    threshold = experience_threshold(required_level)
    if threshold <= 0:
        return None
    return min(total_experience_years(candidate.work_experience) / threshold, 1.0)


def gpa_match(candidate: Candidate, min_gpa: Optional[float]) -> Optional[float]:
    """Full credit at or above min_gpa, proportional credit below it."""
    if min_gpa is None:
        return None
    gpa = highest_gpa(candidate.education)
    if min_gpa <= 0 or gpa >= min_gpa:
        return 1.0
    return max(0.0, min(gpa / min_gpa, 1.0))
