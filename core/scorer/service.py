#!/usr/bin/env python3
"""
Qualification Scorer - weighted 0-100 match between a Candidate and a
RequirementSet.

Pure: never touches the store and never mutates its inputs. Never raises
on bad or missing data; it degrades to score 0 / not qualified instead.

Final score:
    round(sum(credit * weight) / sum(weights of present categories) * 100)

Only categories the requirement set asks for take part. An empty
requirement set scores 100 and qualifies under either profile.
"""

import logging
import math
from typing import Dict, List, Optional

from core.scorer import categories
from core.scorer.models import Candidate, CategoryMatch, QualificationResult, RequirementSet
from core.scorer.weights import (
    JOB_RANKING, QUALIFY_BY_ALL_CHECKS, SUB_CATEGORIES, WeightProfile
)

logger = logging.getLogger(__name__)

FULL_CREDIT = 1.0 - 1e-9


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def sub_scores(candidate: Candidate, requirements: RequirementSet) -> Dict[str, Optional[float]]:
    """Credit per sub-category; None where not required."""
    return {
        'education': categories.education_match(candidate, requirements.education),
        'skills': categories.skills_match(candidate, requirements.skills),
        'experience': categories.experience_match(candidate, requirements.experience_level),
        'gpa': categories.gpa_match(candidate, requirements.min_gpa),
        'certificates': categories.certificates_match(candidate, requirements.required_certificates),
    }


def weighted_score(scores: Dict[str, Optional[float]], profile: WeightProfile) -> int:
    numerator = 0.0
    denominator = 0.0
    for weight, members in profile.groups.values():
        present = [scores[m] for m in members if scores.get(m) is not None]
        if not present:
            continue
        numerator += (sum(present) / len(present)) * weight
        denominator += weight

    if denominator == 0:
        return 100
    return max(0, min(100, round_half_up(numerator / denominator * 100)))


def _category_matches(
    requirements: RequirementSet,
    scores: Dict[str, Optional[float]]
) -> List[CategoryMatch]:
    details = []
    for name in SUB_CATEGORIES:
        credit = scores[name]
        if credit is None:
            continue
        if name == 'education':
            details.append(CategoryMatch('Education', credit >= FULL_CREDIT, requirement=requirements.education))
        elif name == 'skills':
            details.append(CategoryMatch(
                'Skills',
                credit > 0.5,
                match_percentage=round_half_up(credit * 100),
                requirement=f"{len(requirements.skills)} required skills"
            ))
        elif name == 'experience':
            details.append(CategoryMatch(
                'Experience',
                credit >= FULL_CREDIT,
                match_percentage=round_half_up(credit * 100),
                requirement=requirements.experience_level
            ))
        elif name == 'gpa':
            details.append(CategoryMatch(
                'GPA',
                credit >= FULL_CREDIT,
                match_percentage=round_half_up(credit * 100),
                requirement=f"Minimum GPA {requirements.min_gpa}"
            ))
        else:
            details.append(CategoryMatch(
                'Certificates',
                credit >= FULL_CREDIT,
                match_percentage=round_half_up(credit * 100),
                requirement=f"{len(requirements.required_certificates)} required certificates"
            ))
    return details


def _missing_requirements(
    candidate: Candidate,
    requirements: RequirementSet,
    scores: Dict[str, Optional[float]]
) -> List[str]:
    missing = []
    if scores['education'] is not None and scores['education'] < FULL_CREDIT:
        missing.append(f"Education level of {requirements.education} or higher")
    if scores['gpa'] is not None and scores['gpa'] < FULL_CREDIT:
        gpa = categories.highest_gpa(candidate.education)
        missing.append(f"Minimum GPA of {requirements.min_gpa} (you have {gpa:g})")
    if scores['skills'] is not None:
        uncovered = categories.uncovered_items(candidate.skills, requirements.skills)
        if uncovered:
            missing.append(f"Skills: {', '.join(uncovered)}")
    if scores['experience'] is not None and scores['experience'] < FULL_CREDIT:
        threshold = categories.experience_threshold(requirements.experience_level)
        years = categories.total_experience_years(candidate.work_experience)
        missing.append(
            f"{requirements.experience_level} experience ({threshold:g} years, you have {years:g})"
        )
    if scores['certificates'] is not None:
        names = [c.name for c in candidate.certificates]
        uncovered = categories.uncovered_items(names, requirements.required_certificates)
        if uncovered:
            missing.append(f"Certificates: {', '.join(uncovered)}")
    return missing


def score(
    candidate: Optional[Candidate],
    requirements: Optional[RequirementSet],
    profile: WeightProfile = JOB_RANKING
) -> QualificationResult:
    """
    Score a candidate against a requirement set.

    Args:
        candidate: Candidate snapshot, or None when the profile is missing.
        requirements: RequirementSet; None is treated as empty.
        profile: Named weight profile deciding weights and the qualified rule.

    Returns:
        QualificationResult (never persisted; recompute on every read).
    """
    requirements = requirements or RequirementSet()

    if requirements.is_empty():
        return QualificationResult(score=100, qualified=True, profile=profile.name)

    if candidate is None:
        return QualificationResult(
            score=0,
            qualified=False,
            missing_requirements=["Candidate profile not found"],
            profile=profile.name
        )

    try:
        scores = sub_scores(candidate, requirements)
        total = weighted_score(scores, profile)
    except Exception as e:
        logger.error(f"Scoring failed for candidate {candidate.student_id}: {e}", exc_info=True)
        return QualificationResult(score=0, qualified=False, profile=profile.name)

    missing = _missing_requirements(candidate, requirements, scores)

    if profile.qualification_rule == QUALIFY_BY_ALL_CHECKS:
        # Every requirement present must be fully met
        qualified = not missing
    else:
        qualified = total >= profile.threshold

    return QualificationResult(
        score=total,
        qualified=qualified,
        matched_categories=_category_matches(requirements, scores),
        missing_requirements=missing,
        profile=profile.name
    )
