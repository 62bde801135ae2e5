#!/usr/bin/env python3
"""
Scoring Module - Qualification scoring.

Public API:
- score: weighted 0-100 match between a Candidate and a RequirementSet
- Candidate, RequirementSet, QualificationResult: scoring inputs/outputs
- JOB_RANKING, COURSE_APPLICATION: the two named weight profiles

Modules:
- models.py: Candidate / RequirementSet snapshots and results
- categories.py: per-category sub-scores and the fuzzy string match
- weights.py: named weight profiles and qualification rules
- service.py: score() orchestrator
"""

from core.scorer.models import (
    Candidate, RequirementSet, QualificationResult, CategoryMatch,
    EducationEntry, WorkExperience, Certificate
)
from core.scorer.weights import WeightProfile, JOB_RANKING, COURSE_APPLICATION, get_profile
from core.scorer.service import score

__all__ = [
    'score',
    'Candidate',
    'RequirementSet',
    'QualificationResult',
    'CategoryMatch',
    'EducationEntry',
    'WorkExperience',
    'Certificate',
    'WeightProfile',
    'JOB_RANKING',
    'COURSE_APPLICATION',
    'get_profile',
]
