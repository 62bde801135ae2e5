#!/usr/bin/env python3
"""
Job ranking - batch-scores open jobs for one candidate.

Scores are computed on the fly with the job-ranking weight profile and
never persisted.
"""
import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from core.scorer import JOB_RANKING, Candidate, CategoryMatch, RequirementSet, WeightProfile, score

logger = logging.getLogger(__name__)

DEFAULT_MIN_SCORE = 50.0
DEFAULT_TOP_K = 10


@dataclass
class RankedJob:
    job_id: str
    title: Optional[str]
    company_id: Optional[str]
    company_name: Optional[str]
    location: Optional[str]
    job_type: Optional[str]
    match_score: int
    qualified: bool
    matched_categories: List[CategoryMatch] = field(default_factory=list)
    missing_requirements: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _field(job: Any, name: str) -> Any:
    if isinstance(job, dict):
        return job.get(name)
    return getattr(job, name, None)


def _company_name(job: Any) -> Optional[str]:
    name = _field(job, 'company_name')
    if name:
        return name
    company = None if isinstance(job, dict) else getattr(job, 'company', None)
    return company.name if company is not None else None


def rank_jobs(
    candidate: Optional[Candidate],
    open_jobs: Iterable[Any],
    min_score: float = DEFAULT_MIN_SCORE,
    top_k: int = DEFAULT_TOP_K,
    profile: WeightProfile = JOB_RANKING
) -> List[RankedJob]:
    """
    Rank jobs for a candidate.

    Args:
        candidate: Candidate snapshot; None yields no matches.
        open_jobs: Job rows or dicts with id/title/requirements/...
        min_score: Keep only jobs scoring strictly above this.
        top_k: Maximum number of results.
        profile: Weight profile used for every job.

    Returns:
        RankedJob list, best first. Jobs with equal scores keep their input order.
    """
    if candidate is None:
        return []

    ranked = []
    for job in open_jobs:
        result = score(candidate, RequirementSet.from_dict(_field(job, 'requirements')), profile)
        if result.score <= min_score:
            continue
        ranked.append(RankedJob(
            job_id=_field(job, 'id'),
            title=_field(job, 'title'),
            company_id=_field(job, 'company_id'),
            company_name=_company_name(job),
            location=_field(job, 'location'),
            job_type=_field(job, 'job_type'),
            match_score=result.score,
            qualified=result.qualified,
            matched_categories=result.matched_categories,
            missing_requirements=result.missing_requirements,
        ))

    # sorted() is stable, so ties keep input order
    ranked = sorted(ranked, key=lambda r: r.match_score, reverse=True)[:top_k]
    logger.debug(f"Ranked {len(ranked)} job(s) for candidate {candidate.student_id}")
    return ranked
