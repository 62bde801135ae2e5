"""Matcher Module - job ranking for a student profile."""
from core.matcher.ranker import RankedJob, rank_jobs, DEFAULT_MIN_SCORE, DEFAULT_TOP_K
from core.matcher.service import JobMatchingService

__all__ = [
    'JobMatchingService', 'RankedJob', 'rank_jobs',
    'DEFAULT_MIN_SCORE', 'DEFAULT_TOP_K'
]
