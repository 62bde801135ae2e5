#!/usr/bin/env python3
"""
Job Matching Service.

Loads a student's candidate profile and the open jobs from the store and
ranks them with rank_jobs(). Read-only: nothing is persisted.
"""
from typing import Any, Dict, List, Optional
import logging

from core.admissions.targets import get_candidate_profile
from core.config_loader import RankingConfig, ScoringConfig
from core.matcher.ranker import rank_jobs
from core.scorer import JOB_RANKING
from database.repositories import TargetRepository
from database.uow import SessionFactory, store_uow

logger = logging.getLogger(__name__)


class JobMatchingService:
    """Matches a student against every active job."""

    def __init__(
        self,
        session_factory: Optional[SessionFactory] = None,
        ranking_config: Optional[RankingConfig] = None,
        scoring_config: Optional[ScoringConfig] = None
    ):
        self.session_factory = session_factory
        self.config = ranking_config or RankingConfig()
        scoring_config = scoring_config or ScoringConfig()
        self.profile = JOB_RANKING.with_threshold(scoring_config.job_qualification_threshold)

    def get_matching_jobs(self, student_id: str) -> List[Dict[str, Any]]:
        """
        Ranked matching jobs for a student.

        Returns:
            RankedJob dicts, best first; [] when the student does not exist
            or the jobs could not be loaded.
        """
        try:
            with store_uow(self.session_factory) as store:
                candidate = get_candidate_profile(store, student_id)
                if candidate is None:
                    logger.info(f"No profile for student {student_id}, no job matches")
                    return []

                jobs = TargetRepository(store).get_active_jobs()
                ranked = rank_jobs(
                    candidate,
                    jobs,
                    min_score=self.config.min_score,
                    top_k=self.config.top_k,
                    profile=self.profile
                )
                results = [r.to_dict() for r in ranked]
        except Exception as e:
            logger.error(f"Error matching jobs for student {student_id}: {e}", exc_info=True)
            return []

        logger.info(f"Found {len(results)} matching job(s) for student {student_id}")
        return results
