#!/usr/bin/env python3
"""
Weight Profiles - named category weightings for the two scoring call sites.

- job-ranking: five categories, qualified when score >= threshold.
- course-application: academic / skills / experience, qualified only when
  every requirement present is fully met.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

QUALIFY_BY_THRESHOLD = "threshold"
QUALIFY_BY_ALL_CHECKS = "all_checks"

SUB_CATEGORIES = ('education', 'skills', 'experience', 'gpa', 'certificates')


@dataclass(frozen=True)
class WeightProfile:
    name: str
    # weighted category -> (weight, sub-categories averaged into it)
    groups: Dict[str, Tuple[float, Tuple[str, ...]]]
    qualification_rule: str = QUALIFY_BY_THRESHOLD
    threshold: Optional[float] = None

    def __post_init__(self):
        total = sum(weight for weight, _ in self.groups.values())
        if abs(total - 100.0) > 1e-6:
            raise ValueError(f"Weights for profile '{self.name}' sum to {total}, expected 100")
        if self.qualification_rule == QUALIFY_BY_THRESHOLD and self.threshold is None:
            raise ValueError(f"Profile '{self.name}' qualifies by threshold but has none")

    def with_threshold(self, threshold: float) -> 'WeightProfile':
        return WeightProfile(self.name, self.groups, self.qualification_rule, threshold)


JOB_RANKING = WeightProfile(
    name="job-ranking",
    groups={
        'education': (20.0, ('education',)),
        'skills': (25.0, ('skills',)),
        'experience': (20.0, ('experience',)),
        'gpa': (25.0, ('gpa',)),
        'certificates': (10.0, ('certificates',)),
    },
    qualification_rule=QUALIFY_BY_THRESHOLD,
    threshold=60.0,
)

COURSE_APPLICATION = WeightProfile(
    name="course-application",
    groups={
        'academic': (40.0, ('education', 'gpa', 'certificates')),
        'skills': (30.0, ('skills',)),
        'experience': (30.0, ('experience',)),
    },
    qualification_rule=QUALIFY_BY_ALL_CHECKS,
)

PROFILES = {p.name: p for p in (JOB_RANKING, COURSE_APPLICATION)}


def get_profile(name: str) -> WeightProfile:
    try:
        return PROFILES[name]
    except KeyError:
        raise ValueError(f"Unknown weight profile: {name}") from None
