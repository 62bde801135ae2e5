#!/usr/bin/env python3
"""
Admissions Module - application gating, arbitration and reads.

Public API:
- ApplicationGatekeeper: check_eligibility / apply_for_target
- AdmissionArbitrator: select_admission and staff status changes
- ApplicationService: application reads, stats and admin delete

Modules:
- targets.py: Target snapshots and the profile/target providers
- gatekeeper.py: eligibility rules and application creation
- arbitrator.py: status state machine and admission selection
- applications.py: read side with best-effort enrichment
"""

from core.admissions.targets import (
    COURSE, JOB, TARGET_KINDS, Target,
    load_target, get_requirement_set, list_open_targets, get_candidate_profile
)
from core.admissions.gatekeeper import ApplicationGatekeeper, EligibilityReport
from core.admissions.arbitrator import (
    AdmissionArbitrator, SelectionOutcome, DECLINE_REASON, COURSE_TRANSITIONS, JOB_TRANSITIONS
)
from core.admissions.applications import ApplicationService

__all__ = [
    'COURSE',
    'JOB',
    'TARGET_KINDS',
    'Target',
    'load_target',
    'get_requirement_set',
    'list_open_targets',
    'get_candidate_profile',
    'ApplicationGatekeeper',
    'EligibilityReport',
    'AdmissionArbitrator',
    'SelectionOutcome',
    'DECLINE_REASON',
    'COURSE_TRANSITIONS',
    'JOB_TRANSITIONS',
    'ApplicationService',
]
