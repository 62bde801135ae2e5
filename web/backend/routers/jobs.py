#!/usr/bin/env python3
"""
Job endpoints - matching jobs for students and applicant review for companies.
"""

from typing import List

from fastapi import APIRouter, Depends

from core.admissions import AdmissionArbitrator, ApplicationService
from core.matcher import JobMatchingService
from ..dependencies import get_application_service, get_arbitrator, get_matching_service
from ..models.requests import StatusUpdateRequest
from ..models.responses import ApplicationResponse, RankedJobResponse

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


@router.get("/matches/{student_id}", response_model=List[RankedJobResponse])
def get_matching_jobs(
    student_id: str,
    service: JobMatchingService = Depends(get_matching_service)
):
    """
    Active jobs ranked by match score for a student.

    Only jobs scoring above the configured minimum are returned, best first.
    Unknown students get an empty list.
    """
    return service.get_matching_jobs(student_id)


@router.get("/{job_id}/qualified-applicants", response_model=List[ApplicationResponse])
def get_qualified_applicants(
    job_id: str,
    service: ApplicationService = Depends(get_application_service)
):
    """Applicants meeting the qualification threshold, best match first."""
    return service.get_qualified_applicants(job_id)


@router.patch("/applications/{application_id}/status", response_model=ApplicationResponse)
def update_job_application_status(
    application_id: str,
    request: StatusUpdateRequest,
    arbitrator: AdmissionArbitrator = Depends(get_arbitrator)
):
    return arbitrator.update_job_application_status(
        application_id,
        request.status,
        reviewer=request.reviewer,
        notes=request.notes
    )
