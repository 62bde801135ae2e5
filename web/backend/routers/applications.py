#!/usr/bin/env python3
"""
Application endpoints - eligibility, apply, reads and staff review.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from core.admissions import AdmissionArbitrator, ApplicationGatekeeper, ApplicationService
from ..dependencies import get_application_service, get_arbitrator, get_gatekeeper
from ..models.requests import ApplyRequest, StatusUpdateRequest
from ..models.responses import (
    ActionResponse,
    ApplicationResponse,
    EligibilityResponse,
    StatsResponse
)

router = APIRouter(prefix="/api/applications", tags=["applications"])


@router.get("/eligibility", response_model=EligibilityResponse)
def check_eligibility(
    student_id: str = Query(..., description="Student to check"),
    target_id: str = Query(..., description="Course or job id"),
    kind: str = Query("course", pattern="^(course|job)$", description="course or job"),
    gatekeeper: ApplicationGatekeeper = Depends(get_gatekeeper)
):
    """
    Evaluate every application rule for a student and target.

    Reports all failing rules at once; nothing is written.
    """
    return gatekeeper.check_eligibility(student_id, target_id, kind).to_dict()


@router.post("", response_model=ApplicationResponse, status_code=201)
def apply(
    request: ApplyRequest,
    gatekeeper: ApplicationGatekeeper = Depends(get_gatekeeper)
):
    """
    Apply for a course or job.

    Fails with 400 (not qualified), 409 (cap reached, unavailable or
    already applied) or 503 (concurrent change, retry).
    """
    return gatekeeper.apply_for_target(request.student_id, request.target_id, request.kind)


@router.get("/stats", response_model=StatsResponse)
def get_stats(
    institution_id: Optional[str] = Query(None, description="Restrict to one institution"),
    service: ApplicationService = Depends(get_application_service)
):
    return service.get_application_stats(institution_id)


@router.get("/students/{student_id}", response_model=List[ApplicationResponse])
def get_student_applications(
    student_id: str,
    service: ApplicationService = Depends(get_application_service)
):
    return service.get_student_applications(student_id)


@router.get("/institutions/{institution_id}", response_model=List[ApplicationResponse])
def get_institution_applications(
    institution_id: str,
    service: ApplicationService = Depends(get_application_service)
):
    return service.get_applications_by_institution(institution_id)


@router.get("/courses/{course_id}", response_model=List[ApplicationResponse])
def get_course_applications(
    course_id: str,
    service: ApplicationService = Depends(get_application_service)
):
    return service.get_applications_by_course(course_id)


@router.get("/{application_id}", response_model=ApplicationResponse)
def get_application(
    application_id: str,
    enrich: bool = Query(True, description="Attach student and course details"),
    service: ApplicationService = Depends(get_application_service)
):
    return service.get_application(application_id, enrich=enrich)


@router.patch("/{application_id}/status", response_model=ApplicationResponse)
def update_status(
    application_id: str,
    request: StatusUpdateRequest,
    arbitrator: AdmissionArbitrator = Depends(get_arbitrator)
):
    """
    Staff review: pending -> admitted|rejected, admitted -> pending|rejected,
    rejected -> pending. Acceptance is only possible through admission selection.
    """
    return arbitrator.update_application_status(
        application_id,
        request.status,
        reviewer=request.reviewer,
        notes=request.notes
    )


@router.delete("/{application_id}", response_model=ActionResponse)
def delete_application(
    application_id: str,
    service: ApplicationService = Depends(get_application_service)
):
    service.delete_application(application_id)
    return ActionResponse(success=True, message=f"Application {application_id} deleted")
