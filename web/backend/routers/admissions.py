#!/usr/bin/env python3
"""
Admission endpoints - admitted offers and offer selection.
"""

from typing import List

from fastapi import APIRouter, Depends

from core.admissions import AdmissionArbitrator, ApplicationService
from ..dependencies import get_application_service, get_arbitrator
from ..models.requests import SelectAdmissionRequest
from ..models.responses import ApplicationResponse, SelectionResponse

router = APIRouter(prefix="/api/admissions", tags=["admissions"])


@router.get("/students/{student_id}", response_model=List[ApplicationResponse])
def get_student_admissions(
    student_id: str,
    service: ApplicationService = Depends(get_application_service)
):
    """Admitted offers still waiting for the student's choice, newest first."""
    return service.get_student_admissions(student_id)


@router.post("/select", response_model=SelectionResponse)
def select_admission(
    request: SelectAdmissionRequest,
    arbitrator: AdmissionArbitrator = Depends(get_arbitrator)
):
    """
    Accept one admitted offer.

    Every other admitted offer of the student is declined in the same
    transaction; pending and rejected applications are left alone.
    """
    outcome = arbitrator.select_admission(request.student_id, request.application_id)
    return SelectionResponse(success=True, **outcome.to_dict())
