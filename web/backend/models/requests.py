#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, Field
from typing import Literal, Optional


class ApplyRequest(BaseModel):
    """Request to apply for a course or job."""
    student_id: str = Field(..., description="Applying student")
    target_id: str = Field(..., description="Course or job id")
    kind: Literal["course", "job"] = Field(default="course", description="Target kind: course or job")


class SelectAdmissionRequest(BaseModel):
    """Student accepts one admitted offer; all other admitted offers are declined."""
    student_id: str
    application_id: str


class StatusUpdateRequest(BaseModel):
    """Staff review of an application."""
    status: str = Field(..., description="New status")
    reviewer: Optional[str] = Field(None, description="Reviewer id or name")
    notes: str = Field(default="", description="Optional reviewer notes")
