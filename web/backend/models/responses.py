#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict, Any


class EligibilityResponse(BaseModel):
    """Multi-reason eligibility report for one student and target."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "qualified": False,
                "can_apply_to_target": True,
                "target_available": True,
                "already_applied": False,
                "can_apply": False,
                "missing_requirements": ["Minimum GPA: 3.0"],
                "current_application_count": 1,
                "application_cap": 2,
                "score": 72,
                "kind": "course",
                "target_id": "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
                "owner_id": "550e8400-e29b-41d4-a716-446655440000"
            }
        }
    )

    qualified: bool
    can_apply_to_target: bool
    target_available: bool
    already_applied: bool
    can_apply: bool
    missing_requirements: List[str] = Field(default_factory=list)
    current_application_count: int = Field(ge=0)
    application_cap: int
    score: int = Field(ge=0, le=100)
    kind: str
    target_id: Optional[str]
    owner_id: Optional[str]


class ApplicationResponse(BaseModel):
    """A course or job application; enrichment fields pass through."""
    model_config = ConfigDict(extra="allow")

    id: str
    student_id: str
    status: str
    applied_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CategoryMatchResponse(BaseModel):
    category: str
    matched: bool
    match_percentage: Optional[int] = None
    requirement: Optional[str] = None


class SelectionResponse(BaseModel):
    success: bool = True
    application: ApplicationResponse
    declined_application_ids: List[str]
    declined_count: int


class RankedJobResponse(BaseModel):
    job_id: str
    title: Optional[str]
    company_id: Optional[str]
    company_name: Optional[str]
    location: Optional[str]
    job_type: Optional[str]
    match_score: int = Field(ge=0, le=100)
    qualified: bool
    matched_categories: List[CategoryMatchResponse] = Field(default_factory=list)
    missing_requirements: List[str] = Field(default_factory=list)


class StatsResponse(BaseModel):
    """Application counts per status."""
    total: int
    pending: int
    admitted: int
    accepted: int
    rejected: int


class NotificationItem(BaseModel):
    id: str
    user_id: str
    type: str
    title: str
    message: str
    related_application_id: Optional[str] = None
    read: bool
    read_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class UnreadCountResponse(BaseModel):
    user_id: str
    unread: int


class ActionResponse(BaseModel):
    """Generic acknowledgement for write endpoints without a payload."""
    success: bool
    message: str
    details: Optional[Dict[str, Any]] = None
