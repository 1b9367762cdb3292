"""
Enrollment schemas.

Dependencies: pydantic, course_backend.boundary.db.models
System role: Enrollment API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from course_backend.boundary.db.models.enrollment_model import EnrollmentStatus


class EnrollPatientRequest(BaseModel):
    """Staff request to enroll a patient."""

    patient_id: uuid.UUID = Field(..., description="Patient to enroll")


class UpdateEnrollmentStatusRequest(BaseModel):
    """Staff request to change an enrollment's status."""

    status: EnrollmentStatus


class EnrollmentResponse(BaseModel):
    """Response schema for an enrollment."""

    id: uuid.UUID
    course_id: uuid.UUID
    patient_id: uuid.UUID
    enrolled_by: uuid.UUID
    enrolled_version: int
    status: EnrollmentStatus
    enrolled_at: datetime
    completed_at: datetime | None
    cancelled_at: datetime | None


class CourseEnrollmentResponse(EnrollmentResponse):
    """Enrollment row in a course's enrollment list."""

    completed_lessons: int
    total_lessons: int
    progress_percent: int
