"""
Course enrollment API endpoints (staff).

Routes:
- GET /courses/{id}/enrollments - List enrollments with progress
- POST /courses/{id}/enrollments - Enroll a patient (201 new, 200 re-enroll)
- PATCH /courses/{id}/enrollments/{enrollment_id} - Change enrollment status

Dependencies: course_backend.application.services, course_backend.models
System role: Staff enrollment management HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from course_backend.api.deps.dependencies import get_enrollment_service
from course_backend.api.deps.identity import Actor, require_staff
from course_backend.api.routers.error_handling import handle_course_errors
from course_backend.application.services.enrollment_service import EnrollmentService
from course_backend.models.enrollment import (
    CourseEnrollmentResponse,
    EnrollmentResponse,
    EnrollPatientRequest,
    UpdateEnrollmentStatusRequest,
)

router = APIRouter(prefix="/courses/{course_id}/enrollments", tags=["enrollments"])


@router.get("", response_model=list[CourseEnrollmentResponse])
@handle_course_errors
async def list_enrollments(
    course_id: UUID,
    actor: Actor = Depends(require_staff),
    enrollment_service: EnrollmentService = Depends(get_enrollment_service),
) -> list[CourseEnrollmentResponse]:
    """
    List a course's enrollments, newest first.

    Raises:
        HTTPException(404): Course not found
    """
    items = await enrollment_service.list_course_enrollments(course_id)
    return [CourseEnrollmentResponse(**item) for item in items]


@router.post("", response_model=EnrollmentResponse, status_code=status.HTTP_201_CREATED)
@handle_course_errors
async def enroll_patient(
    course_id: UUID,
    request: EnrollPatientRequest,
    response: Response,
    actor: Actor = Depends(require_staff),
    enrollment_service: EnrollmentService = Depends(get_enrollment_service),
) -> EnrollmentResponse:
    """
    Enroll a patient into the course's current version.

    Re-enrolling a completed or cancelled patient answers 200.

    Raises:
        HTTPException(404): Course not found
        HTTPException(409): Patient already actively enrolled
        HTTPException(422): Course archived or unpublished
    """
    enrollment, created = await enrollment_service.enroll(
        course_id, request.patient_id, actor.user_id
    )
    if not created:
        response.status_code = status.HTTP_200_OK
    return EnrollmentResponse(**enrollment)


@router.patch("/{enrollment_id}", response_model=EnrollmentResponse)
@handle_course_errors
async def change_enrollment_status(
    course_id: UUID,
    enrollment_id: UUID,
    request: UpdateEnrollmentStatusRequest,
    actor: Actor = Depends(require_staff),
    enrollment_service: EnrollmentService = Depends(get_enrollment_service),
) -> EnrollmentResponse:
    """
    Cancel or re-activate an enrollment.

    Raises:
        HTTPException(404): Enrollment not in this course
        HTTPException(409): Transition not allowed
    """
    enrollment = await enrollment_service.change_status(
        course_id, enrollment_id, request.status, actor.user_id
    )
    return EnrollmentResponse(**enrollment)
