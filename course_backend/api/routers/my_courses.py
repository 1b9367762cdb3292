"""
Patient course API endpoints.

Routes:
- GET /me/courses - List the caller's active and completed enrollments
- GET /me/courses/{enrollment_id} - Enrollment detail with lesson unlock state
- POST /me/courses/{enrollment_id}/complete - Complete a lesson

Dependencies: course_backend.application.services, course_backend.models
System role: Patient progress HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from course_backend.api.deps.dependencies import get_progress_service
from course_backend.api.deps.identity import Actor, require_patient
from course_backend.api.routers.error_handling import handle_course_errors
from course_backend.application.services.progress_service import ProgressService
from course_backend.models.progress import (
    CompleteLessonRequest,
    CompleteLessonResponse,
    EnrollmentDetailResponse,
    MyCourseResponse,
)

router = APIRouter(prefix="/me/courses", tags=["my-courses"])


@router.get("", response_model=list[MyCourseResponse])
@handle_course_errors
async def list_my_courses(
    actor: Actor = Depends(require_patient),
    progress_service: ProgressService = Depends(get_progress_service),
) -> list[MyCourseResponse]:
    """List the caller's enrollments with progress."""
    items = await progress_service.list_my_enrollments(actor.patient_id)
    return [MyCourseResponse(**item) for item in items]


@router.get("/{enrollment_id}", response_model=EnrollmentDetailResponse)
@handle_course_errors
async def get_my_course(
    enrollment_id: UUID,
    actor: Actor = Depends(require_patient),
    progress_service: ProgressService = Depends(get_progress_service),
) -> EnrollmentDetailResponse:
    """
    Get one enrollment with every lesson of its version.

    Raises:
        HTTPException(404): Enrollment not found or not the caller's
    """
    detail = await progress_service.get_enrollment_detail(enrollment_id, actor.patient_id)
    return EnrollmentDetailResponse(**detail)


@router.post(
    "/{enrollment_id}/complete",
    response_model=CompleteLessonResponse,
    status_code=status.HTTP_201_CREATED,
)
@handle_course_errors
async def complete_lesson(
    enrollment_id: UUID,
    request: CompleteLessonRequest,
    actor: Actor = Depends(require_patient),
    progress_service: ProgressService = Depends(get_progress_service),
) -> CompleteLessonResponse:
    """
    Mark a lesson as completed.

    Raises:
        HTTPException(404): Enrollment or lesson not found
        HTTPException(409): Enrollment not active or lesson already completed
        HTTPException(422): Previous lesson not completed yet
    """
    completion = await progress_service.complete_lesson(
        enrollment_id, request.lesson_id, actor.patient_id
    )
    return CompleteLessonResponse(**completion)
