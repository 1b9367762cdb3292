"""
Invite link API endpoints (patient).

Routes:
- GET /courses/enroll/{token} - Preview the course behind an invite link
- POST /courses/enroll/{token} - Self-enroll (201 new, 200 re-enroll)

Dependencies: course_backend.application.services, course_backend.models
System role: Self-enrollment HTTP API
"""

from fastapi import APIRouter, Depends, Response, status

from course_backend.api.deps.dependencies import get_invite_service
from course_backend.api.deps.identity import Actor, require_patient
from course_backend.api.routers.error_handling import handle_course_errors
from course_backend.application.services.invite_service import InviteService
from course_backend.models.enrollment import EnrollmentResponse
from course_backend.models.invite import InvitePreviewResponse

router = APIRouter(prefix="/courses/enroll", tags=["invites"])


@router.get("/{token}", response_model=InvitePreviewResponse)
@handle_course_errors
async def preview_invite(
    token: str,
    actor: Actor = Depends(require_patient),
    invite_service: InviteService = Depends(get_invite_service),
) -> InvitePreviewResponse:
    """
    Show the course an invite link leads to.

    Raises:
        HTTPException(400): Malformed token
        HTTPException(404): Unknown token
        HTTPException(410): Link disabled or course archived
        HTTPException(422): Course unpublished
    """
    preview = await invite_service.get_invite_preview(token, actor.patient_id)
    return InvitePreviewResponse(**preview)


@router.post("/{token}", response_model=EnrollmentResponse, status_code=status.HTTP_201_CREATED)
@handle_course_errors
async def self_enroll(
    token: str,
    response: Response,
    actor: Actor = Depends(require_patient),
    invite_service: InviteService = Depends(get_invite_service),
) -> EnrollmentResponse:
    """
    Enroll the caller through an invite link.

    Raises:
        HTTPException(400): Malformed token
        HTTPException(404): Unknown token
        HTTPException(409): Already actively enrolled
        HTTPException(410): Link disabled or course archived
        HTTPException(422): Course unpublished
    """
    enrollment, created = await invite_service.resolve_for_self_enroll(
        token, actor.patient_id, actor.user_id
    )
    if not created:
        response.status_code = status.HTTP_200_OK
    return EnrollmentResponse(**enrollment)
