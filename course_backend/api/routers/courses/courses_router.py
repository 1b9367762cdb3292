"""
Course API endpoints.

Routes:
- POST /courses - Create new course
- GET /courses - List courses (filter, search, paginate)
- GET /courses/{id} - Get course with draft lessons
- PUT /courses/{id} - Update course metadata
- PUT /courses/{id}/lessons - Replace draft lessons (ordered)
- POST /courses/{id}/publish - Publish draft as a new version
- POST /courses/{id}/archive - Archive course
- POST /courses/{id}/invite - Get or create invite link
- DELETE /courses/{id}/invite - Disable invite link

All routes are staff-only.

Dependencies: course_backend.application.services, course_backend.models
System role: Course authoring HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from course_backend.api.deps.dependencies import (
    get_course_service,
    get_invite_service,
    get_publish_service,
)
from course_backend.api.deps.identity import Actor, require_staff
from course_backend.api.routers.error_handling import handle_course_errors
from course_backend.application.services.course_service import CourseService
from course_backend.application.services.invite_service import InviteService
from course_backend.application.services.publish_service import PublishService
from course_backend.boundary.db.models.course_model import CourseCategory, CourseStatus
from course_backend.models.course import (
    CourseDetailResponse,
    CourseListResponse,
    CourseResponse,
    CreateCourseRequest,
    PublishResponse,
    UpdateCourseRequest,
)
from course_backend.models.invite import InviteLinkResponse
from course_backend.models.lesson import DraftLessonResponse, SaveLessonsRequest

from .course_responses import (
    map_course_detail_to_response,
    map_course_page_to_response,
    map_course_to_response,
    map_invite_to_response,
    map_lessons_to_response,
    map_publish_to_response,
)
from .course_validators import (
    validate_course_creation,
    validate_course_update,
    validate_lessons_payload,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/courses", tags=["courses"])


@router.post("", response_model=CourseResponse, status_code=201)
@handle_course_errors
async def create_course(
    request: CreateCourseRequest,
    actor: Actor = Depends(require_staff),
    course_service: CourseService = Depends(get_course_service),
) -> CourseResponse:
    """
    Create new draft course.

    Raises:
        HTTPException(400): Invalid request
        HTTPException(404): Caller is not staff
    """
    validate_course_creation(request)

    course_data = await course_service.create_course(
        created_by=actor.user_id,
        **request.model_dump(),
    )
    return map_course_to_response(course_data)


@router.get("", response_model=CourseListResponse)
@handle_course_errors
async def list_courses(
    status: CourseStatus | None = None,
    category: CourseCategory | None = None,
    search: str | None = Query(None, max_length=200),
    page: int = Query(1, ge=1),
    page_size: int | None = Query(None, ge=1),
    actor: Actor = Depends(require_staff),
    course_service: CourseService = Depends(get_course_service),
) -> CourseListResponse:
    """
    List non-archived courses, newest first.

    Args:
        status: Optional status filter
        category: Optional category filter
        search: Case-insensitive name search
        page: 1-based page number
        page_size: Page size (capped by configuration)
    """
    page_data = await course_service.list_courses(
        status=status,
        category=category,
        search=search,
        page=page,
        page_size=page_size,
    )
    logger.info(
        "Courses listed",
        extra={"count": len(page_data["items"]), "total_count": page_data["total_count"]},
    )
    return map_course_page_to_response(page_data)


@router.get("/{course_id}", response_model=CourseDetailResponse)
@handle_course_errors
async def get_course(
    course_id: UUID,
    actor: Actor = Depends(require_staff),
    course_service: CourseService = Depends(get_course_service),
) -> CourseDetailResponse:
    """
    Get a course with its ordered draft lessons.

    Raises:
        HTTPException(404): Course not found or archived
    """
    course_data = await course_service.get_course(course_id)
    return map_course_detail_to_response(course_data)


@router.put("/{course_id}", response_model=CourseResponse)
@handle_course_errors
async def update_course(
    course_id: UUID,
    request: UpdateCourseRequest,
    actor: Actor = Depends(require_staff),
    course_service: CourseService = Depends(get_course_service),
) -> CourseResponse:
    """
    Update course metadata.

    Raises:
        HTTPException(400): No field provided
        HTTPException(404): Course not found
        HTTPException(422): Course archived
    """
    validate_course_update(request)

    course_data = await course_service.update_course(
        course_id, **request.model_dump(exclude_none=True)
    )
    return map_course_to_response(course_data)


@router.put("/{course_id}/lessons", response_model=list[DraftLessonResponse])
@handle_course_errors
async def save_lessons(
    course_id: UUID,
    request: SaveLessonsRequest,
    actor: Actor = Depends(require_staff),
    course_service: CourseService = Depends(get_course_service),
) -> list[DraftLessonResponse]:
    """
    Replace the draft lesson list; list position becomes lesson order.

    Raises:
        HTTPException(400): Duplicate lesson ids
        HTTPException(404): Course not found
        HTTPException(422): Course archived or too many lessons
    """
    validate_lessons_payload(request)

    lessons = await course_service.save_lessons(
        course_id,
        [lesson.model_dump(mode="json") for lesson in request.lessons],
    )
    return map_lessons_to_response(lessons)


@router.post("/{course_id}/publish", response_model=PublishResponse)
@handle_course_errors
async def publish_course(
    course_id: UUID,
    actor: Actor = Depends(require_staff),
    publish_service: PublishService = Depends(get_publish_service),
) -> PublishResponse:
    """
    Publish the current draft as a new immutable version.

    Raises:
        HTTPException(404): Course not found
        HTTPException(422): Course archived or without lessons
    """
    result = await publish_service.publish(course_id)
    return map_publish_to_response(result)


@router.post("/{course_id}/archive", response_model=CourseResponse)
@handle_course_errors
async def archive_course(
    course_id: UUID,
    actor: Actor = Depends(require_staff),
    course_service: CourseService = Depends(get_course_service),
) -> CourseResponse:
    """
    Archive a course.

    Raises:
        HTTPException(404): Course not found or already archived
    """
    course_data = await course_service.archive(course_id)
    return map_course_to_response(course_data)


@router.post("/{course_id}/invite", response_model=InviteLinkResponse)
@handle_course_errors
async def generate_invite(
    course_id: UUID,
    actor: Actor = Depends(require_staff),
    invite_service: InviteService = Depends(get_invite_service),
) -> InviteLinkResponse:
    """
    Get the course's invite link, creating or re-enabling it.

    Raises:
        HTTPException(404): Course not found
        HTTPException(422): Course archived or unpublished
    """
    link = await invite_service.generate_or_get(course_id)
    return map_invite_to_response(link)


@router.delete("/{course_id}/invite", response_model=InviteLinkResponse)
@handle_course_errors
async def disable_invite(
    course_id: UUID,
    actor: Actor = Depends(require_staff),
    invite_service: InviteService = Depends(get_invite_service),
) -> InviteLinkResponse:
    """
    Disable the invite link; the token is kept for re-enabling.

    Raises:
        HTTPException(404): Course not found
    """
    link = await invite_service.disable(course_id)
    return map_invite_to_response(link)
