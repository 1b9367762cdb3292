"""
Course response mapping utilities.

Transforms service dictionaries into Pydantic response models.
Centralizes response construction logic.

Dependencies: course_backend.models
System role: Course response transformation
"""

from typing import Any

from course_backend.models.course import (
    CourseDetailResponse,
    CourseListResponse,
    CourseResponse,
    PublishResponse,
)
from course_backend.models.invite import InviteLinkResponse
from course_backend.models.lesson import DraftLessonResponse


def map_course_to_response(course_data: dict[str, Any]) -> CourseResponse:
    """
    Transform course data dictionary into CourseResponse.

    Args:
        course_data: Dictionary containing course fields

    Returns:
        CourseResponse: Pydantic model for API response
    """
    return CourseResponse(**course_data)


def map_course_detail_to_response(course_data: dict[str, Any]) -> CourseDetailResponse:
    """
    Transform course data with lessons into CourseDetailResponse.

    Args:
        course_data: Course fields plus lessons, lesson_count, enrollment_count

    Returns:
        CourseDetailResponse: Pydantic model for API response
    """
    return CourseDetailResponse(**course_data)


def map_course_page_to_response(page: dict[str, Any]) -> CourseListResponse:
    """
    Transform a service page dictionary into CourseListResponse.

    Args:
        page: items, total_count, page, page_size, total_pages

    Returns:
        CourseListResponse: Pydantic model for API response
    """
    return CourseListResponse(**page)


def map_lessons_to_response(lessons: list[dict[str, Any]]) -> list[DraftLessonResponse]:
    """Transform draft lesson dictionaries into DraftLessonResponse list."""
    return [DraftLessonResponse(**lesson) for lesson in lessons]


def map_publish_to_response(result: dict[str, Any]) -> PublishResponse:
    """Transform a publish result into PublishResponse."""
    return PublishResponse(**result)


def map_invite_to_response(link: dict[str, Any]) -> InviteLinkResponse:
    """Transform an invite link dictionary into InviteLinkResponse."""
    return InviteLinkResponse(**link)
