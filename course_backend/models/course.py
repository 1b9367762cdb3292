"""
Course domain models and schemas.

Request/response schemas for course operations.

Dependencies: pydantic, course_backend.boundary.db.models
System role: Course API contracts
"""

from pydantic import BaseModel, Field
import uuid
from datetime import datetime

from course_backend.boundary.db.models.course_model import (
    CourseCategory,
    CourseStatus,
    UnlockMode,
)
from course_backend.models.common import PaginatedResponse
from course_backend.models.lesson import DraftLessonResponse


class CreateCourseRequest(BaseModel):
    """Request schema for creating a new course."""

    name: str = Field(..., min_length=1, max_length=200, description="Course name")
    description: str | None = Field(None, max_length=5000, description="Course description")
    cover_image_url: str | None = Field(None, max_length=1000)
    duration_weeks: int = Field(8, ge=1, le=104)
    category: CourseCategory = CourseCategory.OTHER
    unlock_mode: UnlockMode = UnlockMode.SEQUENTIAL


class UpdateCourseRequest(BaseModel):
    """Request schema for updating a course."""

    name: str | None = Field(None, min_length=1, max_length=200, description="Course name")
    description: str | None = Field(None, max_length=5000, description="Course description")
    cover_image_url: str | None = Field(None, max_length=1000)
    duration_weeks: int | None = Field(None, ge=1, le=104)
    category: CourseCategory | None = None
    unlock_mode: UnlockMode | None = None


class CourseResponse(BaseModel):
    """Response schema for course operations."""

    id: uuid.UUID
    created_by: uuid.UUID
    name: str
    description: str | None
    cover_image_url: str | None
    duration_weeks: int
    category: CourseCategory
    unlock_mode: UnlockMode
    status: CourseStatus
    version: int
    invite_enabled: bool
    is_archived: bool
    created_at: datetime
    updated_at: datetime


class CourseSummaryResponse(CourseResponse):
    """Course row in a listing, with lesson and active enrollment counts."""

    lesson_count: int
    enrollment_count: int


class CourseDetailResponse(CourseSummaryResponse):
    """Course with its ordered draft lessons."""

    lessons: list[DraftLessonResponse]


class CourseListResponse(PaginatedResponse[CourseSummaryResponse]):
    """Paginated course listing."""


class PublishResponse(BaseModel):
    """Result of publishing a course."""

    course_id: uuid.UUID
    version: int
    status: CourseStatus
    lesson_count: int
