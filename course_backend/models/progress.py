"""
Progress schemas.

Patient-facing enrollment views and lesson completion contracts.

Dependencies: pydantic, course_backend.models
System role: ProgressTracker API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel

from course_backend.boundary.db.models.course_model import CourseCategory, UnlockMode
from course_backend.models.enrollment import EnrollmentResponse


class CompleteLessonRequest(BaseModel):
    """Request schema for completing a lesson."""

    lesson_id: uuid.UUID


class CompleteLessonResponse(BaseModel):
    """Result of completing a lesson."""

    id: uuid.UUID
    enrollment_id: uuid.UUID
    lesson_id: uuid.UUID
    completed_at: datetime
    is_course_completed: bool


class EnrolledCourseSummary(BaseModel):
    """Course fields shown alongside an enrollment."""

    id: uuid.UUID
    name: str
    description: str | None
    cover_image_url: str | None
    category: CourseCategory
    duration_weeks: int
    unlock_mode: UnlockMode


class LessonProgressResponse(BaseModel):
    """One lesson of the pinned generation with its unlock state."""

    snapshot_id: uuid.UUID
    lesson_id: uuid.UUID
    order: int
    title: str
    description: str | None
    video_url: str | None
    exercise_unit: list[dict] | None
    is_completed: bool
    is_unlocked: bool
    completed_at: datetime | None


class MyCourseResponse(EnrollmentResponse):
    """Enrollment row in the patient's course list."""

    course: EnrolledCourseSummary
    completed_count: int
    total_count: int
    progress_percent: int


class EnrollmentDetailResponse(MyCourseResponse):
    """Enrollment with every lesson of its generation."""

    lessons: list[LessonProgressResponse]
