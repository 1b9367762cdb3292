"""
Course validation utilities.

Business logic validation not covered by Pydantic models.
These validators check domain-specific rules before any store access.

Dependencies: course_backend.models, course_backend.core.exceptions
System role: Course request validation
"""

from course_backend.core.exceptions import ValidationError
from course_backend.models.course import CreateCourseRequest, UpdateCourseRequest
from course_backend.models.lesson import SaveLessonsRequest


def validate_course_creation(request: CreateCourseRequest) -> None:
    """
    Validate course creation request with business rules.

    Args:
        request: CreateCourseRequest

    Raises:
        ValidationError: If business validation fails
    """
    if not request.name.strip():
        raise ValidationError("Course name cannot be empty or whitespace-only", field="name")


def validate_course_update(request: UpdateCourseRequest) -> None:
    """
    Validate course update request with business rules.

    Args:
        request: UpdateCourseRequest with optional fields

    Raises:
        ValidationError: If business validation fails
    """
    # At least one field should be provided for update
    if not request.model_dump(exclude_none=True):
        raise ValidationError("At least one field must be provided for update")

    if request.name is not None and not request.name.strip():
        raise ValidationError("Course name cannot be empty or whitespace-only", field="name")


def validate_lessons_payload(request: SaveLessonsRequest) -> None:
    """
    Validate a bulk draft replace.

    Args:
        request: SaveLessonsRequest

    Raises:
        ValidationError: If lesson ids repeat
    """
    ids = [lesson.id for lesson in request.lessons if lesson.id is not None]
    if len(ids) != len(set(ids)):
        raise ValidationError("Lesson ids must be unique", field="lessons")
