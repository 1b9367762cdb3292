"""
Exception hierarchy for the course engine.

Provides layered exception structure for domain-specific errors. Category
base classes (NotFoundError, ConflictError, GoneError, BusinessRuleError)
carry the HTTP outcome; the API boundary maps categories, never concrete
classes. All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any
from uuid import UUID


class CourseEngineException(Exception):
    """Base exception for all course engine errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# --- Categories -----------------------------------------------------------


class ValidationError(CourseEngineException):
    """Raised when input validation fails before any store access."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class NotFoundError(CourseEngineException):
    """Entity missing, or the caller may not see it."""


class ConflictError(CourseEngineException):
    """Request conflicts with the current state of the entity."""


class GoneError(CourseEngineException):
    """Resource existed but was revoked or retired."""


class BusinessRuleError(CourseEngineException):
    """Request is well-formed but violates a course rule."""


# --- Not found ------------------------------------------------------------


def _with(details: dict[str, Any] | None, **context: Any) -> dict[str, Any]:
    details = details or {}
    details.update({k: str(v) for k, v in context.items() if v is not None})
    return details


class CourseNotFoundError(NotFoundError):
    """Raised when a course cannot be found."""

    def __init__(self, course_id: UUID | str, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"Course not found: {course_id}", _with(details, course_id=course_id))


class EnrollmentNotFoundError(NotFoundError):
    """Raised when an enrollment is missing or not visible to the caller."""

    def __init__(
        self, enrollment_id: UUID | str, details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            f"Enrollment not found: {enrollment_id}",
            _with(details, enrollment_id=enrollment_id),
        )


class LessonNotFoundError(NotFoundError):
    """Raised when a lesson is not part of the enrollment's generation."""

    def __init__(
        self,
        lesson_id: UUID | str,
        version: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"Lesson not found in this course: {lesson_id}",
            _with(details, lesson_id=lesson_id, version=version),
        )


class InviteTokenNotFoundError(NotFoundError):
    """Raised when no course carries the given invite token."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        # token value is deliberately left out of the details
        super().__init__("Course not found for invite link", details)


# --- Conflict -------------------------------------------------------------


class AlreadyEnrolledError(ConflictError):
    """Raised when the patient already holds an active enrollment."""

    def __init__(
        self,
        course_id: UUID | str,
        patient_id: UUID | str,
        enrollment_id: UUID | str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            "Patient is already enrolled in this course",
            _with(
                details,
                course_id=course_id,
                patient_id=patient_id,
                enrollment_id=enrollment_id,
            ),
        )
        self.enrollment_id = enrollment_id


class LessonAlreadyCompletedError(ConflictError):
    """Raised when a completion already exists for (enrollment, lesson)."""

    def __init__(
        self,
        enrollment_id: UUID | str,
        lesson_id: UUID | str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            "Lesson has already been completed",
            _with(details, enrollment_id=enrollment_id, lesson_id=lesson_id),
        )


class EnrollmentNotActiveError(ConflictError):
    """Raised when progress is recorded against a non-active enrollment."""

    def __init__(
        self,
        enrollment_id: UUID | str,
        status: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"Enrollment is not active (status: {status})",
            _with(details, enrollment_id=enrollment_id, status=status),
        )


class InvalidEnrollmentTransitionError(ConflictError):
    """Raised when an enrollment status edge is not in the state machine."""

    def __init__(
        self,
        current: str | None,
        target: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"Cannot change enrollment status from {current} to {target}",
            _with(details, current=current, target=target),
        )


# --- Gone -----------------------------------------------------------------


class InviteDisabledError(GoneError):
    """Raised when an invite link exists but has been disabled."""

    def __init__(self, course_id: UUID | str, details: dict[str, Any] | None = None) -> None:
        super().__init__("Invite link is disabled", _with(details, course_id=course_id))


class CourseGoneError(GoneError):
    """Raised on patient-facing access to an archived course."""

    def __init__(self, course_id: UUID | str, details: dict[str, Any] | None = None) -> None:
        super().__init__("Course is no longer available", _with(details, course_id=course_id))


# --- Business rules -------------------------------------------------------


class CourseNotPublishedError(BusinessRuleError):
    """Raised when an operation needs a published generation."""

    def __init__(self, course_id: UUID | str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            "Course has not been published yet", _with(details, course_id=course_id)
        )


class CourseArchivedError(BusinessRuleError):
    """Raised on staff actions against an archived course."""

    def __init__(self, course_id: UUID | str, details: dict[str, Any] | None = None) -> None:
        super().__init__("Course is archived", _with(details, course_id=course_id))


class EmptyDraftError(BusinessRuleError):
    """Raised when publishing a course without draft lessons."""

    def __init__(self, course_id: UUID | str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            "Course must contain at least one lesson to be published",
            _with(details, course_id=course_id),
        )


class LessonLockedError(BusinessRuleError):
    """Raised when a sequential course lesson is completed out of order."""

    def __init__(
        self,
        lesson_id: UUID | str,
        previous_lesson_id: UUID | str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            "Previous lesson must be completed first",
            _with(details, lesson_id=lesson_id, previous_lesson_id=previous_lesson_id),
        )


class TooManyLessonsError(BusinessRuleError):
    """Raised when a draft would exceed the configured lesson limit."""

    def __init__(self, count: int, limit: int, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            f"A course may contain at most {limit} lessons",
            _with(details, count=count, limit=limit),
        )


# --- Internal -------------------------------------------------------------


class SnapshotImmutableError(CourseEngineException):
    """Raised when code attempts to modify a published lesson snapshot."""

    def __init__(self, snapshot_id: UUID | str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            "Lesson snapshots are immutable", _with(details, snapshot_id=snapshot_id)
        )
