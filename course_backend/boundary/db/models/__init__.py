"""
Database models package.

Exports:
  - CourseModel, CourseStatus, UnlockMode, CourseCategory: Course and enums
  - DraftLessonModel: Mutable authoring lessons
  - LessonSnapshotModel: Immutable published lessons
  - EnrollmentModel, EnrollmentStatus: Enrollment and its state machine
  - LessonCompletionModel: Per-enrollment lesson completions

Dependencies: sqlalchemy, course_backend.boundary.db.base
System role: Database model definitions for domain entities
"""

from course_backend.boundary.db.models.course_model import (
    CourseCategory,
    CourseModel,
    CourseStatus,
    UnlockMode,
)
from course_backend.boundary.db.models.lesson_model import DraftLessonModel
from course_backend.boundary.db.models.snapshot_model import LessonSnapshotModel
from course_backend.boundary.db.models.enrollment_model import (
    ALLOWED_TRANSITIONS,
    EnrollmentModel,
    EnrollmentStatus,
)
from course_backend.boundary.db.models.completion_model import LessonCompletionModel

__all__ = [
    "CourseModel",
    "CourseStatus",
    "UnlockMode",
    "CourseCategory",
    "DraftLessonModel",
    "LessonSnapshotModel",
    "EnrollmentModel",
    "EnrollmentStatus",
    "ALLOWED_TRANSITIONS",
    "LessonCompletionModel",
]
