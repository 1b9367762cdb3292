"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - atomic(): Unit-of-work context manager
  - CourseModel, DraftLessonModel, LessonSnapshotModel, EnrollmentModel,
    LessonCompletionModel: Domain entities
  - course_crud, draft_lesson_crud, lesson_snapshot_crud, enrollment_crud,
    lesson_completion_crud: CRUD operation singletons

Dependencies: sqlalchemy, course_backend.configs
System role: Database adapter providing persistent storage for courses,
lesson drafts and snapshots, enrollments and completions.
"""

from course_backend.boundary.db.base import Base, TimestampMixin, UUIDMixin
from course_backend.boundary.db.connection import (
    dispose_engine,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from course_backend.boundary.db.transaction import atomic
from course_backend.boundary.db.models import (
    CourseCategory,
    CourseModel,
    CourseStatus,
    DraftLessonModel,
    EnrollmentModel,
    EnrollmentStatus,
    LessonCompletionModel,
    LessonSnapshotModel,
    UnlockMode,
)
from course_backend.boundary.db.CRUD import (
    course_crud,
    draft_lesson_crud,
    enrollment_crud,
    lesson_completion_crud,
    lesson_snapshot_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "dispose_engine",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "atomic",
    # Models
    "CourseModel",
    "CourseStatus",
    "CourseCategory",
    "UnlockMode",
    "DraftLessonModel",
    "LessonSnapshotModel",
    "EnrollmentModel",
    "EnrollmentStatus",
    "LessonCompletionModel",
    # CRUD
    "course_crud",
    "draft_lesson_crud",
    "lesson_snapshot_crud",
    "enrollment_crud",
    "lesson_completion_crud",
]
