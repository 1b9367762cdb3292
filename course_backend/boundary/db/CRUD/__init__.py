"""
CRUD operations package.

Module-level singletons, one per model:
  - course_crud
  - draft_lesson_crud
  - lesson_snapshot_crud
  - enrollment_crud
  - lesson_completion_crud

Dependencies: sqlalchemy, course_backend.boundary.db.models
System role: Data access layer used by application services
"""

from course_backend.boundary.db.CRUD.base_crud import BaseCRUD
from course_backend.boundary.db.CRUD.course_crud import CourseCRUD, course_crud
from course_backend.boundary.db.CRUD.lesson_crud import DraftLessonCRUD, draft_lesson_crud
from course_backend.boundary.db.CRUD.snapshot_crud import (
    LessonSnapshotCRUD,
    lesson_snapshot_crud,
)
from course_backend.boundary.db.CRUD.enrollment_crud import EnrollmentCRUD, enrollment_crud
from course_backend.boundary.db.CRUD.completion_crud import (
    LessonCompletionCRUD,
    lesson_completion_crud,
)

__all__ = [
    "BaseCRUD",
    "CourseCRUD",
    "course_crud",
    "DraftLessonCRUD",
    "draft_lesson_crud",
    "LessonSnapshotCRUD",
    "lesson_snapshot_crud",
    "EnrollmentCRUD",
    "enrollment_crud",
    "LessonCompletionCRUD",
    "lesson_completion_crud",
]
