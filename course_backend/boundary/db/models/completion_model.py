"""
Lesson completion ORM model.

Append-only record that a lesson of an enrollment's generation was
completed. Uniqueness on (enrollment_id, lesson_id) makes concurrent
completions of the same lesson resolve to exactly one row.

Dependencies: sqlalchemy, course_backend.boundary.db.base
System role: Progress persistence
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from course_backend.boundary.db.base import Base, UUIDMixin, utcnow


class LessonCompletionModel(Base, UUIDMixin):
    """
    Lesson completion ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        enrollment_id: Enrollment the completion counts toward
        lesson_id: Lesson id within the enrollment's pinned generation
        patient_id: Completing patient
        completed_at: Completion timestamp (UTC)

    Constraints:
        (enrollment_id, lesson_id): UNIQUE; completions are insert-once
    """

    __tablename__ = "lesson_completions"
    __table_args__ = (
        UniqueConstraint(
            "enrollment_id", "lesson_id", name="uq_lesson_completions_enrollment_lesson"
        ),
    )

    enrollment_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("course_enrollments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    lesson_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)

    patient_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)

    completed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
