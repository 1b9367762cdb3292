"""
Draft lesson ORM model.

Mutable, ordered lesson records owned by a course while it is authored.
Publishing copies them into LessonSnapshotModel rows.

Dependencies: sqlalchemy, course_backend.boundary.db.base
System role: DraftStore persistence
"""

import uuid

from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from course_backend.boundary.db.base import Base, UUIDMixin, TimestampMixin
from course_backend.boundary.db.models.lesson_content_columns import LessonContentColumns
from course_backend.core.lesson_content import LessonContent


class DraftLessonModel(Base, UUIDMixin, TimestampMixin, LessonContentColumns):
    """
    Draft lesson ORM model.

    Attributes:
        id: UUID primary key; becomes lesson_id in every snapshot taken of it
        course_id: Owning course
        order: Ordinal position, 0-based and contiguous within the course
        title, description, video_url, exercise_unit: LessonContent fields

    Constraints:
        (course_id, order): UNIQUE
    """

    __tablename__ = "course_lessons"
    __table_args__ = (
        UniqueConstraint("course_id", "order", name="uq_course_lessons_course_order"),
    )

    course_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    order: Mapped[int] = mapped_column("order", Integer, nullable=False)

    def apply_content(self, content: LessonContent) -> None:
        """Overwrite this draft's content."""
        for key, value in content.as_columns().items():
            setattr(self, key, value)
