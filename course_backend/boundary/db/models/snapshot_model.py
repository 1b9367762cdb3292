"""
Lesson snapshot ORM model.

Immutable per-(course, version) copy of the draft lesson set taken at
publish time. Rows are written once and never updated or deleted.

Dependencies: sqlalchemy, course_backend.boundary.db.base
System role: SnapshotStore persistence (served lesson content)
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, UniqueConstraint, event
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from course_backend.boundary.db.base import Base, UUIDMixin, utcnow
from course_backend.boundary.db.models.lesson_content_columns import LessonContentColumns
from course_backend.core.exceptions import SnapshotImmutableError


class LessonSnapshotModel(Base, UUIDMixin, LessonContentColumns):
    """
    Lesson snapshot ORM model.

    Attributes:
        id: UUID primary key (snapshot row id)
        course_id: Owning course
        version: Generation this row belongs to
        lesson_id: Draft lesson id at publish time
        order: Ordinal position at publish time
        title, description, video_url, exercise_unit: Frozen LessonContent
        created_at: Publish timestamp

    Constraints:
        (course_id, version, lesson_id): UNIQUE
        (course_id, version, order): UNIQUE
    """

    __tablename__ = "course_lesson_snapshots"
    __table_args__ = (
        UniqueConstraint(
            "course_id", "version", "lesson_id", name="uq_snapshots_course_version_lesson"
        ),
        UniqueConstraint(
            "course_id", "version", "order", name="uq_snapshots_course_version_order"
        ),
    )

    course_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    version: Mapped[int] = mapped_column(Integer, nullable=False)

    lesson_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)

    order: Mapped[int] = mapped_column("order", Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )


@event.listens_for(LessonSnapshotModel, "before_update")
def _reject_snapshot_update(mapper, connection, target: LessonSnapshotModel) -> None:
    raise SnapshotImmutableError(target.id)


@event.listens_for(LessonSnapshotModel, "before_delete")
def _reject_snapshot_delete(mapper, connection, target: LessonSnapshotModel) -> None:
    raise SnapshotImmutableError(target.id)
