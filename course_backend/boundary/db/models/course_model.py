"""
Course ORM model.

A course is the authoring container for draft lessons and the owner of the
published version counter and the invite link.

Dependencies: sqlalchemy, course_backend.boundary.db.base
System role: Course persistence and publish/version state
"""

import enum
import uuid

from sqlalchemy import Boolean, Enum, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from course_backend.boundary.db.base import Base, UUIDMixin, TimestampMixin


class CourseStatus(str, enum.Enum):
    """
    Course lifecycle states.

    DRAFT: Never published; version is 0
    ACTIVE: At least one published generation exists
    ARCHIVED: Terminal; no further publish, edit or enroll
    """

    DRAFT = "draft"
    ACTIVE = "active"
    ARCHIVED = "archived"


class UnlockMode(str, enum.Enum):
    """Lesson access policy for enrolled patients."""

    SEQUENTIAL = "sequential"
    ALL_AT_ONCE = "all_at_once"


class CourseCategory(str, enum.Enum):
    """Body region a course addresses."""

    BACK = "back"
    SHOULDER = "shoulder"
    KNEE = "knee"
    HIP = "hip"
    NECK = "neck"
    FULL_BODY = "full_body"
    OTHER = "other"


class CourseModel(Base, UUIDMixin, TimestampMixin):
    """
    Course ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        created_by: Staff user who created the course
        name: Course name (200 char limit)
        description: Optional course description
        cover_image_url: Optional cover image reference
        duration_weeks: Planned course length in weeks
        category: Body region classification
        unlock_mode: Sequential or all-at-once lesson access
        status: Lifecycle state (DRAFT/ACTIVE/ARCHIVED)
        version: Latest published generation, 0 before the first publish
        invite_token: Opaque self-enrollment token (kept when disabled)
        invite_enabled: Whether the invite token currently admits patients
        is_archived: Terminal archive flag

    Constraints:
        invite_token: UNIQUE; one course per token

    Locking:
        Publish and draft edits hold this row FOR UPDATE; enrollment holds
        it FOR SHARE, so no enrollment can pin a half-written generation.
    """

    __tablename__ = "courses"

    created_by: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)

    description: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    cover_image_url: Mapped[str | None] = mapped_column(
        String(1000), nullable=True, default=None
    )

    duration_weeks: Mapped[int] = mapped_column(Integer, nullable=False, default=8)

    category: Mapped[CourseCategory] = mapped_column(
        Enum(CourseCategory, native_enum=False),
        nullable=False,
        default=CourseCategory.OTHER,
    )

    unlock_mode: Mapped[UnlockMode] = mapped_column(
        Enum(UnlockMode, native_enum=False),
        nullable=False,
        default=UnlockMode.SEQUENTIAL,
    )

    status: Mapped[CourseStatus] = mapped_column(
        Enum(CourseStatus, native_enum=False),
        nullable=False,
        default=CourseStatus.DRAFT,
    )

    version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        doc="Latest published generation; changes only via publish",
    )

    invite_token: Mapped[str | None] = mapped_column(
        String(128),
        nullable=True,
        unique=True,
        default=None,
    )

    invite_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    is_archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    @property
    def is_published(self) -> bool:
        """True once at least one generation exists."""
        return self.version >= 1

    @property
    def is_sequential(self) -> bool:
        return self.unlock_mode == UnlockMode.SEQUENTIAL
