"""
Enrollment ORM model.

A patient's pinned relationship to one generation of a course. One row per
(course, patient); status changes in place and is guarded by a
transition-validating setter.

Dependencies: sqlalchemy, course_backend.boundary.db.base
System role: Enrollment persistence and status state machine
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, validates

from course_backend.boundary.db.base import Base, UUIDMixin, TimestampMixin, utcnow
from course_backend.core.exceptions import InvalidEnrollmentTransitionError


class EnrollmentStatus(str, enum.Enum):
    """
    Enrollment states.

    ACTIVE: Patient is working through the pinned generation
    COMPLETED: Every lesson of the pinned generation has a completion
    CANCELLED: Explicitly ended by staff
    """

    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Legal status edges. Completed/Cancelled -> Active is re-enroll.
ALLOWED_TRANSITIONS: dict[EnrollmentStatus, frozenset[EnrollmentStatus]] = {
    EnrollmentStatus.ACTIVE: frozenset({EnrollmentStatus.COMPLETED, EnrollmentStatus.CANCELLED}),
    EnrollmentStatus.COMPLETED: frozenset({EnrollmentStatus.ACTIVE}),
    EnrollmentStatus.CANCELLED: frozenset({EnrollmentStatus.ACTIVE}),
}


def can_transition(current: EnrollmentStatus | None, target: EnrollmentStatus) -> bool:
    """Check a status edge; a new row may only start ACTIVE."""
    if current is None:
        return target == EnrollmentStatus.ACTIVE
    return target in ALLOWED_TRANSITIONS[current]


class EnrollmentModel(Base, UUIDMixin, TimestampMixin):
    """
    Enrollment ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        course_id: Enrolled course
        patient_id: Enrolled patient (identity owned by the patient registry)
        enrolled_by: User who created or last re-activated the enrollment
        enrolled_version: Snapshot generation the enrollment is pinned to
        status: ACTIVE/COMPLETED/CANCELLED, changed only along ALLOWED_TRANSITIONS
        enrolled_at: Time of (re-)enrollment
        completed_at: Set on auto-completion, cleared on re-enroll
        cancelled_at: Set on cancel, cleared on re-enroll

    Constraints:
        (course_id, patient_id): UNIQUE; re-enroll reuses the row
    """

    __tablename__ = "course_enrollments"
    __table_args__ = (
        UniqueConstraint("course_id", "patient_id", name="uq_course_enrollments_course_patient"),
    )

    course_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    patient_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        index=True,
    )

    enrolled_by: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)

    enrolled_version: Mapped[int] = mapped_column(Integer, nullable=False)

    status: Mapped[EnrollmentStatus] = mapped_column(
        Enum(EnrollmentStatus, native_enum=False),
        nullable=False,
        default=EnrollmentStatus.ACTIVE,
    )

    enrolled_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )

    cancelled_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )

    @validates("status")
    def _validate_status(self, key: str, value: EnrollmentStatus) -> EnrollmentStatus:
        target = EnrollmentStatus(value)
        current = self.status
        if not can_transition(current, target):
            raise InvalidEnrollmentTransitionError(
                current.value if current is not None else None,
                target.value,
                details={"enrollment_id": str(self.id) if self.id else None},
            )
        return target

    def complete(self, now: datetime | None = None) -> None:
        """ACTIVE -> COMPLETED."""
        self.status = EnrollmentStatus.COMPLETED
        self.completed_at = now or utcnow()

    def cancel(self, now: datetime | None = None) -> None:
        """ACTIVE -> CANCELLED."""
        self.status = EnrollmentStatus.CANCELLED
        self.cancelled_at = now or utcnow()

    def reactivate(
        self,
        version: int,
        actor_id: uuid.UUID,
        now: datetime | None = None,
    ) -> None:
        """
        COMPLETED/CANCELLED -> ACTIVE, re-pinned to version.

        Completion rows are not touched here; the caller deletes them in the
        same transaction.
        """
        self.status = EnrollmentStatus.ACTIVE
        self.enrolled_version = version
        self.enrolled_by = actor_id
        self.enrolled_at = now or utcnow()
        self.completed_at = None
        self.cancelled_at = None
