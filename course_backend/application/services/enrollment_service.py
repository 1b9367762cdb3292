"""
Enrollment service orchestrator.

Enrolls patients into the current generation of a course, re-enrolls
completed or cancelled enrollments, and applies staff status changes.

Dependencies: course_backend.boundary.db, sqlalchemy
System role: EnrollmentManager use cases
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from course_backend.boundary.db.CRUD.completion_crud import lesson_completion_crud
from course_backend.boundary.db.CRUD.course_crud import course_crud
from course_backend.boundary.db.CRUD.enrollment_crud import enrollment_crud
from course_backend.boundary.db.CRUD.snapshot_crud import lesson_snapshot_crud
from course_backend.boundary.db.models.course_model import CourseStatus
from course_backend.boundary.db.models.enrollment_model import (
    EnrollmentModel,
    EnrollmentStatus,
)
from course_backend.boundary.db.transaction import atomic
from course_backend.core.exceptions import (
    AlreadyEnrolledError,
    CourseArchivedError,
    CourseGoneError,
    CourseNotFoundError,
    CourseNotPublishedError,
    EnrollmentNotFoundError,
    InvalidEnrollmentTransitionError,
    InviteDisabledError,
)
from course_backend.core.unlock_policy import progress_percent

logger = logging.getLogger(__name__)


def enrollment_to_dict(enrollment: EnrollmentModel) -> dict[str, Any]:
    """Plain representation of an enrollment row."""
    return {
        "id": enrollment.id,
        "course_id": enrollment.course_id,
        "patient_id": enrollment.patient_id,
        "enrolled_by": enrollment.enrolled_by,
        "enrolled_version": enrollment.enrolled_version,
        "status": enrollment.status,
        "enrolled_at": enrollment.enrolled_at,
        "completed_at": enrollment.completed_at,
        "cancelled_at": enrollment.cancelled_at,
    }


class EnrollmentService:
    """Enrollment orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize enrollment service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def enroll(
        self,
        course_id: UUID,
        patient_id: UUID,
        actor_id: UUID,
        invite_token: str | None = None,
    ) -> tuple[dict[str, Any], bool]:
        """
        Enroll a patient, pinning them to the course's current version.

        A completed or cancelled enrollment is re-activated in place: it is
        re-pinned to the current version and all of its completions are
        deleted in the same transaction.

        When invite_token is given the invite link is re-checked on the
        locked course row, so a concurrent disable or archive wins.

        Args:
            course_id: Course UUID
            patient_id: Patient to enroll
            actor_id: User performing the enrollment (staff or the patient)
            invite_token: Token the patient followed, for self-enrollment

        Returns:
            tuple: (enrollment data, True if a new row was created)

        Raises:
            CourseNotFoundError: If the course does not exist
            CourseArchivedError: If the course is archived (staff path)
            InviteDisabledError: If the invite link is disabled or no longer
                carries invite_token
            CourseGoneError: If the course is archived (invite path)
            CourseNotPublishedError: If the course has no published generation
            AlreadyEnrolledError: If an active enrollment already exists
        """
        try:
            async with atomic(self.db):
                course = await course_crud.get_for_update(self.db, course_id, shared=True)
                if course is None:
                    raise CourseNotFoundError(course_id)
                if invite_token is not None:
                    if course.invite_token != invite_token or not course.invite_enabled:
                        raise InviteDisabledError(course_id)
                    if course.is_archived:
                        raise CourseGoneError(course_id)
                if course.is_archived:
                    raise CourseArchivedError(course_id)
                if course.status != CourseStatus.ACTIVE or not course.is_published:
                    raise CourseNotPublishedError(course_id)
                version = course.version

                existing = await enrollment_crud.get_by_course_and_patient(
                    self.db, course_id, patient_id, for_update=True
                )
                if existing is None:
                    enrollment = await enrollment_crud.create(
                        self.db,
                        course_id=course_id,
                        patient_id=patient_id,
                        enrolled_by=actor_id,
                        enrolled_version=version,
                        status=EnrollmentStatus.ACTIVE,
                    )
                    created = True
                    removed = 0
                elif existing.status == EnrollmentStatus.ACTIVE:
                    raise AlreadyEnrolledError(course_id, patient_id, existing.id)
                else:
                    removed = await lesson_completion_crud.delete_for_enrollment(
                        self.db, existing.id
                    )
                    existing.reactivate(version, actor_id)
                    await self.db.flush()
                    enrollment = existing
                    created = False
                result = enrollment_to_dict(enrollment)
        except IntegrityError as e:
            # Concurrent first enrollment won the (course_id, patient_id) race.
            raise AlreadyEnrolledError(course_id, patient_id) from e

        logger.info(
            "Patient enrolled" if created else "Patient re-enrolled",
            extra={
                "course_id": str(course_id),
                "patient_id": str(patient_id),
                "enrollment_id": str(result["id"]),
                "enrolled_version": version,
                "completions_removed": removed,
            },
        )
        return result, created

    async def cancel(
        self,
        enrollment_id: UUID,
        course_id: UUID | None = None,
    ) -> dict[str, Any]:
        """
        Cancel an active enrollment.

        Args:
            enrollment_id: Enrollment UUID
            course_id: When given, the enrollment must belong to this course

        Returns:
            dict: Cancelled enrollment data

        Raises:
            EnrollmentNotFoundError: If missing or in another course
            InvalidEnrollmentTransitionError: If the enrollment is not active
        """
        async with atomic(self.db):
            enrollment = await enrollment_crud.get_for_update(self.db, enrollment_id)
            if enrollment is None or (
                course_id is not None and enrollment.course_id != course_id
            ):
                raise EnrollmentNotFoundError(enrollment_id)
            enrollment.cancel()
            await self.db.flush()
            result = enrollment_to_dict(enrollment)

        logger.info(
            "Enrollment cancelled",
            extra={"enrollment_id": str(enrollment_id), "course_id": str(result["course_id"])},
        )
        return result

    async def change_status(
        self,
        course_id: UUID,
        enrollment_id: UUID,
        status: EnrollmentStatus,
        actor_id: UUID,
    ) -> dict[str, Any]:
        """
        Apply a staff-requested status change.

        CANCELLED cancels, ACTIVE re-enrolls, COMPLETED is never set by hand.

        Args:
            course_id: Course the enrollment must belong to
            enrollment_id: Enrollment UUID
            status: Requested status
            actor_id: Staff user making the change

        Returns:
            dict: Updated enrollment data

        Raises:
            EnrollmentNotFoundError: If missing or in another course
            InvalidEnrollmentTransitionError: If the edge is not allowed
            AlreadyEnrolledError: If re-activating an active enrollment
        """
        enrollment = await enrollment_crud.get_by_id(self.db, enrollment_id)
        if enrollment is None or enrollment.course_id != course_id:
            raise EnrollmentNotFoundError(enrollment_id)

        target = EnrollmentStatus(status)
        if target == EnrollmentStatus.CANCELLED:
            return await self.cancel(enrollment_id, course_id=course_id)
        if target == EnrollmentStatus.ACTIVE:
            result, _ = await self.enroll(course_id, enrollment.patient_id, actor_id)
            return result
        raise InvalidEnrollmentTransitionError(enrollment.status.value, target.value)

    async def list_course_enrollments(self, course_id: UUID) -> list[dict[str, Any]]:
        """
        List all enrollments of a course with progress counts.

        Args:
            course_id: Course UUID

        Returns:
            list[dict]: Enrollment data plus completed_lessons, total_lessons
            and progress_percent, newest first

        Raises:
            CourseNotFoundError: If the course does not exist
        """
        if not await course_crud.exists(self.db, course_id):
            raise CourseNotFoundError(course_id)

        enrollments = await enrollment_crud.list_for_course(self.db, course_id)
        completed = await lesson_completion_crud.count_by_enrollments(
            self.db, [e.id for e in enrollments]
        )
        totals = await lesson_snapshot_crud.count_generations(
            self.db, {(e.course_id, e.enrolled_version) for e in enrollments}
        )

        items = []
        for enrollment in enrollments:
            data = enrollment_to_dict(enrollment)
            done = completed.get(enrollment.id, 0)
            total = totals.get((enrollment.course_id, enrollment.enrolled_version), 0)
            data["completed_lessons"] = done
            data["total_lessons"] = total
            data["progress_percent"] = progress_percent(done, total)
            items.append(data)
        return items
