"""
Invite token service orchestrator.

Manages a course's self-enrollment link and resolves tokens for patients.
Tokens are never rotated: disabling keeps the value so previously shared
links work again once re-enabled.

Dependencies: course_backend.boundary.db, course_backend.core.invite_tokens
System role: InviteTokenService use cases
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from course_backend.application.services.enrollment_service import EnrollmentService
from course_backend.boundary.db.CRUD.course_crud import course_crud
from course_backend.boundary.db.CRUD.enrollment_crud import enrollment_crud
from course_backend.boundary.db.CRUD.snapshot_crud import lesson_snapshot_crud
from course_backend.boundary.db.models.course_model import CourseModel
from course_backend.boundary.db.models.enrollment_model import EnrollmentStatus
from course_backend.boundary.db.transaction import atomic
from course_backend.configs import get_settings
from course_backend.configs.courses import CourseSettings
from course_backend.core.exceptions import (
    CourseArchivedError,
    CourseGoneError,
    CourseNotFoundError,
    CourseNotPublishedError,
    InviteDisabledError,
    InviteTokenNotFoundError,
    ValidationError,
)
from course_backend.core.invite_tokens import generate_invite_token, is_well_formed_token

logger = logging.getLogger(__name__)


class InviteService:
    """Invite link orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        enrollment_service: EnrollmentService | None = None,
        settings: CourseSettings | None = None,
    ) -> None:
        """
        Initialize invite service.

        Args:
            db: Async SQLAlchemy session
            enrollment_service: Enrollment orchestrator used for self-enroll
                (defaults to one bound to the same session)
            settings: Course settings (defaults to application settings)
        """
        self.db = db
        self.enrollment_service = enrollment_service or EnrollmentService(db)
        self.settings = settings or get_settings().courses

    def _link(self, course: CourseModel) -> dict[str, Any]:
        return {
            "course_id": course.id,
            "invite_token": course.invite_token,
            "invite_enabled": course.invite_enabled,
            "join_url": self.settings.join_url(course.invite_token)
            if course.invite_token
            else None,
        }

    async def generate_or_get(self, course_id: UUID) -> dict[str, Any]:
        """
        Return the course's invite link, creating or re-enabling it.

        An enabled token is returned unchanged. A disabled token is re-enabled
        with the same value. A new token is generated only when none exists.

        Args:
            course_id: Course UUID

        Returns:
            dict: course_id, invite_token, invite_enabled, join_url

        Raises:
            CourseNotFoundError: If the course does not exist
            CourseArchivedError: If the course is archived
            CourseNotPublishedError: If the course was never published
        """
        async with atomic(self.db):
            course = await course_crud.get_for_update(self.db, course_id)
            if course is None:
                raise CourseNotFoundError(course_id)
            if course.is_archived:
                raise CourseArchivedError(course_id)
            if not course.is_published:
                raise CourseNotPublishedError(course_id)

            generated = course.invite_token is None
            changed = generated or not course.invite_enabled
            if generated:
                course.invite_token = generate_invite_token(self.settings.invite_token_length)
            course.invite_enabled = True
            if changed:
                await self.db.flush()
            link = self._link(course)

        if changed:
            logger.info(
                "Invite link generated" if generated else "Invite link re-enabled",
                extra={"course_id": str(course_id)},
            )
        return link

    async def disable(self, course_id: UUID) -> dict[str, Any]:
        """
        Disable the invite link, keeping the token value.

        Args:
            course_id: Course UUID

        Returns:
            dict: course_id, invite_token, invite_enabled, join_url

        Raises:
            CourseNotFoundError: If the course does not exist
        """
        async with atomic(self.db):
            course = await course_crud.get_for_update(self.db, course_id)
            if course is None:
                raise CourseNotFoundError(course_id)
            course.invite_enabled = False
            await self.db.flush()
            link = self._link(course)

        logger.info("Invite link disabled", extra={"course_id": str(course_id)})
        return link

    async def _resolve(self, token: str) -> CourseModel:
        """Apply the token checks shared by preview and self-enroll."""
        if not is_well_formed_token(token):
            raise ValidationError("Malformed invite token", field="token")

        course = await course_crud.get_by_invite_token(self.db, token)
        if course is None:
            raise InviteTokenNotFoundError()
        if not course.invite_enabled:
            raise InviteDisabledError(course.id)
        if course.is_archived:
            raise CourseGoneError(course.id)
        if not course.is_published:
            raise CourseNotPublishedError(course.id)
        return course

    async def get_invite_preview(self, token: str, patient_id: UUID) -> dict[str, Any]:
        """
        Describe the course behind an invite link.

        Args:
            token: Invite token
            patient_id: Caller's patient id

        Returns:
            dict: Course summary, lesson_count of the current generation and
            is_enrolled (caller holds an active enrollment)

        Raises:
            ValidationError: If the token is malformed
            InviteTokenNotFoundError: If no course carries the token
            InviteDisabledError: If the link is disabled
            CourseGoneError: If the course is archived
            CourseNotPublishedError: If the course was never published
        """
        course = await self._resolve(token)
        lesson_count = await lesson_snapshot_crud.count_generation(
            self.db, course.id, course.version
        )
        enrollment = await enrollment_crud.get_by_course_and_patient(
            self.db, course.id, patient_id
        )
        return {
            "course_id": course.id,
            "name": course.name,
            "description": course.description,
            "cover_image_url": course.cover_image_url,
            "category": course.category,
            "duration_weeks": course.duration_weeks,
            "unlock_mode": course.unlock_mode,
            "lesson_count": lesson_count,
            "is_enrolled": enrollment is not None
            and enrollment.status == EnrollmentStatus.ACTIVE,
        }

    async def resolve_for_self_enroll(
        self,
        token: str,
        patient_id: UUID,
        actor_id: UUID,
    ) -> tuple[dict[str, Any], bool]:
        """
        Enroll the caller into the course behind an invite link.

        Args:
            token: Invite token
            patient_id: Caller's own patient id
            actor_id: Caller's user id

        Returns:
            tuple: (enrollment data, True if a new row was created)

        Raises:
            ValidationError: If the token is malformed
            InviteTokenNotFoundError: If no course carries the token
            InviteDisabledError: If the link is disabled
            CourseGoneError: If the course is archived
            CourseNotPublishedError: If the course was never published
            AlreadyEnrolledError: If the caller is already actively enrolled
        """
        course = await self._resolve(token)
        course_id = course.id
        logger.info(
            "Self-enrollment via invite link",
            extra={"course_id": str(course_id), "patient_id": str(patient_id)},
        )
        return await self.enrollment_service.enroll(
            course_id, patient_id, actor_id, invite_token=token
        )
