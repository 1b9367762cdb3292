"""
Publish service orchestrator.

Freezes a course's draft lesson set into a new immutable snapshot
generation and advances the course version.

Dependencies: course_backend.boundary.db
System role: Draft -> snapshot publication
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from course_backend.boundary.db.CRUD.course_crud import course_crud
from course_backend.boundary.db.CRUD.lesson_crud import draft_lesson_crud
from course_backend.boundary.db.CRUD.snapshot_crud import lesson_snapshot_crud
from course_backend.boundary.db.models.course_model import CourseStatus
from course_backend.boundary.db.transaction import atomic
from course_backend.core.exceptions import (
    CourseArchivedError,
    CourseNotFoundError,
    EmptyDraftError,
)

logger = logging.getLogger(__name__)


class PublishService:
    """
    Publish orchestrator.

    A publish runs as one transaction holding the course row FOR UPDATE:
    concurrent publishes of the same course serialize, and enrollments (which
    read the course FOR SHARE) never observe a half-written generation.
    """

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize publish service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def publish(self, course_id: UUID) -> dict[str, Any]:
        """
        Publish the current draft as generation course.version + 1.

        Flow:
        1. Lock the course row
        2. Read the ordered draft lessons
        3. Insert one snapshot per lesson at the new version
        4. Set course.version and status=active
        All steps commit together or not at all.

        Args:
            course_id: Course UUID

        Returns:
            dict: course_id, version, status, lesson_count

        Raises:
            CourseNotFoundError: If the course does not exist
            CourseArchivedError: If the course is archived
            EmptyDraftError: If the course has no draft lessons
        """
        async with atomic(self.db):
            course = await course_crud.get_for_update(self.db, course_id)
            if course is None:
                raise CourseNotFoundError(course_id)
            if course.is_archived:
                raise CourseArchivedError(course_id)

            drafts = await draft_lesson_crud.get_for_course(self.db, course_id)
            if not drafts:
                raise EmptyDraftError(course_id)

            new_version = course.version + 1
            snapshots = await lesson_snapshot_crud.create_generation(
                self.db, course_id, new_version, drafts
            )
            course.version = new_version
            course.status = CourseStatus.ACTIVE
            await self.db.flush()

        logger.info(
            "Course published",
            extra={
                "course_id": str(course_id),
                "version": new_version,
                "lesson_count": len(snapshots),
            },
        )
        return {
            "course_id": course_id,
            "version": new_version,
            "status": CourseStatus.ACTIVE,
            "lesson_count": len(snapshots),
        }
