"""
Lesson completion CRUD operations.

Dependencies: sqlalchemy, course_backend.boundary.db.models
System role: Progress persistence operations
"""

from typing import Iterable, Sequence
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from course_backend.boundary.db.models.completion_model import LessonCompletionModel
from course_backend.boundary.db.CRUD.base_crud import BaseCRUD


class LessonCompletionCRUD(BaseCRUD[LessonCompletionModel]):
    """
    CRUD operations for LessonCompletionModel.

    Completions are inserted once; the only removal is the bulk wipe done
    when an enrollment is re-activated.
    """

    def __init__(self) -> None:
        """Initialize LessonCompletionCRUD with LessonCompletionModel."""
        super().__init__(LessonCompletionModel)

    async def get_for_lesson(
        self,
        session: AsyncSession,
        enrollment_id: UUID,
        lesson_id: UUID,
    ) -> LessonCompletionModel | None:
        """Completion of one lesson within an enrollment, if any."""
        stmt = select(LessonCompletionModel).where(
            LessonCompletionModel.enrollment_id == enrollment_id,
            LessonCompletionModel.lesson_id == lesson_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_enrollment(
        self,
        session: AsyncSession,
        enrollment_id: UUID,
    ) -> Sequence[LessonCompletionModel]:
        """All completions of an enrollment, oldest first."""
        stmt = (
            select(LessonCompletionModel)
            .where(LessonCompletionModel.enrollment_id == enrollment_id)
            .order_by(LessonCompletionModel.completed_at)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_for_enrollment(
        self,
        session: AsyncSession,
        enrollment_id: UUID,
    ) -> int:
        """Number of completed lessons in an enrollment."""
        stmt = (
            select(func.count())
            .select_from(LessonCompletionModel)
            .where(LessonCompletionModel.enrollment_id == enrollment_id)
        )
        return (await session.execute(stmt)).scalar_one()

    async def count_by_enrollments(
        self,
        session: AsyncSession,
        enrollment_ids: Iterable[UUID],
    ) -> dict[UUID, int]:
        """
        Count completions for several enrollments at once.

        Args:
            session: Async database session
            enrollment_ids: Enrollments to count for

        Returns:
            Mapping of enrollment id to completion count (missing means 0)
        """
        ids = list(enrollment_ids)
        if not ids:
            return {}
        stmt = (
            select(LessonCompletionModel.enrollment_id, func.count())
            .where(LessonCompletionModel.enrollment_id.in_(ids))
            .group_by(LessonCompletionModel.enrollment_id)
        )
        result = await session.execute(stmt)
        return {enrollment_id: count for enrollment_id, count in result.all()}

    async def delete_for_enrollment(
        self,
        session: AsyncSession,
        enrollment_id: UUID,
    ) -> int:
        """
        Remove every completion of an enrollment in the current transaction.

        Args:
            session: Async database session (inside a transaction)
            enrollment_id: Enrollment being re-activated

        Returns:
            int: Number of rows removed
        """
        stmt = delete(LessonCompletionModel).where(
            LessonCompletionModel.enrollment_id == enrollment_id
        )
        result = await session.execute(stmt)
        return result.rowcount or 0


lesson_completion_crud = LessonCompletionCRUD()
