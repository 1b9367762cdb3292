"""
Draft lesson CRUD operations.

Dependencies: sqlalchemy, course_backend.boundary.db.models
System role: DraftStore persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from course_backend.boundary.db.models.lesson_model import DraftLessonModel
from course_backend.boundary.db.CRUD.base_crud import BaseCRUD


class DraftLessonCRUD(BaseCRUD[DraftLessonModel]):
    """CRUD operations for DraftLessonModel."""

    def __init__(self) -> None:
        """Initialize DraftLessonCRUD with DraftLessonModel."""
        super().__init__(DraftLessonModel)

    async def get_for_course(
        self,
        session: AsyncSession,
        course_id: UUID,
    ) -> Sequence[DraftLessonModel]:
        """
        Retrieve a course's draft lessons in ordinal order.

        Args:
            session: Async database session
            course_id: Course UUID

        Returns:
            Sequence of DraftLessonModels ordered by position
        """
        stmt = (
            select(DraftLessonModel)
            .where(DraftLessonModel.course_id == course_id)
            .order_by(DraftLessonModel.order)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


draft_lesson_crud = DraftLessonCRUD()
