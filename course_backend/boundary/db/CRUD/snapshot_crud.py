"""
Lesson snapshot CRUD operations.

Snapshot generations are written in one call and only ever read
afterwards; update_by_id and delete_by_id refuse to run.

Dependencies: sqlalchemy, course_backend.boundary.db.models
System role: SnapshotStore persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from course_backend.boundary.db.models.lesson_model import DraftLessonModel
from course_backend.boundary.db.models.snapshot_model import LessonSnapshotModel
from course_backend.boundary.db.CRUD.base_crud import BaseCRUD
from course_backend.core.exceptions import SnapshotImmutableError


class LessonSnapshotCRUD(BaseCRUD[LessonSnapshotModel]):
    """
    CRUD operations for LessonSnapshotModel.

    Extends BaseCRUD with generation-scoped writes and reads.
    """

    def __init__(self) -> None:
        """Initialize LessonSnapshotCRUD with LessonSnapshotModel."""
        super().__init__(LessonSnapshotModel)

    async def create_generation(
        self,
        session: AsyncSession,
        course_id: UUID,
        version: int,
        drafts: Sequence[DraftLessonModel],
    ) -> list[LessonSnapshotModel]:
        """
        Copy a draft lesson set into a new snapshot generation.

        Rows are only flushed; the caller's transaction decides whether the
        generation becomes visible.

        Args:
            session: Async database session (inside a transaction)
            course_id: Course UUID
            version: Generation number to stamp on every row
            drafts: Draft lessons in ordinal order

        Returns:
            list[LessonSnapshotModel]: Snapshot rows in ordinal order
        """
        snapshots = [
            LessonSnapshotModel(
                course_id=course_id,
                version=version,
                lesson_id=draft.id,
                order=position,
                **draft.content.as_columns(),
            )
            for position, draft in enumerate(drafts)
        ]
        session.add_all(snapshots)
        await session.flush()
        return snapshots

    async def get_generation(
        self,
        session: AsyncSession,
        course_id: UUID,
        version: int,
    ) -> Sequence[LessonSnapshotModel]:
        """
        Retrieve one generation in ordinal order.

        Args:
            session: Async database session
            course_id: Course UUID
            version: Generation number

        Returns:
            Sequence of LessonSnapshotModels ordered by position
        """
        stmt = (
            select(LessonSnapshotModel)
            .where(
                LessonSnapshotModel.course_id == course_id,
                LessonSnapshotModel.version == version,
            )
            .order_by(LessonSnapshotModel.order)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_generation(
        self,
        session: AsyncSession,
        course_id: UUID,
        version: int,
    ) -> int:
        """Number of lessons in one generation."""
        stmt = (
            select(func.count())
            .select_from(LessonSnapshotModel)
            .where(
                LessonSnapshotModel.course_id == course_id,
                LessonSnapshotModel.version == version,
            )
        )
        return (await session.execute(stmt)).scalar_one()

    async def count_generations(
        self,
        session: AsyncSession,
        keys: set[tuple[UUID, int]],
    ) -> dict[tuple[UUID, int], int]:
        """
        Count lessons for several (course_id, version) generations at once.

        Args:
            session: Async database session
            keys: (course_id, version) pairs

        Returns:
            Mapping of (course_id, version) to lesson count (missing means 0)
        """
        if not keys:
            return {}
        course_ids = list({course_id for course_id, _ in keys})
        stmt = (
            select(
                LessonSnapshotModel.course_id,
                LessonSnapshotModel.version,
                func.count(),
            )
            .where(LessonSnapshotModel.course_id.in_(course_ids))
            .group_by(LessonSnapshotModel.course_id, LessonSnapshotModel.version)
        )
        result = await session.execute(stmt)
        return {
            (course_id, version): count
            for course_id, version, count in result.all()
            if (course_id, version) in keys
        }

    async def update_by_id(self, session: AsyncSession, id: UUID, **kwargs) -> None:
        """Snapshots are write-once."""
        raise SnapshotImmutableError(id)

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        """Snapshots are write-once."""
        raise SnapshotImmutableError(id)


lesson_snapshot_crud = LessonSnapshotCRUD()
