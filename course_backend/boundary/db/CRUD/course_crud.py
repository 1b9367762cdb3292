"""
Course CRUD operations.

Provides course lookups (by id, by invite token, locked), filtered listing
with pagination, and aggregate counts used by course listings.

Dependencies: sqlalchemy, course_backend.boundary.db.models
System role: Course persistence operations
"""

from typing import Iterable, Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from course_backend.boundary.db.models.course_model import (
    CourseCategory,
    CourseModel,
    CourseStatus,
)
from course_backend.boundary.db.models.enrollment_model import EnrollmentModel, EnrollmentStatus
from course_backend.boundary.db.models.lesson_model import DraftLessonModel
from course_backend.boundary.db.CRUD.base_crud import BaseCRUD


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class CourseCRUD(BaseCRUD[CourseModel]):
    """
    CRUD operations for CourseModel.

    Extends BaseCRUD with invite-token lookup, filtered listing, and
    lesson/enrollment counts keyed by course.
    """

    def __init__(self) -> None:
        """Initialize CourseCRUD with CourseModel."""
        super().__init__(CourseModel)

    async def get_by_invite_token(
        self,
        session: AsyncSession,
        token: str,
    ) -> CourseModel | None:
        """
        Retrieve the course owning an invite token.

        Args:
            session: Async database session
            token: Invite token

        Returns:
            CourseModel if found, None otherwise
        """
        stmt = select(CourseModel).where(CourseModel.invite_token == token)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_courses(
        self,
        session: AsyncSession,
        status: CourseStatus | None = None,
        category: CourseCategory | None = None,
        search: str | None = None,
        limit: int = 24,
        offset: int = 0,
    ) -> tuple[Sequence[CourseModel], int]:
        """
        List non-archived courses, newest first.

        Args:
            session: Async database session
            status: Optional status filter
            category: Optional category filter
            search: Optional case-insensitive name substring
            limit: Page size
            offset: Number of courses to skip

        Returns:
            Tuple of (courses on this page, total matching count)
        """
        conditions = [CourseModel.is_archived.is_(False)]
        if status is not None:
            conditions.append(CourseModel.status == status)
        if category is not None:
            conditions.append(CourseModel.category == category)
        if search:
            pattern = f"%{_escape_like(search.lower())}%"
            conditions.append(func.lower(CourseModel.name).like(pattern, escape="\\"))

        count_stmt = select(func.count()).select_from(CourseModel).where(*conditions)
        total = (await session.execute(count_stmt)).scalar_one()

        stmt = (
            select(CourseModel)
            .where(*conditions)
            .order_by(CourseModel.created_at.desc(), CourseModel.id)
            .offset(offset)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all(), total

    async def count_lessons(
        self,
        session: AsyncSession,
        course_ids: Iterable[UUID],
    ) -> dict[UUID, int]:
        """
        Count draft lessons per course.

        Args:
            session: Async database session
            course_ids: Courses to count for

        Returns:
            Mapping of course id to draft lesson count (missing means 0)
        """
        ids = list(course_ids)
        if not ids:
            return {}
        stmt = (
            select(DraftLessonModel.course_id, func.count())
            .where(DraftLessonModel.course_id.in_(ids))
            .group_by(DraftLessonModel.course_id)
        )
        result = await session.execute(stmt)
        return {course_id: count for course_id, count in result.all()}

    async def count_active_enrollments(
        self,
        session: AsyncSession,
        course_ids: Iterable[UUID],
    ) -> dict[UUID, int]:
        """
        Count active enrollments per course.

        Args:
            session: Async database session
            course_ids: Courses to count for

        Returns:
            Mapping of course id to active enrollment count (missing means 0)
        """
        ids = list(course_ids)
        if not ids:
            return {}
        stmt = (
            select(EnrollmentModel.course_id, func.count())
            .where(
                EnrollmentModel.course_id.in_(ids),
                EnrollmentModel.status == EnrollmentStatus.ACTIVE,
            )
            .group_by(EnrollmentModel.course_id)
        )
        result = await session.execute(stmt)
        return {course_id: count for course_id, count in result.all()}


course_crud = CourseCRUD()
