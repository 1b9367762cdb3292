"""
Enrollment CRUD operations.

Provides enrollment lookups scoped to a course or a patient, optionally
locking the row, and listings for staff and patient views.

Dependencies: sqlalchemy, course_backend.boundary.db.models
System role: Enrollment persistence operations
"""

from typing import Iterable, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from course_backend.boundary.db.models.course_model import CourseModel
from course_backend.boundary.db.models.enrollment_model import EnrollmentModel, EnrollmentStatus
from course_backend.boundary.db.CRUD.base_crud import BaseCRUD


class EnrollmentCRUD(BaseCRUD[EnrollmentModel]):
    """
    CRUD operations for EnrollmentModel.

    Extends BaseCRUD with (course, patient) lookup and ownership-scoped reads.
    """

    def __init__(self) -> None:
        """Initialize EnrollmentCRUD with EnrollmentModel."""
        super().__init__(EnrollmentModel)

    async def get_by_course_and_patient(
        self,
        session: AsyncSession,
        course_id: UUID,
        patient_id: UUID,
        for_update: bool = False,
    ) -> EnrollmentModel | None:
        """
        Retrieve the single enrollment of a patient in a course.

        Args:
            session: Async database session
            course_id: Course UUID
            patient_id: Patient UUID
            for_update: Lock the row FOR UPDATE until commit

        Returns:
            EnrollmentModel if found, None otherwise
        """
        stmt = select(EnrollmentModel).where(
            EnrollmentModel.course_id == course_id,
            EnrollmentModel.patient_id == patient_id,
        )
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_patient(
        self,
        session: AsyncSession,
        enrollment_id: UUID,
        patient_id: UUID,
        for_update: bool = False,
    ) -> EnrollmentModel | None:
        """
        Retrieve an enrollment only if it belongs to the given patient.

        Args:
            session: Async database session
            enrollment_id: Enrollment UUID
            patient_id: Caller's patient UUID
            for_update: Lock the row FOR UPDATE until commit

        Returns:
            EnrollmentModel if found and owned, None otherwise
        """
        stmt = select(EnrollmentModel).where(
            EnrollmentModel.id == enrollment_id,
            EnrollmentModel.patient_id == patient_id,
        )
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_course(
        self,
        session: AsyncSession,
        course_id: UUID,
    ) -> Sequence[EnrollmentModel]:
        """All enrollments of a course, newest first."""
        stmt = (
            select(EnrollmentModel)
            .where(EnrollmentModel.course_id == course_id)
            .order_by(EnrollmentModel.enrolled_at.desc(), EnrollmentModel.id)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_for_patient(
        self,
        session: AsyncSession,
        patient_id: UUID,
        statuses: Iterable[EnrollmentStatus],
    ) -> list[tuple[EnrollmentModel, CourseModel]]:
        """
        List a patient's enrollments joined with their courses.

        Args:
            session: Async database session
            patient_id: Patient UUID
            statuses: Enrollment statuses to include

        Returns:
            list of (EnrollmentModel, CourseModel), newest enrollment first
        """
        stmt = (
            select(EnrollmentModel, CourseModel)
            .join(CourseModel, CourseModel.id == EnrollmentModel.course_id)
            .where(
                EnrollmentModel.patient_id == patient_id,
                EnrollmentModel.status.in_(list(statuses)),
            )
            .order_by(EnrollmentModel.enrolled_at.desc(), EnrollmentModel.id)
        )
        result = await session.execute(stmt)
        return [(enrollment, course) for enrollment, course in result.all()]


enrollment_crud = EnrollmentCRUD()
