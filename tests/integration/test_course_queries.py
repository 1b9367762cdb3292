"""
Test suite for course, enrollment and completion queries.

Runs model-specific CRUD methods against an in-memory SQLite database.

System role: Verification of course engine read paths
"""

import uuid

import pytest

from course_backend.boundary.db.CRUD.completion_crud import lesson_completion_crud
from course_backend.boundary.db.CRUD.course_crud import course_crud
from course_backend.boundary.db.CRUD.enrollment_crud import enrollment_crud
from course_backend.boundary.db.models.course_model import (
    CourseCategory,
    CourseModel,
    CourseStatus,
)
from course_backend.boundary.db.models.enrollment_model import EnrollmentStatus
from course_backend.boundary.db.models.lesson_model import DraftLessonModel


async def _course(db, name: str, **fields) -> CourseModel:
    return await course_crud.create(db, created_by=uuid.uuid4(), name=name, **fields)


async def _enrollment(db, course_id, patient_id=None, status=EnrollmentStatus.ACTIVE):
    enrollment = await enrollment_crud.create(
        db,
        course_id=course_id,
        patient_id=patient_id or uuid.uuid4(),
        enrolled_by=uuid.uuid4(),
        enrolled_version=1,
        status=EnrollmentStatus.ACTIVE,
    )
    if status == EnrollmentStatus.CANCELLED:
        enrollment.cancel()
        await db.flush()
    return enrollment


class TestCourseListing:
    """Test suite for CourseCRUD.list_courses()."""

    async def test_list_should_exclude_archived_and_count_total(self, test_async_db) -> None:
        # Arrange
        await _course(test_async_db, "Knee one")
        await _course(test_async_db, "Knee two")
        await _course(test_async_db, "Archived knee", is_archived=True, status=CourseStatus.ARCHIVED)

        # Act
        rows, total = await course_crud.list_courses(test_async_db, limit=1)

        # Assert
        assert total == 2
        assert len(rows) == 1

    async def test_search_should_be_case_insensitive_and_literal(self, test_async_db) -> None:
        await _course(test_async_db, "Shoulder 100% mobility")
        await _course(test_async_db, "Shoulder strength")

        rows, total = await course_crud.list_courses(test_async_db, search="100%")
        upper_rows, _ = await course_crud.list_courses(test_async_db, search="SHOULDER")

        assert total == 1
        assert rows[0].name == "Shoulder 100% mobility"
        assert len(upper_rows) == 2

    async def test_filters_should_combine(self, test_async_db) -> None:
        await _course(test_async_db, "Hip", category=CourseCategory.HIP)
        await _course(
            test_async_db, "Hip live", category=CourseCategory.HIP, status=CourseStatus.ACTIVE
        )
        await _course(test_async_db, "Neck live", status=CourseStatus.ACTIVE)

        rows, total = await course_crud.list_courses(
            test_async_db, status=CourseStatus.ACTIVE, category=CourseCategory.HIP
        )

        assert total == 1
        assert rows[0].name == "Hip live"

    async def test_get_by_invite_token_should_find_owner(self, test_async_db) -> None:
        course = await _course(test_async_db, "Invite", invite_token="Tok1234567890")

        assert await course_crud.get_by_invite_token(test_async_db, "Tok1234567890") is course
        assert await course_crud.get_by_invite_token(test_async_db, "Other1234567") is None


class TestCourseCounts:
    """Test suite for per-course aggregate counts."""

    async def test_count_lessons_should_group_by_course(self, test_async_db) -> None:
        # Arrange
        first = await _course(test_async_db, "First")
        second = await _course(test_async_db, "Second")
        for order in range(2):
            test_async_db.add(DraftLessonModel(course_id=first.id, order=order, title=f"L{order}"))
        await test_async_db.flush()

        # Act
        counts = await course_crud.count_lessons(test_async_db, [first.id, second.id])

        # Assert
        assert counts.get(first.id) == 2
        assert counts.get(second.id, 0) == 0

    async def test_count_active_enrollments_should_skip_cancelled(self, test_async_db) -> None:
        course = await _course(test_async_db, "Counted")
        await _enrollment(test_async_db, course.id)
        await _enrollment(test_async_db, course.id, status=EnrollmentStatus.CANCELLED)

        counts = await course_crud.count_active_enrollments(test_async_db, [course.id])

        assert counts == {course.id: 1}


class TestEnrollmentQueries:
    """Test suite for EnrollmentCRUD lookups."""

    async def test_get_for_patient_should_hide_other_patients(self, test_async_db) -> None:
        course = await _course(test_async_db, "Private")
        owner = uuid.uuid4()
        enrollment = await _enrollment(test_async_db, course.id, owner)

        assert await enrollment_crud.get_for_patient(test_async_db, enrollment.id, owner) is enrollment
        assert await enrollment_crud.get_for_patient(
            test_async_db, enrollment.id, uuid.uuid4()
        ) is None

    async def test_list_for_patient_should_filter_statuses_and_join_course(
        self, test_async_db
    ) -> None:
        # Arrange
        patient = uuid.uuid4()
        active_course = await _course(test_async_db, "Active")
        cancelled_course = await _course(test_async_db, "Cancelled")
        active = await _enrollment(test_async_db, active_course.id, patient)
        await _enrollment(
            test_async_db, cancelled_course.id, patient, status=EnrollmentStatus.CANCELLED
        )

        # Act
        rows = await enrollment_crud.list_for_patient(
            test_async_db, patient, [EnrollmentStatus.ACTIVE, EnrollmentStatus.COMPLETED]
        )

        # Assert
        assert rows == [(active, active_course)]


class TestCompletionQueries:
    """Test suite for LessonCompletionCRUD."""

    @pytest.fixture
    async def enrollment(self, test_async_db):
        course = await _course(test_async_db, "Progress")
        return await _enrollment(test_async_db, course.id)

    async def test_counts_should_group_by_enrollment(self, test_async_db, enrollment) -> None:
        for _ in range(3):
            await lesson_completion_crud.create(
                test_async_db,
                enrollment_id=enrollment.id,
                lesson_id=uuid.uuid4(),
                patient_id=enrollment.patient_id,
            )
        other = uuid.uuid4()

        counts = await lesson_completion_crud.count_by_enrollments(
            test_async_db, [enrollment.id, other]
        )

        assert counts.get(enrollment.id) == 3
        assert counts.get(other, 0) == 0
        assert await lesson_completion_crud.count_for_enrollment(test_async_db, enrollment.id) == 3

    async def test_delete_for_enrollment_should_return_rowcount(
        self, test_async_db, enrollment
    ) -> None:
        lesson_id = uuid.uuid4()
        await lesson_completion_crud.create(
            test_async_db,
            enrollment_id=enrollment.id,
            lesson_id=lesson_id,
            patient_id=enrollment.patient_id,
        )

        removed = await lesson_completion_crud.delete_for_enrollment(test_async_db, enrollment.id)

        assert removed == 1
        assert await lesson_completion_crud.get_for_lesson(
            test_async_db, enrollment.id, lesson_id
        ) is None
