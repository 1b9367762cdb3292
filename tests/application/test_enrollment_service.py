"""
Test suite for EnrollmentService.

Covers first enrollment, duplicate rejection, re-enrollment with completion
reset, cancellation, staff status changes and course enrollment listing.

System role: Verification of EnrollmentManager orchestration
"""

import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from course_backend.application.services import enrollment_service as enrollment_module
from course_backend.application.services.course_service import CourseService
from course_backend.application.services.enrollment_service import EnrollmentService
from course_backend.application.services.progress_service import ProgressService
from course_backend.application.services.publish_service import PublishService
from course_backend.boundary.db.CRUD.completion_crud import lesson_completion_crud
from course_backend.boundary.db.CRUD.enrollment_crud import enrollment_crud
from course_backend.boundary.db.CRUD.snapshot_crud import lesson_snapshot_crud
from course_backend.boundary.db.models.enrollment_model import EnrollmentModel, EnrollmentStatus
from course_backend.core.exceptions import (
    AlreadyEnrolledError,
    CourseArchivedError,
    CourseNotFoundError,
    CourseNotPublishedError,
    EnrollmentNotFoundError,
    InvalidEnrollmentTransitionError,
)


@pytest.fixture
def enrollment_service(test_async_db) -> EnrollmentService:
    """Provide EnrollmentService bound to the test database."""
    return EnrollmentService(test_async_db)


async def _complete_all(db, enrollment: dict, patient: uuid.UUID) -> None:
    progress = ProgressService(db)
    lessons = await lesson_snapshot_crud.get_generation(
        db, enrollment["course_id"], enrollment["enrolled_version"]
    )
    for lesson in lessons:
        await progress.complete_lesson(enrollment["id"], lesson.lesson_id, patient)


class TestEnroll:
    """Test suite for EnrollmentService.enroll()."""

    async def test_enroll_should_pin_current_version(
        self, enrollment_service, make_published_course, patient_id, staff_id
    ) -> None:
        course = await make_published_course()

        enrollment, created = await enrollment_service.enroll(course["id"], patient_id, staff_id)

        assert created is True
        assert enrollment["status"] == EnrollmentStatus.ACTIVE
        assert enrollment["enrolled_version"] == 1
        assert enrollment["enrolled_by"] == staff_id
        assert enrollment["completed_at"] is None

    async def test_enroll_twice_should_raise_already_enrolled(
        self, enrollment_service, make_published_course, patient_id, staff_id
    ) -> None:
        course = await make_published_course()
        first, _ = await enrollment_service.enroll(course["id"], patient_id, staff_id)

        with pytest.raises(AlreadyEnrolledError) as exc_info:
            await enrollment_service.enroll(course["id"], patient_id, staff_id)

        assert exc_info.value.enrollment_id == first["id"]

    async def test_enroll_into_unpublished_course_should_raise(
        self, enrollment_service, make_course, patient_id, staff_id
    ) -> None:
        course = await make_course(lesson_count=2)

        with pytest.raises(CourseNotPublishedError):
            await enrollment_service.enroll(course["id"], patient_id, staff_id)

    async def test_enroll_into_archived_course_should_raise(
        self, test_async_db, enrollment_service, make_published_course, patient_id, staff_id
    ) -> None:
        course = await make_published_course()
        await CourseService(test_async_db).archive(course["id"])

        with pytest.raises(CourseArchivedError):
            await enrollment_service.enroll(course["id"], patient_id, staff_id)

    async def test_enroll_into_missing_course_should_raise(
        self, enrollment_service, patient_id, staff_id
    ) -> None:
        with pytest.raises(CourseNotFoundError):
            await enrollment_service.enroll(uuid.uuid4(), patient_id, staff_id)

    async def test_unique_violation_should_map_to_already_enrolled(
        self, test_async_db, enrollment_service, make_published_course, patient_id, staff_id,
        monkeypatch,
    ) -> None:
        # Arrange: a concurrent request inserted the row after our lookup
        course = await make_published_course()
        await enrollment_service.enroll(course["id"], patient_id, staff_id)

        async def no_existing(*args, **kwargs):
            return None

        monkeypatch.setattr(
            enrollment_module.enrollment_crud, "get_by_course_and_patient", no_existing
        )

        # Act / Assert
        with pytest.raises(AlreadyEnrolledError) as exc_info:
            await enrollment_service.enroll(course["id"], patient_id, staff_id)
        assert isinstance(exc_info.value.__cause__, IntegrityError)


class TestReEnroll:
    """Re-enrollment of completed or cancelled enrollments."""

    async def test_reenroll_after_completion_should_reset_progress_and_repin(
        self, test_async_db, enrollment_service, make_published_course, patient_id, staff_id
    ) -> None:
        # Arrange
        course = await make_published_course(lesson_count=2)
        enrollment, _ = await enrollment_service.enroll(course["id"], patient_id, staff_id)
        await _complete_all(test_async_db, enrollment, patient_id)
        await CourseService(test_async_db).save_lessons(
            course["id"], [{"title": "New A"}, {"title": "New B"}, {"title": "New C"}]
        )
        await PublishService(test_async_db).publish(course["id"])
        other_staff = uuid.uuid4()

        # Act
        again, created = await enrollment_service.enroll(course["id"], patient_id, other_staff)

        # Assert
        assert created is False
        assert again["id"] == enrollment["id"]
        assert again["status"] == EnrollmentStatus.ACTIVE
        assert again["enrolled_version"] == 2
        assert again["enrolled_by"] == other_staff
        assert again["completed_at"] is None
        assert await lesson_completion_crud.count_for_enrollment(
            test_async_db, enrollment["id"]
        ) == 0

    async def test_reenroll_after_cancel_should_clear_cancelled_at(
        self, enrollment_service, make_published_course, patient_id, staff_id
    ) -> None:
        course = await make_published_course()
        enrollment, _ = await enrollment_service.enroll(course["id"], patient_id, staff_id)
        await enrollment_service.cancel(enrollment["id"])

        again, created = await enrollment_service.enroll(course["id"], patient_id, staff_id)

        assert created is False
        assert again["status"] == EnrollmentStatus.ACTIVE
        assert again["cancelled_at"] is None

    async def test_failed_reenroll_should_keep_completions_and_status(
        self, test_async_db, enrollment_service, make_published_course, patient_id, staff_id,
        monkeypatch,
    ) -> None:
        # Arrange
        course = await make_published_course(lesson_count=2)
        enrollment, _ = await enrollment_service.enroll(course["id"], patient_id, staff_id)
        await _complete_all(test_async_db, enrollment, patient_id)

        def failing_reactivate(self, version, actor_id, now=None):
            raise RuntimeError("connection lost")

        monkeypatch.setattr(EnrollmentModel, "reactivate", failing_reactivate)

        # Act
        with pytest.raises(RuntimeError):
            await enrollment_service.enroll(course["id"], patient_id, staff_id)
        monkeypatch.undo()

        # Assert
        stored = await enrollment_crud.get_by_id(test_async_db, enrollment["id"])
        assert stored.status == EnrollmentStatus.COMPLETED
        assert stored.completed_at is not None
        assert await lesson_completion_crud.count_for_enrollment(
            test_async_db, enrollment["id"]
        ) == 2


class TestCancelAndChangeStatus:
    """Test suite for cancel() and change_status()."""

    async def test_cancel_should_set_cancelled(
        self, enrollment_service, make_published_course, patient_id, staff_id
    ) -> None:
        course = await make_published_course()
        enrollment, _ = await enrollment_service.enroll(course["id"], patient_id, staff_id)

        cancelled = await enrollment_service.cancel(enrollment["id"])

        assert cancelled["status"] == EnrollmentStatus.CANCELLED
        assert cancelled["cancelled_at"] is not None

    async def test_cancel_twice_should_raise_invalid_transition(
        self, enrollment_service, make_published_course, patient_id, staff_id
    ) -> None:
        course = await make_published_course()
        enrollment, _ = await enrollment_service.enroll(course["id"], patient_id, staff_id)
        await enrollment_service.cancel(enrollment["id"])

        with pytest.raises(InvalidEnrollmentTransitionError):
            await enrollment_service.cancel(enrollment["id"])

    async def test_change_status_in_other_course_should_raise_not_found(
        self, enrollment_service, make_published_course, patient_id, staff_id
    ) -> None:
        course = await make_published_course()
        other = await make_published_course()
        enrollment, _ = await enrollment_service.enroll(course["id"], patient_id, staff_id)

        with pytest.raises(EnrollmentNotFoundError):
            await enrollment_service.change_status(
                other["id"], enrollment["id"], EnrollmentStatus.CANCELLED, staff_id
            )

    async def test_change_status_to_completed_should_be_rejected(
        self, enrollment_service, make_published_course, patient_id, staff_id
    ) -> None:
        course = await make_published_course()
        enrollment, _ = await enrollment_service.enroll(course["id"], patient_id, staff_id)

        with pytest.raises(InvalidEnrollmentTransitionError):
            await enrollment_service.change_status(
                course["id"], enrollment["id"], EnrollmentStatus.COMPLETED, staff_id
            )

    async def test_change_status_cancel_then_activate_should_round_trip(
        self, enrollment_service, make_published_course, patient_id, staff_id
    ) -> None:
        course = await make_published_course()
        enrollment, _ = await enrollment_service.enroll(course["id"], patient_id, staff_id)

        cancelled = await enrollment_service.change_status(
            course["id"], enrollment["id"], EnrollmentStatus.CANCELLED, staff_id
        )
        active = await enrollment_service.change_status(
            course["id"], enrollment["id"], EnrollmentStatus.ACTIVE, staff_id
        )

        assert cancelled["status"] == EnrollmentStatus.CANCELLED
        assert active["status"] == EnrollmentStatus.ACTIVE
        assert active["id"] == enrollment["id"]


class TestListCourseEnrollments:
    """Test suite for list_course_enrollments()."""

    async def test_list_should_report_progress_per_generation(
        self, test_async_db, enrollment_service, make_published_course, staff_id
    ) -> None:
        # Arrange
        course = await make_published_course(lesson_count=2)
        early_patient, late_patient = uuid.uuid4(), uuid.uuid4()
        early, _ = await enrollment_service.enroll(course["id"], early_patient, staff_id)
        lesson = (await lesson_snapshot_crud.get_generation(test_async_db, course["id"], 1))[0]
        await ProgressService(test_async_db).complete_lesson(
            early["id"], lesson.lesson_id, early_patient
        )
        await CourseService(test_async_db).save_lessons(
            course["id"], [{"title": f"V2 {i}"} for i in range(4)]
        )
        await PublishService(test_async_db).publish(course["id"])
        late, _ = await enrollment_service.enroll(course["id"], late_patient, staff_id)

        # Act
        items = await enrollment_service.list_course_enrollments(course["id"])

        # Assert
        by_id = {item["id"]: item for item in items}
        assert by_id[early["id"]]["total_lessons"] == 2
        assert by_id[early["id"]]["completed_lessons"] == 1
        assert by_id[early["id"]]["progress_percent"] == 50
        assert by_id[late["id"]]["total_lessons"] == 4
        assert by_id[late["id"]]["completed_lessons"] == 0

    async def test_list_for_missing_course_should_raise(self, enrollment_service) -> None:
        with pytest.raises(CourseNotFoundError):
            await enrollment_service.list_course_enrollments(uuid.uuid4())
