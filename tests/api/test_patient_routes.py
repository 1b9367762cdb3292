"""
Test suite for patient-facing endpoints: invite links and my courses.

System role: Verification of the self-enrollment and progress HTTP API
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from course_backend.api.deps.dependencies import get_invite_service, get_progress_service
from course_backend.boundary.db.models.course_model import CourseCategory, UnlockMode
from course_backend.core.exceptions import (
    CourseGoneError,
    EnrollmentNotActiveError,
    EnrollmentNotFoundError,
    InviteDisabledError,
    InviteTokenNotFoundError,
    LessonAlreadyCompletedError,
    LessonLockedError,
    ValidationError,
)


@pytest.fixture
def mock_invite_service(client):
    service = AsyncMock()
    client.app.dependency_overrides[get_invite_service] = lambda: service
    return service


@pytest.fixture
def mock_progress_service(client):
    service = AsyncMock()
    client.app.dependency_overrides[get_progress_service] = lambda: service
    return service


def _course_summary() -> dict:
    return {
        "id": uuid.uuid4(),
        "name": "Hip strength",
        "description": None,
        "cover_image_url": None,
        "category": CourseCategory.HIP,
        "duration_weeks": 6,
        "unlock_mode": UnlockMode.SEQUENTIAL,
    }


class TestInviteRoutes:
    """GET/POST /courses/enroll/{token}."""

    def test_preview_should_return_course_summary(
        self, client, mock_invite_service, patient_headers, patient_profile_id
    ) -> None:
        # Arrange
        summary = _course_summary()
        mock_invite_service.get_invite_preview.return_value = {
            "course_id": summary.pop("id"),
            **summary,
            "lesson_count": 5,
            "is_enrolled": False,
        }

        # Act
        response = client.get("/api/v1/courses/enroll/Abc123def456", headers=patient_headers)

        # Assert
        assert response.status_code == 200
        assert response.json()["lesson_count"] == 5
        mock_invite_service.get_invite_preview.assert_called_once_with(
            "Abc123def456", patient_profile_id
        )

    def test_staff_without_patient_profile_should_return_404(
        self, client, mock_invite_service, staff_headers
    ) -> None:
        response = client.get("/api/v1/courses/enroll/Abc123def456", headers=staff_headers)

        assert response.status_code == 404
        mock_invite_service.get_invite_preview.assert_not_called()

    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (ValidationError("Malformed invite token", field="token"), 400),
            (InviteTokenNotFoundError(), 404),
            (InviteDisabledError(uuid.uuid4()), 410),
            (CourseGoneError(uuid.uuid4()), 410),
        ],
    )
    def test_self_enroll_errors_should_map_to_status(
        self, client, mock_invite_service, patient_headers, error, expected
    ) -> None:
        mock_invite_service.resolve_for_self_enroll.side_effect = error

        response = client.post("/api/v1/courses/enroll/Abc123def456", headers=patient_headers)

        assert response.status_code == expected

    def test_self_enroll_should_return_201_for_new_enrollment(
        self, client, mock_invite_service, patient_headers, patient_profile_id, enrollment_data
    ) -> None:
        mock_invite_service.resolve_for_self_enroll.return_value = (
            enrollment_data(patient_id=patient_profile_id),
            True,
        )

        response = client.post("/api/v1/courses/enroll/Abc123def456", headers=patient_headers)

        assert response.status_code == 201
        token, patient, _actor = mock_invite_service.resolve_for_self_enroll.call_args.args
        assert token == "Abc123def456"
        assert patient == patient_profile_id

    def test_self_reenroll_should_return_200(
        self, client, mock_invite_service, patient_headers, enrollment_data
    ) -> None:
        mock_invite_service.resolve_for_self_enroll.return_value = (enrollment_data(), False)

        response = client.post("/api/v1/courses/enroll/Abc123def456", headers=patient_headers)

        assert response.status_code == 200


class TestMyCoursesRoutes:
    """GET/POST under /me/courses."""

    def test_list_my_courses_should_return_progress(
        self, client, mock_progress_service, patient_headers, patient_profile_id, enrollment_data
    ) -> None:
        item = enrollment_data(patient_id=patient_profile_id)
        item.update(
            course=_course_summary(), completed_count=2, total_count=4, progress_percent=50
        )
        mock_progress_service.list_my_enrollments.return_value = [item]

        response = client.get("/api/v1/me/courses", headers=patient_headers)

        assert response.status_code == 200
        assert response.json()[0]["course"]["name"] == "Hip strength"
        mock_progress_service.list_my_enrollments.assert_called_once_with(patient_profile_id)

    def test_detail_should_return_lessons_with_unlock_state(
        self, client, mock_progress_service, patient_headers, enrollment_data
    ) -> None:
        # Arrange
        detail = enrollment_data()
        detail.update(
            course=_course_summary(),
            completed_count=1,
            total_count=2,
            progress_percent=50,
            lessons=[
                {
                    "snapshot_id": uuid.uuid4(),
                    "lesson_id": uuid.uuid4(),
                    "order": position,
                    "title": f"Lesson {position + 1}",
                    "description": None,
                    "video_url": None,
                    "exercise_unit": None,
                    "is_completed": position == 0,
                    "is_unlocked": True,
                    "completed_at": datetime.now(timezone.utc) if position == 0 else None,
                }
                for position in range(2)
            ],
        )
        mock_progress_service.get_enrollment_detail.return_value = detail

        # Act
        response = client.get(f"/api/v1/me/courses/{detail['id']}", headers=patient_headers)

        # Assert
        assert response.status_code == 200
        lessons = response.json()["lessons"]
        assert [lesson["is_completed"] for lesson in lessons] == [True, False]

    def test_detail_of_other_patient_should_return_404(
        self, client, mock_progress_service, patient_headers
    ) -> None:
        enrollment_id = uuid.uuid4()
        mock_progress_service.get_enrollment_detail.side_effect = EnrollmentNotFoundError(
            enrollment_id
        )

        response = client.get(f"/api/v1/me/courses/{enrollment_id}", headers=patient_headers)

        assert response.status_code == 404

    def test_complete_lesson_should_return_201(
        self, client, mock_progress_service, patient_headers, patient_profile_id
    ) -> None:
        # Arrange
        enrollment_id, lesson_id = uuid.uuid4(), uuid.uuid4()
        mock_progress_service.complete_lesson.return_value = {
            "id": uuid.uuid4(),
            "enrollment_id": enrollment_id,
            "lesson_id": lesson_id,
            "completed_at": datetime.now(timezone.utc),
            "is_course_completed": True,
        }

        # Act
        response = client.post(
            f"/api/v1/me/courses/{enrollment_id}/complete",
            json={"lesson_id": str(lesson_id)},
            headers=patient_headers,
        )

        # Assert
        assert response.status_code == 201
        assert response.json()["is_course_completed"] is True
        mock_progress_service.complete_lesson.assert_called_once_with(
            enrollment_id, lesson_id, patient_profile_id
        )

    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (LessonAlreadyCompletedError(uuid.uuid4(), uuid.uuid4()), 409),
            (EnrollmentNotActiveError(uuid.uuid4(), "cancelled"), 409),
            (LessonLockedError(uuid.uuid4(), uuid.uuid4()), 422),
        ],
    )
    def test_complete_lesson_errors_should_map_to_status(
        self, client, mock_progress_service, patient_headers, error, expected
    ) -> None:
        mock_progress_service.complete_lesson.side_effect = error

        response = client.post(
            f"/api/v1/me/courses/{uuid.uuid4()}/complete",
            json={"lesson_id": str(uuid.uuid4())},
            headers=patient_headers,
        )

        assert response.status_code == expected
