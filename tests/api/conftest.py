"""
API test fixtures.

Provides: TestClient over a fresh application, identity headers for staff
and patients, and service return-value builders.
Dependencies: fastapi, pytest
System role: HTTP layer test infrastructure
"""

import uuid
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from course_backend.api.main import create_app
from course_backend.boundary.db.models.course_model import (
    CourseCategory,
    CourseStatus,
    UnlockMode,
)
from course_backend.boundary.db.models.enrollment_model import EnrollmentStatus


@pytest.fixture
def client():
    """TestClient whose dependency overrides are dropped after the test."""
    app = create_app()
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def staff_user_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def staff_headers(staff_user_id) -> dict[str, str]:
    """Gateway headers of a physiotherapist."""
    return {"X-Actor-Id": str(staff_user_id), "X-Actor-Role": "physiotherapist"}


@pytest.fixture
def patient_profile_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def patient_headers(patient_profile_id) -> dict[str, str]:
    """Gateway headers of a patient."""
    return {
        "X-Actor-Id": str(uuid.uuid4()),
        "X-Actor-Role": "patient",
        "X-Patient-Id": str(patient_profile_id),
    }


@pytest.fixture
def course_data():
    """Builder for course dictionaries as CourseService returns them."""

    def _build(**overrides) -> dict:
        now = datetime.now(timezone.utc)
        data = {
            "id": uuid.uuid4(),
            "created_by": uuid.uuid4(),
            "name": "Shoulder mobility",
            "description": None,
            "cover_image_url": None,
            "duration_weeks": 8,
            "category": CourseCategory.OTHER,
            "unlock_mode": UnlockMode.SEQUENTIAL,
            "status": CourseStatus.DRAFT,
            "version": 0,
            "invite_enabled": False,
            "is_archived": False,
            "created_at": now,
            "updated_at": now,
        }
        data.update(overrides)
        return data

    return _build


@pytest.fixture
def enrollment_data():
    """Builder for enrollment dictionaries as EnrollmentService returns them."""

    def _build(**overrides) -> dict:
        data = {
            "id": uuid.uuid4(),
            "course_id": uuid.uuid4(),
            "patient_id": uuid.uuid4(),
            "enrolled_by": uuid.uuid4(),
            "enrolled_version": 1,
            "status": EnrollmentStatus.ACTIVE,
            "enrolled_at": datetime.now(timezone.utc),
            "completed_at": None,
            "cancelled_at": None,
        }
        data.update(overrides)
        return data

    return _build
