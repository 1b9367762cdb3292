"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory async database, course settings, and builders for
courses, published courses and enrollments.
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from course_backend.boundary.db.base import Base
from course_backend.boundary.db.models.course_model import UnlockMode
from course_backend.configs.courses import CourseSettings


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def course_settings() -> CourseSettings:
    """Course settings with a fixed join URL."""
    return CourseSettings(join_base_url="https://app.example.test/courses/join")


@pytest.fixture
def staff_id() -> uuid.UUID:
    """Id of the therapist acting in a test."""
    return uuid.uuid4()


@pytest.fixture
def patient_id() -> uuid.UUID:
    """Id of the patient acting in a test."""
    return uuid.uuid4()


def lesson_payload(title: str, **fields) -> dict:
    """Draft lesson input as the router hands it to the service."""
    return {"id": None, "title": title, **fields}


@pytest.fixture
def make_course(test_async_db, course_settings, staff_id):
    """
    Builder for draft courses with optional draft lessons.

    Returns:
        Callable: async (lesson_count=0, unlock_mode=SEQUENTIAL, **fields) -> course dict
    """
    from course_backend.application.services.course_service import CourseService

    async def _make(
        lesson_count: int = 0,
        unlock_mode: UnlockMode = UnlockMode.SEQUENTIAL,
        **fields,
    ) -> dict:
        service = CourseService(test_async_db, settings=course_settings)
        course = await service.create_course(
            created_by=staff_id,
            name=fields.pop("name", "Lower back basics"),
            unlock_mode=unlock_mode,
            **fields,
        )
        if lesson_count:
            await service.save_lessons(
                course["id"],
                [lesson_payload(f"Lesson {i + 1}") for i in range(lesson_count)],
            )
        return course

    return _make


@pytest.fixture
def make_published_course(test_async_db, make_course):
    """
    Builder for courses published once.

    Returns:
        Callable: async (lesson_count=3, unlock_mode=SEQUENTIAL, **fields) -> course dict
    """
    from course_backend.application.services.publish_service import PublishService

    async def _make(
        lesson_count: int = 3,
        unlock_mode: UnlockMode = UnlockMode.SEQUENTIAL,
        **fields,
    ) -> dict:
        course = await make_course(lesson_count=lesson_count, unlock_mode=unlock_mode, **fields)
        published = await PublishService(test_async_db).publish(course["id"])
        course["version"] = published["version"]
        return course

    return _make


@pytest.fixture
def enroll_patient(test_async_db, staff_id):
    """
    Builder for active enrollments.

    Returns:
        Callable: async (course_id, patient_id) -> enrollment dict
    """
    from course_backend.application.services.enrollment_service import EnrollmentService

    async def _enroll(course_id: uuid.UUID, patient: uuid.UUID) -> dict:
        enrollment, _ = await EnrollmentService(test_async_db).enroll(
            course_id, patient, staff_id
        )
        return enrollment

    return _enroll
