"""
Test suite for BaseCRUD generic database operations.

Tests create, read, locking read, update, delete and exists against an
in-memory SQLite database using the courses table.

System role: Verification of generic database layer foundation
"""

import uuid

import pytest

from course_backend.boundary.db.CRUD.base_crud import BaseCRUD
from course_backend.boundary.db.models.course_model import CourseModel, CourseStatus


@pytest.fixture
def base_crud() -> BaseCRUD:
    """Provide BaseCRUD instance for testing."""
    return BaseCRUD(CourseModel)


@pytest.fixture
def sample_id() -> uuid.UUID:
    """Provide sample UUID for testing."""
    return uuid.uuid4()


class TestBaseCRUDCreate:
    """Test suite for BaseCRUD.create() method."""

    async def test_create_should_apply_column_defaults(
        self, base_crud: BaseCRUD, test_async_db, sample_id
    ) -> None:
        """Test create flushes and returns a row with generated id and defaults."""
        # Act
        course = await base_crud.create(test_async_db, created_by=sample_id, name="Back care")

        # Assert
        assert course.id is not None
        assert course.created_by == sample_id
        assert course.status == CourseStatus.DRAFT
        assert course.version == 0
        assert course.invite_enabled is False
        assert course.created_at is not None


class TestBaseCRUDRead:
    """Test suite for get_by_id(), get_for_update() and exists()."""

    async def test_get_by_id_should_return_created_row(
        self, base_crud: BaseCRUD, test_async_db, sample_id
    ) -> None:
        course = await base_crud.create(test_async_db, created_by=sample_id, name="Back care")

        found = await base_crud.get_by_id(test_async_db, course.id)

        assert found is course

    async def test_get_by_id_should_return_none_for_unknown_id(
        self, base_crud: BaseCRUD, test_async_db
    ) -> None:
        assert await base_crud.get_by_id(test_async_db, uuid.uuid4()) is None

    async def test_get_for_update_should_reload_stale_attributes(
        self, base_crud: BaseCRUD, test_async_db, sample_id
    ) -> None:
        """Test locking read overwrites in-memory state with the stored row."""
        # Arrange
        course = await base_crud.create(test_async_db, created_by=sample_id, name="Stored")
        await test_async_db.commit()
        course.name = "Unflushed"

        # Act
        locked = await base_crud.get_for_update(test_async_db, course.id, shared=True)

        # Assert
        assert locked is course
        assert locked.name == "Stored"

    async def test_exists_should_reflect_presence(
        self, base_crud: BaseCRUD, test_async_db, sample_id
    ) -> None:
        course = await base_crud.create(test_async_db, created_by=sample_id, name="Back care")

        assert await base_crud.exists(test_async_db, course.id) is True
        assert await base_crud.exists(test_async_db, uuid.uuid4()) is False


class TestBaseCRUDWrite:
    """Test suite for update_by_id() and delete_by_id()."""

    async def test_update_by_id_should_return_updated_row(
        self, base_crud: BaseCRUD, test_async_db, sample_id
    ) -> None:
        course = await base_crud.create(test_async_db, created_by=sample_id, name="Old")

        updated = await base_crud.update_by_id(test_async_db, course.id, name="New")

        assert updated is not None
        assert updated.name == "New"

    async def test_update_by_id_should_return_none_for_unknown_id(
        self, base_crud: BaseCRUD, test_async_db
    ) -> None:
        assert await base_crud.update_by_id(test_async_db, uuid.uuid4(), name="New") is None

    async def test_delete_by_id_should_report_outcome(
        self, base_crud: BaseCRUD, test_async_db, sample_id
    ) -> None:
        course = await base_crud.create(test_async_db, created_by=sample_id, name="Gone")

        assert await base_crud.delete_by_id(test_async_db, course.id) is True
        assert await base_crud.delete_by_id(test_async_db, course.id) is False
