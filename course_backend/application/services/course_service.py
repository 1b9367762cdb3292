"""
Course service orchestrator.

Coordinates course authoring: metadata, the draft lesson set, listing and
archiving. Draft edits never touch published snapshots.

Dependencies: course_backend.boundary.db, course_backend.configs
System role: Course authoring use case orchestration
"""

import logging
import math
from typing import Any, Mapping, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from course_backend.boundary.db.CRUD.course_crud import course_crud
from course_backend.boundary.db.CRUD.lesson_crud import draft_lesson_crud
from course_backend.boundary.db.models.course_model import (
    CourseCategory,
    CourseModel,
    CourseStatus,
    UnlockMode,
)
from course_backend.boundary.db.models.lesson_model import DraftLessonModel
from course_backend.boundary.db.transaction import atomic
from course_backend.configs import get_settings
from course_backend.configs.courses import CourseSettings
from course_backend.core.exceptions import (
    CourseArchivedError,
    CourseNotFoundError,
    TooManyLessonsError,
    ValidationError,
)
from course_backend.core.lesson_content import LessonContent

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset(
    {"name", "description", "cover_image_url", "duration_weeks", "category", "unlock_mode"}
)


def course_to_dict(course: CourseModel) -> dict[str, Any]:
    """Plain representation of a course row."""
    return {
        "id": course.id,
        "created_by": course.created_by,
        "name": course.name,
        "description": course.description,
        "cover_image_url": course.cover_image_url,
        "duration_weeks": course.duration_weeks,
        "category": course.category,
        "unlock_mode": course.unlock_mode,
        "status": course.status,
        "version": course.version,
        "invite_enabled": course.invite_enabled,
        "is_archived": course.is_archived,
        "created_at": course.created_at,
        "updated_at": course.updated_at,
    }


def lesson_to_dict(lesson: DraftLessonModel) -> dict[str, Any]:
    """Plain representation of a draft lesson row."""
    return {
        "id": lesson.id,
        "order": lesson.order,
        "title": lesson.title,
        "description": lesson.description,
        "video_url": lesson.video_url,
        "exercise_unit": lesson.exercise_unit,
    }


def _clean_name(name: str | None) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Course name cannot be empty", field="name")
    return cleaned


class CourseService:
    """Course authoring orchestrator."""

    def __init__(self, db: AsyncSession, settings: CourseSettings | None = None) -> None:
        """
        Initialize course service with async database session.

        Args:
            db: Async SQLAlchemy session
            settings: Course settings (defaults to application settings)
        """
        self.db = db
        self.settings = settings or get_settings().courses

    async def create_course(
        self,
        created_by: UUID,
        name: str,
        description: str | None = None,
        cover_image_url: str | None = None,
        duration_weeks: int = 8,
        category: CourseCategory = CourseCategory.OTHER,
        unlock_mode: UnlockMode = UnlockMode.SEQUENTIAL,
    ) -> dict[str, Any]:
        """
        Create a new draft course at version 0.

        Args:
            created_by: Staff user creating the course
            name: Course name
            description: Optional description
            cover_image_url: Optional cover image reference
            duration_weeks: Planned length in weeks
            category: Body region classification
            unlock_mode: Lesson access policy

        Returns:
            dict: Course data

        Raises:
            ValidationError: If the name is blank
        """
        name = _clean_name(name)

        async with atomic(self.db):
            course = await course_crud.create(
                self.db,
                created_by=created_by,
                name=name,
                description=description,
                cover_image_url=cover_image_url,
                duration_weeks=duration_weeks,
                category=category,
                unlock_mode=unlock_mode,
                status=CourseStatus.DRAFT,
                version=0,
            )

        logger.info(
            "Course created",
            extra={"course_id": str(course.id), "created_by": str(created_by)},
        )
        return course_to_dict(course)

    async def list_courses(
        self,
        status: CourseStatus | None = None,
        category: CourseCategory | None = None,
        search: str | None = None,
        page: int = 1,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        """
        List non-archived courses, newest first, with per-course counts.

        Args:
            status: Optional status filter
            category: Optional category filter
            search: Optional case-insensitive name substring
            page: 1-based page number
            page_size: Page size, clamped to the configured maximum

        Returns:
            dict: items, total_count, page, page_size, total_pages
        """
        page = max(1, page)
        size = page_size if page_size is not None else self.settings.default_page_size
        size = max(1, min(size, self.settings.max_page_size))
        search = search.strip() if search else None

        courses, total = await course_crud.list_courses(
            self.db,
            status=status,
            category=category,
            search=search or None,
            limit=size,
            offset=(page - 1) * size,
        )
        course_ids = [course.id for course in courses]
        lesson_counts = await course_crud.count_lessons(self.db, course_ids)
        enrollment_counts = await course_crud.count_active_enrollments(self.db, course_ids)

        items = []
        for course in courses:
            data = course_to_dict(course)
            data["lesson_count"] = lesson_counts.get(course.id, 0)
            data["enrollment_count"] = enrollment_counts.get(course.id, 0)
            items.append(data)

        return {
            "items": items,
            "total_count": total,
            "page": page,
            "page_size": size,
            "total_pages": math.ceil(total / size) if total else 0,
        }

    async def get_course(self, course_id: UUID) -> dict[str, Any]:
        """
        Get a course with its ordered draft lessons.

        Args:
            course_id: Course UUID

        Returns:
            dict: Course data plus lessons, lesson_count, enrollment_count

        Raises:
            CourseNotFoundError: If missing or archived
        """
        course = await course_crud.get_by_id(self.db, course_id)
        if course is None or course.is_archived:
            raise CourseNotFoundError(course_id)

        lessons = await draft_lesson_crud.get_for_course(self.db, course_id)
        enrollment_counts = await course_crud.count_active_enrollments(self.db, [course_id])

        data = course_to_dict(course)
        data["lessons"] = [lesson_to_dict(lesson) for lesson in lessons]
        data["lesson_count"] = len(lessons)
        data["enrollment_count"] = enrollment_counts.get(course_id, 0)
        return data

    async def update_course(self, course_id: UUID, **fields: Any) -> dict[str, Any]:
        """
        Update course metadata.

        Only name, description, cover_image_url, duration_weeks, category and
        unlock_mode may change; None values are ignored.

        Args:
            course_id: Course UUID
            **fields: Fields to update

        Returns:
            dict: Updated course data

        Raises:
            ValidationError: If no updatable field is given or the name is blank
            CourseNotFoundError: If the course does not exist
            CourseArchivedError: If the course is archived
        """
        changes = {
            key: value
            for key, value in fields.items()
            if key in UPDATABLE_FIELDS and value is not None
        }
        if not changes:
            raise ValidationError("At least one field must be provided for update")
        if "name" in changes:
            changes["name"] = _clean_name(changes["name"])

        async with atomic(self.db):
            course = await course_crud.get_for_update(self.db, course_id)
            if course is None:
                raise CourseNotFoundError(course_id)
            if course.is_archived:
                raise CourseArchivedError(course_id)
            for key, value in changes.items():
                setattr(course, key, value)
            await self.db.flush()

        logger.info(
            "Course updated",
            extra={"course_id": str(course_id), "fields": sorted(changes)},
        )
        return course_to_dict(course)

    async def save_lessons(
        self,
        course_id: UUID,
        lessons: Sequence[Mapping[str, Any]],
    ) -> list[dict[str, Any]]:
        """
        Replace the draft lesson set with an ordered list.

        List position becomes the lesson order. A lesson whose id already
        belongs to this course keeps that id; any other lesson gets a new id.
        Drafts missing from the list are removed. Published snapshots are not
        touched.

        Args:
            course_id: Course UUID
            lessons: Ordered lesson payloads (id, title, description,
                video_url, exercise_unit)

        Returns:
            list[dict]: Saved draft lessons in order

        Raises:
            ValidationError: If a lesson is malformed or an id repeats
            TooManyLessonsError: If the list exceeds the configured limit
            CourseNotFoundError: If the course does not exist
            CourseArchivedError: If the course is archived
        """
        limit = self.settings.max_lessons_per_course
        if len(lessons) > limit:
            raise TooManyLessonsError(len(lessons), limit)

        requested: list[tuple[UUID | None, LessonContent]] = []
        seen_ids: set[UUID] = set()
        for position, raw in enumerate(lessons):
            lesson_id = raw.get("id")
            if lesson_id is not None:
                lesson_id = UUID(str(lesson_id))
                if lesson_id in seen_ids:
                    raise ValidationError(
                        "Lesson ids must be unique", field=f"lessons[{position}].id"
                    )
                seen_ids.add(lesson_id)
            try:
                content = LessonContent.normalized(
                    title=raw.get("title"),
                    description=raw.get("description"),
                    video_url=raw.get("video_url"),
                    exercise_unit=raw.get("exercise_unit"),
                )
            except ValueError as e:
                raise ValidationError(str(e), field=f"lessons[{position}].title") from e
            requested.append((lesson_id, content))

        async with atomic(self.db):
            course = await course_crud.get_for_update(self.db, course_id)
            if course is None:
                raise CourseNotFoundError(course_id)
            if course.is_archived:
                raise CourseArchivedError(course_id)

            existing = {
                draft.id: draft
                for draft in await draft_lesson_crud.get_for_course(self.db, course_id)
            }
            kept = [lesson_id for lesson_id, _ in requested if lesson_id in existing]

            for draft_id in existing.keys() - set(kept):
                await draft_lesson_crud.delete_by_id(self.db, draft_id)

            # Park kept rows on negative positions so (course_id, order) never collides.
            for index, draft_id in enumerate(kept):
                existing[draft_id].order = -(index + 1)
            await self.db.flush()

            saved: list[DraftLessonModel] = []
            for position, (lesson_id, content) in enumerate(requested):
                if lesson_id in existing:
                    draft = existing[lesson_id]
                    draft.order = position
                    draft.apply_content(content)
                else:
                    draft = DraftLessonModel(
                        course_id=course_id,
                        order=position,
                        **content.as_columns(),
                    )
                    self.db.add(draft)
                saved.append(draft)
            await self.db.flush()
            result = [lesson_to_dict(draft) for draft in saved]

        logger.info(
            "Draft lessons saved",
            extra={
                "course_id": str(course_id),
                "lesson_count": len(result),
                "removed": len(existing) - len(kept),
            },
        )
        return result

    async def archive(self, course_id: UUID) -> dict[str, Any]:
        """
        Archive a course. Snapshots and enrollments are left untouched.

        Args:
            course_id: Course UUID

        Returns:
            dict: Archived course data

        Raises:
            CourseNotFoundError: If missing or already archived
        """
        async with atomic(self.db):
            course = await course_crud.get_for_update(self.db, course_id)
            if course is None or course.is_archived:
                raise CourseNotFoundError(course_id)
            course.is_archived = True
            course.status = CourseStatus.ARCHIVED
            await self.db.flush()

        logger.info("Course archived", extra={"course_id": str(course_id)})
        return course_to_dict(course)
