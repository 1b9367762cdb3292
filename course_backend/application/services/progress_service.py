"""
Progress service orchestrator.

Records lesson completions for a patient's enrollment, applies the unlock
policy, auto-completes enrollments and serves the patient's progress views.

Dependencies: course_backend.boundary.db, course_backend.core.unlock_policy, sqlalchemy
System role: ProgressTracker use cases
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from course_backend.application.services.enrollment_service import enrollment_to_dict
from course_backend.boundary.db.CRUD.completion_crud import lesson_completion_crud
from course_backend.boundary.db.CRUD.course_crud import course_crud
from course_backend.boundary.db.CRUD.enrollment_crud import enrollment_crud
from course_backend.boundary.db.CRUD.snapshot_crud import lesson_snapshot_crud
from course_backend.boundary.db.models.course_model import CourseModel
from course_backend.boundary.db.models.enrollment_model import EnrollmentStatus
from course_backend.boundary.db.transaction import atomic
from course_backend.core.exceptions import (
    EnrollmentNotActiveError,
    EnrollmentNotFoundError,
    LessonAlreadyCompletedError,
    LessonLockedError,
    LessonNotFoundError,
)
from course_backend.core.unlock_policy import (
    compute_lesson_states,
    preceding_lesson,
    progress_percent,
)

logger = logging.getLogger(__name__)

VISIBLE_STATUSES = (EnrollmentStatus.ACTIVE, EnrollmentStatus.COMPLETED)


def _course_summary(course: CourseModel) -> dict[str, Any]:
    return {
        "id": course.id,
        "name": course.name,
        "description": course.description,
        "cover_image_url": course.cover_image_url,
        "category": course.category,
        "duration_weeks": course.duration_weeks,
        "unlock_mode": course.unlock_mode,
    }


class ProgressService:
    """Progress tracking orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize progress service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def complete_lesson(
        self,
        enrollment_id: UUID,
        lesson_id: UUID,
        patient_id: UUID,
    ) -> dict[str, Any]:
        """
        Record that the caller completed a lesson of their enrollment.

        The enrollment row stays locked FOR UPDATE for the whole operation.
        When the insert makes every lesson of the generation complete, the
        enrollment moves to COMPLETED in the same transaction.

        Args:
            enrollment_id: Enrollment UUID
            lesson_id: Lesson id within the enrollment's generation
            patient_id: Caller's patient id

        Returns:
            dict: id, enrollment_id, lesson_id, completed_at, is_course_completed

        Raises:
            EnrollmentNotFoundError: If missing or not the caller's
            EnrollmentNotActiveError: If the enrollment is not active
            LessonNotFoundError: If the lesson is not in the pinned generation
            LessonLockedError: If the previous lesson is not completed (sequential)
            LessonAlreadyCompletedError: If the lesson was already completed
        """
        try:
            async with atomic(self.db):
                enrollment = await enrollment_crud.get_for_patient(
                    self.db, enrollment_id, patient_id, for_update=True
                )
                if enrollment is None:
                    raise EnrollmentNotFoundError(enrollment_id)
                if enrollment.status != EnrollmentStatus.ACTIVE:
                    raise EnrollmentNotActiveError(enrollment_id, enrollment.status.value)

                course = await course_crud.get_by_id(self.db, enrollment.course_id)
                lessons = await lesson_snapshot_crud.get_generation(
                    self.db, enrollment.course_id, enrollment.enrolled_version
                )
                try:
                    previous = preceding_lesson(lessons, lesson_id)
                except KeyError:
                    raise LessonNotFoundError(lesson_id, enrollment.enrolled_version) from None

                if course.is_sequential and previous is not None:
                    done_before = await lesson_completion_crud.get_for_lesson(
                        self.db, enrollment_id, previous.lesson_id
                    )
                    if done_before is None:
                        raise LessonLockedError(lesson_id, previous.lesson_id)

                if await lesson_completion_crud.get_for_lesson(
                    self.db, enrollment_id, lesson_id
                ) is not None:
                    raise LessonAlreadyCompletedError(enrollment_id, lesson_id)

                completion = await lesson_completion_crud.create(
                    self.db,
                    enrollment_id=enrollment_id,
                    lesson_id=lesson_id,
                    patient_id=patient_id,
                )
                completed_count = await lesson_completion_crud.count_for_enrollment(
                    self.db, enrollment_id
                )
                is_course_completed = completed_count == len(lessons)
                if is_course_completed:
                    enrollment.complete(now=completion.completed_at)
                    await self.db.flush()

                result = {
                    "id": completion.id,
                    "enrollment_id": enrollment_id,
                    "lesson_id": lesson_id,
                    "completed_at": completion.completed_at,
                    "is_course_completed": is_course_completed,
                }
        except IntegrityError as e:
            raise LessonAlreadyCompletedError(enrollment_id, lesson_id) from e

        logger.info(
            "Lesson completed",
            extra={
                "enrollment_id": str(enrollment_id),
                "lesson_id": str(lesson_id),
                "completed_count": completed_count,
                "total_count": len(lessons),
            },
        )
        if is_course_completed:
            logger.info(
                "Enrollment auto-completed",
                extra={"enrollment_id": str(enrollment_id)},
            )
        return result

    async def get_enrollment_detail(
        self,
        enrollment_id: UUID,
        patient_id: UUID,
    ) -> dict[str, Any]:
        """
        Build the caller's view of one enrollment with per-lesson unlock state.

        Args:
            enrollment_id: Enrollment UUID
            patient_id: Caller's patient id

        Returns:
            dict: Enrollment data, course summary, ordered lessons with
            is_completed/is_unlocked/completed_at, completed_count,
            total_count and progress_percent

        Raises:
            EnrollmentNotFoundError: If missing or not the caller's
        """
        enrollment = await enrollment_crud.get_for_patient(self.db, enrollment_id, patient_id)
        if enrollment is None:
            raise EnrollmentNotFoundError(enrollment_id)

        course = await course_crud.get_by_id(self.db, enrollment.course_id)
        lessons = await lesson_snapshot_crud.get_generation(
            self.db, enrollment.course_id, enrollment.enrolled_version
        )
        completions = await lesson_completion_crud.list_for_enrollment(self.db, enrollment_id)
        completed_at = {c.lesson_id: c.completed_at for c in completions}

        states = compute_lesson_states(lessons, completed_at, course.is_sequential)
        by_lesson = {lesson.lesson_id: lesson for lesson in lessons}

        lesson_items = []
        for state in states:
            snapshot = by_lesson[state.lesson_id]
            lesson_items.append({
                "snapshot_id": snapshot.id,
                "lesson_id": snapshot.lesson_id,
                "order": snapshot.order,
                "title": snapshot.title,
                "description": snapshot.description,
                "video_url": snapshot.video_url,
                "exercise_unit": snapshot.exercise_unit,
                "is_completed": state.is_completed,
                "is_unlocked": state.is_unlocked,
                "completed_at": state.completed_at,
            })

        completed_count = sum(1 for state in states if state.is_completed)
        data = enrollment_to_dict(enrollment)
        data.update({
            "course": _course_summary(course),
            "lessons": lesson_items,
            "completed_count": completed_count,
            "total_count": len(states),
            "progress_percent": progress_percent(completed_count, len(states)),
        })
        return data

    async def list_my_enrollments(self, patient_id: UUID) -> list[dict[str, Any]]:
        """
        List the caller's active and completed enrollments, newest first.

        Args:
            patient_id: Caller's patient id

        Returns:
            list[dict]: Enrollment data, course summary and progress counts
        """
        rows = await enrollment_crud.list_for_patient(self.db, patient_id, VISIBLE_STATUSES)
        completed = await lesson_completion_crud.count_by_enrollments(
            self.db, [enrollment.id for enrollment, _ in rows]
        )
        totals = await lesson_snapshot_crud.count_generations(
            self.db, {(enrollment.course_id, enrollment.enrolled_version) for enrollment, _ in rows}
        )

        items = []
        for enrollment, course in rows:
            done = completed.get(enrollment.id, 0)
            total = totals.get((enrollment.course_id, enrollment.enrolled_version), 0)
            data = enrollment_to_dict(enrollment)
            data.update({
                "course": _course_summary(course),
                "completed_count": done,
                "total_count": total,
                "progress_percent": progress_percent(done, total),
            })
            items.append(data)
        return items
