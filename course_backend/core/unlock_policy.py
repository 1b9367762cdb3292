"""
Lesson unlock policy.

Read-path computation of per-lesson completion and unlock state for one
enrollment generation. No I/O; callers pass the generation's lessons and the
enrollment's completion timestamps.

Dependencies: None (pure domain layer)
System role: Progressive unlock rules shared by read and write paths
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Protocol, Sequence, TypeVar
from uuid import UUID


class OrderedLesson(Protocol):
    """Anything with a lesson id and an ordinal position."""

    lesson_id: UUID
    order: int


LessonT = TypeVar("LessonT", bound=OrderedLesson)


@dataclass(frozen=True)
class LessonState:
    """Unlock state of one lesson for one enrollment."""

    lesson_id: UUID
    order: int
    is_completed: bool
    is_unlocked: bool
    completed_at: datetime | None


def sort_lessons(lessons: Sequence[LessonT]) -> list[LessonT]:
    """Return lessons in ordinal order."""
    return sorted(lessons, key=lambda lesson: lesson.order)


def preceding_lesson(lessons: Sequence[LessonT], lesson_id: UUID) -> LessonT | None:
    """
    Find the lesson immediately before lesson_id by ordinal position.

    Args:
        lessons: Lessons of a single generation
        lesson_id: Lesson whose predecessor is wanted

    Returns:
        The preceding lesson, or None for the first lesson

    Raises:
        KeyError: If lesson_id is not part of lessons
    """
    ordered = sort_lessons(lessons)
    for index, lesson in enumerate(ordered):
        if lesson.lesson_id == lesson_id:
            return ordered[index - 1] if index > 0 else None
    raise KeyError(lesson_id)


def compute_lesson_states(
    lessons: Sequence[OrderedLesson],
    completed_at: Mapping[UUID, datetime],
    sequential: bool,
) -> list[LessonState]:
    """
    Compute completion and unlock flags for every lesson of a generation.

    A lesson is unlocked when the course unlocks everything at once, when it
    is the first lesson, or when the lesson right before it is completed.

    Args:
        lessons: Lessons of the enrollment's generation (any order)
        completed_at: Completion timestamp per completed lesson id
        sequential: True when the course uses sequential unlocking

    Returns:
        list[LessonState]: One entry per lesson, in ordinal order
    """
    states: list[LessonState] = []
    previous_completed = True
    for index, lesson in enumerate(sort_lessons(lessons)):
        is_completed = lesson.lesson_id in completed_at
        is_unlocked = (not sequential) or index == 0 or previous_completed
        states.append(
            LessonState(
                lesson_id=lesson.lesson_id,
                order=lesson.order,
                is_completed=is_completed,
                is_unlocked=is_unlocked,
                completed_at=completed_at.get(lesson.lesson_id),
            )
        )
        previous_completed = is_completed
    return states


def progress_percent(completed: int, total: int) -> int:
    """Whole-number completion percentage, rounded half up; 0 for empty."""
    if total <= 0:
        return 0
    return (completed * 200 + total) // (total * 2)
