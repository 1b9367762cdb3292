"""
Lesson content value type.

Draft lessons and lesson snapshots embed the same content shape. Snapshots
add an immutable (version, lesson_id, order) key; the content itself is a
plain value copied between the two row kinds.

Dependencies: None (pure domain layer)
System role: Shared lesson payload between authoring and served state
"""

import copy
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class LessonContent:
    """
    Content of a single lesson.

    Attributes:
        title: Lesson title
        description: Optional long-form text
        video_url: Optional video reference
        exercise_unit: Exercise references copied by value from the catalog,
            each {exercise_id, exercise_name, exercise_media_url, params}
    """

    title: str
    description: str | None = None
    video_url: str | None = None
    exercise_unit: list[dict[str, Any]] | None = None

    def as_columns(self) -> dict[str, Any]:
        """Column values for either lesson row kind (deep-copied exercises)."""
        return {
            "title": self.title,
            "description": self.description,
            "video_url": self.video_url,
            "exercise_unit": copy.deepcopy(self.exercise_unit),
        }

    @classmethod
    def normalized(
        cls,
        title: str,
        description: str | None = None,
        video_url: str | None = None,
        exercise_unit: list[dict[str, Any]] | None = None,
    ) -> "LessonContent":
        """
        Build content from raw authoring input.

        Strings are trimmed, blank optional strings become None and an empty
        exercise list becomes None. Exercise ids are stored as strings.

        Raises:
            ValueError: If the title is blank
        """
        clean_title = (title or "").strip()
        if not clean_title:
            raise ValueError("Lesson title cannot be empty")
        exercises = None
        if exercise_unit:
            exercises = []
            for exercise in exercise_unit:
                item = copy.deepcopy(dict(exercise))
                if item.get("exercise_id") is not None:
                    item["exercise_id"] = str(item["exercise_id"])
                exercises.append(item)
        return cls(
            title=clean_title,
            description=_blank_to_none(description),
            video_url=_blank_to_none(video_url),
            exercise_unit=exercises,
        )


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None
