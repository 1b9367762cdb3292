"""
Lesson content columns.

Column set shared by draft lessons and lesson snapshots, plus accessors
converting to and from the LessonContent value type.

Dependencies: sqlalchemy, course_backend.core.lesson_content
System role: One content shape embedded in two row kinds
"""

from typing import Any

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from course_backend.core.lesson_content import LessonContent


class LessonContentColumns:
    """
    Mixin embedding LessonContent fields in a lesson row.

    Attributes:
        title: Lesson title
        description: Optional long-form text
        video_url: Optional video reference
        exercise_unit: JSON list of exercise references copied by value
    """

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    video_url: Mapped[str | None] = mapped_column(String(1000), nullable=True, default=None)
    exercise_unit: Mapped[list[dict[str, Any]] | None] = mapped_column(
        JSON,
        nullable=True,
        default=None,
    )

    @property
    def content(self) -> LessonContent:
        """Current content as a value object."""
        return LessonContent(
            title=self.title,
            description=self.description,
            video_url=self.video_url,
            exercise_unit=self.exercise_unit,
        )
