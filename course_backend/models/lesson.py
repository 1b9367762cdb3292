"""
Lesson schemas.

Exercise references, draft lesson payloads and draft lesson responses.

Dependencies: pydantic
System role: Draft lesson API contracts
"""

import uuid

from pydantic import BaseModel, Field, field_validator


class ExerciseParams(BaseModel):
    """Prescription for one exercise within a lesson."""

    sets: int = Field(3, ge=1, le=20)
    reps: int | None = Field(None, ge=1, le=100)
    duration_seconds: int | None = Field(None, ge=1, le=3600)
    rest_seconds: int = Field(60, ge=0, le=600)
    note: str | None = Field(None, max_length=500)


class ExerciseReference(BaseModel):
    """Exercise copied by value from the exercise catalog."""

    exercise_id: uuid.UUID
    exercise_name: str = Field(..., min_length=1, max_length=200)
    exercise_media_url: str | None = Field(None, max_length=1000)
    params: ExerciseParams = Field(default_factory=ExerciseParams)


class LessonInput(BaseModel):
    """One lesson in a bulk draft replace; position in the list is its order."""

    id: uuid.UUID | None = Field(None, description="Existing draft lesson id to keep")
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=10000)
    video_url: str | None = Field(None, max_length=1000)
    exercise_unit: list[ExerciseReference] | None = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Lesson title cannot be empty or whitespace-only")
        return value.strip()


class SaveLessonsRequest(BaseModel):
    """Request schema for replacing a course's draft lessons."""

    lessons: list[LessonInput] = Field(default_factory=list)


class DraftLessonResponse(BaseModel):
    """Response schema for a draft lesson."""

    id: uuid.UUID
    order: int
    title: str
    description: str | None
    video_url: str | None
    exercise_unit: list[dict] | None
