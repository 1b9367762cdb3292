"""
Invite link schemas.

Dependencies: pydantic, course_backend.boundary.db.models
System role: Invite link API contracts
"""

import uuid

from pydantic import BaseModel

from course_backend.boundary.db.models.course_model import CourseCategory, UnlockMode


class InviteLinkResponse(BaseModel):
    """Current invite link of a course."""

    course_id: uuid.UUID
    invite_token: str | None
    invite_enabled: bool
    join_url: str | None


class InvitePreviewResponse(BaseModel):
    """What a patient sees before joining through an invite link."""

    course_id: uuid.UUID
    name: str
    description: str | None
    cover_image_url: str | None
    category: CourseCategory
    duration_weeks: int
    unlock_mode: UnlockMode
    lesson_count: int
    is_enrolled: bool
