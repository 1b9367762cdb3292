"""
Course engine configuration settings.

Invite link shape, token length and authoring limits.

Dependencies: pydantic, pydantic_settings
System role: Tunables for publishing, invites and listings
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from course_backend.configs.base import BaseSettings
from course_backend.core.invite_tokens import MIN_TOKEN_LENGTH


class CourseSettings(BaseSettings):
    """Course authoring and enrollment configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="COURSES_",
        case_sensitive=False,
        extra="ignore",
    )

    join_base_url: str = Field(
        default="http://localhost:3000/app/courses/join",
        description="Base URL of the patient-facing join page; token is appended",
    )
    invite_token_length: int = Field(
        default=24,
        ge=MIN_TOKEN_LENGTH,
        le=128,
        description="Length of newly generated invite tokens",
    )
    max_lessons_per_course: int = Field(
        default=100,
        ge=1,
        description="Upper bound on draft lessons per course",
    )
    default_page_size: int = Field(default=24, ge=1, description="Course list page size")
    max_page_size: int = Field(default=100, ge=1, description="Course list page size cap")

    def join_url(self, token: str) -> str:
        """Build the shareable join URL for an invite token."""
        return f"{self.join_base_url.rstrip('/')}/{token}"
