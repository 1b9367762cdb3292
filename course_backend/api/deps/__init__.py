"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_course_service,
    get_enrollment_service,
    get_invite_service,
    get_progress_service,
    get_publish_service,
    get_settings_dependency,
)
from .identity import Actor, get_current_actor, require_patient, require_staff

__all__ = [
    "Actor",
    "get_current_actor",
    "require_patient",
    "require_staff",
    "get_course_service",
    "get_enrollment_service",
    "get_invite_service",
    "get_progress_service",
    "get_publish_service",
    "get_settings_dependency",
]
