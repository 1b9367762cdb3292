"""Service orchestrators."""

from .course_service import CourseService
from .enrollment_service import EnrollmentService
from .invite_service import InviteService
from .progress_service import ProgressService
from .publish_service import PublishService

__all__ = [
    "CourseService",
    "EnrollmentService",
    "InviteService",
    "ProgressService",
    "PublishService",
]
