"""API routers."""

from .course_enrollments import router as course_enrollments_router
from .courses import router as courses_router
from .health import router as health_router
from .invites import router as invites_router
from .my_courses import router as my_courses_router

__all__ = [
    "course_enrollments_router",
    "courses_router",
    "health_router",
    "invites_router",
    "my_courses_router",
]
