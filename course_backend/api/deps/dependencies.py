"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: course_backend.configs, course_backend.application, course_backend.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from course_backend.configs import Settings, get_settings
from course_backend.boundary.db import get_async_db
from course_backend.application.services import (
    CourseService,
    EnrollmentService,
    InviteService,
    ProgressService,
    PublishService,
)


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_course_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> CourseService:
    """
    Get course service instance.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        CourseService: Course authoring service instance
    """
    return CourseService(db=db, settings=settings.courses)


def get_publish_service(db: AsyncSession = Depends(get_async_db)) -> PublishService:
    """
    Get publish service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        PublishService: Publish service instance
    """
    return PublishService(db=db)


def get_enrollment_service(db: AsyncSession = Depends(get_async_db)) -> EnrollmentService:
    """
    Get enrollment service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        EnrollmentService: Enrollment service instance
    """
    return EnrollmentService(db=db)


def get_invite_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> InviteService:
    """
    Get invite service instance.

    The enrollment service it delegates to shares the same session.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        InviteService: Invite service instance
    """
    return InviteService(
        db=db,
        enrollment_service=EnrollmentService(db=db),
        settings=settings.courses,
    )


def get_progress_service(db: AsyncSession = Depends(get_async_db)) -> ProgressService:
    """
    Get progress service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        ProgressService: Progress service instance
    """
    return ProgressService(db=db)
