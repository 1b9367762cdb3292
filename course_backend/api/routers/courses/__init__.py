"""
Courses router package.

Exports the router for course authoring endpoints.
"""

from .courses_router import router

__all__ = ["router"]
