"""
API module.

FastAPI application, routers and request-scoped dependencies.
"""
