"""
Unit-of-work helper.

Every service operation that writes runs inside atomic(): all statements
issued on the session commit together, or the whole transaction is rolled
back and the original exception propagates. There is no retry.

Dependencies: sqlalchemy
System role: All-or-nothing transaction boundary for services
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


@asynccontextmanager
async def atomic(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Run the enclosed block as a single transaction.

    Args:
        session: Async database session

    Yields:
        AsyncSession: The same session

    Raises:
        Exception: Whatever the block raised, after rollback

    Usage:
        async with atomic(self.db):
            course = await course_crud.get_for_update(self.db, course_id)
            ...
    """
    try:
        yield session
        await session.commit()
    except Exception as e:
        await session.rollback()
        logger.debug(
            "Transaction rolled back",
            extra={"error_type": type(e).__name__},
        )
        raise
