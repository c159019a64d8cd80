"""Shared transaction plumbing for the blob tables.

Every public table operation is a coroutine wrapping exactly one
SQLAlchemy transaction, executed off the event loop with
``asyncio.to_thread``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from nessy_storage.errors import StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BlobTable:
    """Base for a single table bound to the process-wide engine."""

    table_name: str = ""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _transaction(self, work: Callable[[Session], T]) -> T:
        with Session(self._engine, expire_on_commit=False) as session:
            result = work(session)
            session.commit()
            return result

    async def _run(self, work: Callable[[Session], T]) -> T:
        """Run *work* in its own transaction; storage faults become ``StorageError``."""
        try:
            return await asyncio.to_thread(self._transaction, work)
        except SQLAlchemyError as exc:
            raise StorageError(f"Transaction on '{self.table_name}' failed: {exc}") from exc

    async def _run_list(self, work: Callable[[Session], list[T]]) -> list[T]:
        """Like :meth:`_run`, but a failing read degrades to an empty list."""
        try:
            return await self._run(work)
        except Exception:
            logger.warning("Listing '%s' failed, returning no entries", self.table_name, exc_info=True)
            return []
