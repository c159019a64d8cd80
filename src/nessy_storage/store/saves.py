from __future__ import annotations

import logging
import time

from sqlalchemy import Engine
from sqlmodel import Session, func, select

from nessy_storage.errors import NotFoundError
from nessy_storage.models.save import SaveEntry
from nessy_storage.store.base import BlobTable

logger = logging.getLogger(__name__)


class SaveTable(BlobTable):
    """Emulator snapshots keyed by creation time in milliseconds."""

    table_name = "saves"

    def __init__(self, engine: Engine) -> None:
        super().__init__(engine)
        with Session(engine) as session:
            newest = session.exec(select(func.max(SaveEntry.timestamp))).one()
        self._last_timestamp = newest or 0

    def _next_timestamp(self) -> int:
        # Wall clock, bumped past the newest stored save so timestamps never repeat.
        now = time.time_ns() // 1_000_000
        self._last_timestamp = max(now, self._last_timestamp + 1)
        return self._last_timestamp

    async def insert(self, rom_hash: str, state: bytes) -> int:
        timestamp = self._next_timestamp()

        def _insert(session: Session) -> None:
            session.add(SaveEntry(timestamp=timestamp, rom_hash=rom_hash, state=bytes(state)))

        await self._run(_insert)
        logger.info("Saved state for %s at %d (%d bytes)", rom_hash[:12], timestamp, len(state))
        return timestamp

    async def get(self, timestamp: int) -> SaveEntry:
        def _get(session: Session) -> SaveEntry | None:
            return session.get(SaveEntry, timestamp)

        entry = await self._run(_get)
        if entry is None:
            raise NotFoundError(self.table_name, timestamp)
        return entry

    async def get_last(self, rom_hash: str) -> SaveEntry | None:
        """Return the newest save for *rom_hash*, or ``None`` if it has none."""

        def _get_last(session: Session) -> SaveEntry | None:
            stmt = (
                select(SaveEntry)
                .where(SaveEntry.rom_hash == rom_hash)
                .order_by(SaveEntry.timestamp.desc())  # type: ignore[attr-defined]
                .limit(1)
            )
            return session.exec(stmt).first()

        return await self._run(_get_last)

    async def list(self, rom_hash: str) -> list[SaveEntry]:
        def _list(session: Session) -> list[SaveEntry]:
            return list(session.exec(select(SaveEntry).where(SaveEntry.rom_hash == rom_hash)).all())

        return await self._run_list(_list)
