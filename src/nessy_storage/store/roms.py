from __future__ import annotations

import logging

from sqlmodel import Session, select

from nessy_storage.errors import NotFoundError
from nessy_storage.hashing import content_hash
from nessy_storage.models.rom import RomEntry
from nessy_storage.store.base import BlobTable

logger = logging.getLogger(__name__)


class RomTable(BlobTable):
    """Content-addressed ROM images keyed by the digest of their bytes."""

    table_name = "roms"

    async def insert(self, name: str, data: bytes) -> str:
        """Upsert a ROM and return its hash.

        Inserting identical bytes again overwrites the stored name.
        """
        rom_hash = content_hash(data)

        def _upsert(session: Session) -> None:
            session.merge(RomEntry(hash=rom_hash, name=name, data=bytes(data)))

        await self._run(_upsert)
        logger.info("Stored ROM '%s' (%s, %d bytes)", name, rom_hash[:12], len(data))
        return rom_hash

    async def get(self, rom_hash: str) -> RomEntry:
        def _get(session: Session) -> RomEntry | None:
            return session.get(RomEntry, rom_hash)

        entry = await self._run(_get)
        if entry is None:
            raise NotFoundError(self.table_name, rom_hash)
        return entry

    async def list(self) -> list[RomEntry]:
        def _list(session: Session) -> list[RomEntry]:
            return list(session.exec(select(RomEntry)).all())

        return await self._run_list(_list)
