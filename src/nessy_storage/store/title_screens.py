from __future__ import annotations

from sqlmodel import Session, select

from nessy_storage.models.title_screen import TitleScreenEntry
from nessy_storage.store.base import BlobTable


class TitleScreenTable(BlobTable):
    """Rendered title-screen frames, one per ROM hash."""

    table_name = "title_screens"

    async def insert(self, rom_hash: str, data: bytes) -> None:
        def _upsert(session: Session) -> None:
            session.merge(TitleScreenEntry(rom_hash=rom_hash, data=bytes(data)))

        await self._run(_upsert)

    async def get(self, rom_hash: str) -> TitleScreenEntry | None:
        def _get(session: Session) -> TitleScreenEntry | None:
            return session.get(TitleScreenEntry, rom_hash)

        return await self._run(_get)

    async def list(self) -> list[TitleScreenEntry]:
        def _list(session: Session) -> list[TitleScreenEntry]:
            return list(session.exec(select(TitleScreenEntry)).all())

        return await self._run_list(_list)
