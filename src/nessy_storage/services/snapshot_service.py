from __future__ import annotations

from nessy_storage.store.blob_database import BlobDatabase


class StateSnapshotService:
    """Stores and fetches opaque emulator snapshots for a ROM."""

    def __init__(self, db: BlobDatabase) -> None:
        self._saves = db.saves

    async def save(self, rom_hash: str, state: bytes) -> int:
        return await self._saves.insert(rom_hash, state)

    async def load_latest(self, rom_hash: str) -> bytes | None:
        entry = await self._saves.get_last(rom_hash)
        return None if entry is None else entry.state

    async def load(self, timestamp: int) -> bytes:
        """Return the state saved at *timestamp*; raises ``NotFoundError``."""
        entry = await self._saves.get(timestamp)
        return entry.state
