"""Save/load actions over a running emulator.

These are the flows behind the "save", "load last" and "load save" menu
entries, plus suspending the running game into the settings record on
shutdown and resuming it at the next start.
"""

from __future__ import annotations

import logging

from nessy_storage.emulator import Emulator
from nessy_storage.services.settings_store import SettingsStore
from nessy_storage.services.snapshot_service import StateSnapshotService

logger = logging.getLogger(__name__)


class NoActiveRomError(RuntimeError):
    """A save action was requested while no ROM is active."""


class SessionService:
    def __init__(self, snapshots: StateSnapshotService, settings_store: SettingsStore) -> None:
        self._snapshots = snapshots
        self._settings = settings_store

    def _active_rom(self) -> str:
        rom_hash = self._settings.get("active_rom")
        if rom_hash is None:
            raise NoActiveRomError("No active ROM")
        return rom_hash

    async def save_state(self, emulator: Emulator) -> int:
        return await self._snapshots.save(self._active_rom(), emulator.capture_snapshot())

    async def load_save(self, emulator: Emulator, timestamp: int) -> None:
        emulator.restore_snapshot(await self._snapshots.load(timestamp))

    async def load_last_save(self, emulator: Emulator) -> bool:
        """Restore the newest save of the active ROM; ``False`` if there is none."""
        state = await self._snapshots.load_latest(self._active_rom())
        if state is None:
            return False
        emulator.restore_snapshot(state)
        return True

    async def render_save(
        self, emulator: Emulator, timestamp: int, frame_buffer: bytearray
    ) -> None:
        """Render one frame of a save into *frame_buffer*, leaving the game where it was."""
        state = await self._snapshots.load(timestamp)
        previous = emulator.capture_snapshot()
        emulator.restore_snapshot(state)
        try:
            emulator.advance_frames(1, frame_buffer)
        finally:
            emulator.restore_snapshot(previous)

    def suspend(self, emulator: Emulator | None) -> None:
        if emulator is not None:
            self._settings.set("last_session_state", emulator.capture_snapshot())
        self._settings.save()

    def resume(self, emulator: Emulator) -> bool:
        state = self._settings.get("last_session_state")
        if state is None:
            return False
        emulator.restore_snapshot(state)
        logger.info("Resumed last session (%d bytes)", len(state))
        return True
