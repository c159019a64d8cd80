"""Compute-if-absent cache of rendered title screens.

A miss runs the generator (a fresh console advanced a fixed number of
frames), stores the captured frame and returns it.  A failing generator
yields a black placeholder frame that is *not* stored, so the next request
tries again.  Two concurrent misses for the same ROM both generate; the
later insert overwrites the earlier one.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from nessy_storage.constants import FRAME_BUFFER_SIZE, TITLE_SCREEN_FRAMES
from nessy_storage.emulator import EmulatorFactory
from nessy_storage.errors import NotFoundError
from nessy_storage.store.blob_database import BlobDatabase

logger = logging.getLogger(__name__)

TitleScreenGenerator = Callable[[], bytes]


def placeholder_frame(size: int = FRAME_BUFFER_SIZE) -> bytes:
    return bytes(size)


def make_title_screen_generator(
    factory: EmulatorFactory,
    rom_data: bytes,
    frames: int = TITLE_SCREEN_FRAMES,
    frame_size: int = FRAME_BUFFER_SIZE,
) -> TitleScreenGenerator:
    """Build a generator that boots *rom_data* and captures frame *frames*."""

    def _generate() -> bytes:
        console = factory(rom_data)
        frame = bytearray(frame_size)
        console.advance_frames(frames, frame)
        return bytes(frame)

    return _generate


class TitleScreenCache:
    def __init__(
        self,
        db: BlobDatabase,
        *,
        frames: int = TITLE_SCREEN_FRAMES,
        frame_size: int = FRAME_BUFFER_SIZE,
    ) -> None:
        self._db = db
        self._frames = frames
        self._frame_size = frame_size

    async def get_or_generate(self, rom_hash: str, generate: TitleScreenGenerator) -> bytes:
        cached = await self._db.title_screens.get(rom_hash)
        if cached is not None:
            return cached.data

        try:
            data = await asyncio.to_thread(generate)
        except Exception:
            logger.exception("Failed to generate title screen for %s", rom_hash)
            return placeholder_frame(self._frame_size)

        await self._db.title_screens.insert(rom_hash, data)
        logger.info("Generated title screen for %s", rom_hash[:12])
        return data

    async def title_screen_for(self, rom_hash: str, factory: EmulatorFactory) -> bytes:
        """Title screen for a stored ROM, booting it with *factory* on a miss."""
        cached = await self._db.title_screens.get(rom_hash)
        if cached is not None:
            return cached.data
        try:
            rom = await self._db.roms.get(rom_hash)
        except NotFoundError:
            logger.warning("Cannot render title screen, ROM %s is not stored", rom_hash)
            return placeholder_frame(self._frame_size)
        generate = make_title_screen_generator(factory, rom.data, self._frames, self._frame_size)
        return await self.get_or_generate(rom_hash, generate)
