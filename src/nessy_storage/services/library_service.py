"""ROM import and active-ROM resolution.

``import_rom`` is two independent steps (store, then mark active).  A crash
between them leaves the ROM stored but inactive; calling it again is safe
because the insert is an upsert.
"""

from __future__ import annotations

import logging
from pathlib import PurePath

from nessy_storage.errors import NotFoundError
from nessy_storage.models.rom import RomEntry
from nessy_storage.services.settings_store import SettingsStore
from nessy_storage.store.blob_database import BlobDatabase

logger = logging.getLogger(__name__)


def display_name(filename: str) -> str:
    """Strip directories and the final extension: ``roms/Zelda.nes`` -> ``Zelda``."""
    name = PurePath(filename.replace("\\", "/")).name
    stem = PurePath(name).stem
    return stem or name


async def import_rom(
    db: BlobDatabase, settings_store: SettingsStore, filename: str, data: bytes
) -> str:
    rom_hash = await db.roms.insert(display_name(filename), data)
    settings_store.set("active_rom", rom_hash)
    return rom_hash


async def load_active_rom(db: BlobDatabase, settings_store: SettingsStore) -> RomEntry | None:
    """Return the active ROM, clearing the pointer if the ROM is gone."""
    rom_hash = settings_store.get("active_rom")
    if rom_hash is None:
        return None
    try:
        return await db.roms.get(rom_hash)
    except NotFoundError:
        logger.error("Active ROM %s is not in the library, clearing it", rom_hash)
        settings_store.set("active_rom", None)
        return None
