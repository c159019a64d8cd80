import pytest

from nessy_storage.hashing import content_hash
from nessy_storage.services.library_service import display_name, import_rom, load_active_rom


class TestDisplayName:
    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("game.nes", "game"),
            ("Super Mario Bros. (World).nes", "Super Mario Bros. (World)"),
            ("roms/zelda.nes", "zelda"),
            ("C:\\roms\\metroid.nes", "metroid"),
            ("noext", "noext"),
        ],
    )
    def test_strips_extension(self, filename, expected):
        assert display_name(filename) == expected


class TestImportRom:
    @pytest.mark.anyio
    async def test_stores_and_activates(self, db, settings_store):
        rom_hash = await import_rom(db, settings_store, "game.nes", b"\x01\x02\x03")

        assert rom_hash == content_hash(b"\x01\x02\x03")
        assert settings_store.get("active_rom") == rom_hash
        assert (await db.roms.get(rom_hash)).name == "game"

    @pytest.mark.anyio
    async def test_retry_is_idempotent(self, db, settings_store):
        first = await import_rom(db, settings_store, "game.nes", b"\x01")
        second = await import_rom(db, settings_store, "game.nes", b"\x01")
        assert first == second
        assert len(await db.roms.list()) == 1


class TestLoadActiveRom:
    @pytest.mark.anyio
    async def test_none_without_pointer(self, db, settings_store):
        assert await load_active_rom(db, settings_store) is None

    @pytest.mark.anyio
    async def test_returns_entry(self, db, settings_store):
        rom_hash = await import_rom(db, settings_store, "game.nes", b"\x01")
        rom = await load_active_rom(db, settings_store)
        assert rom is not None
        assert rom.hash == rom_hash

    @pytest.mark.anyio
    async def test_dangling_pointer_is_cleared(self, db, settings_store):
        changes = []
        settings_store.set("active_rom", "deadbeef")
        settings_store.subscribe("active_rom", lambda new, prev: changes.append((new, prev)))

        assert await load_active_rom(db, settings_store) is None
        assert settings_store.get("active_rom") is None
        assert changes == [(None, "deadbeef")]
