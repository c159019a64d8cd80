import pytest
from fastapi.testclient import TestClient
from sqlmodel import create_engine
from sqlmodel.pool import StaticPool

from nessy_storage.main import create_app
from nessy_storage.services.settings_store import SettingsStore
from nessy_storage.services.snapshot_service import StateSnapshotService
from nessy_storage.store.blob_database import BlobDatabase
from nessy_storage.text_slot import MemoryTextSlot


class FakeEmulator:
    """Stands in for the emulation engine: its "state" is just a byte string."""

    def __init__(self, rom: bytes = b"", state: bytes = b"boot") -> None:
        self.rom = rom
        self.state = state
        self.frames = 0
        self.restored: list[bytes] = []

    def capture_snapshot(self) -> bytes:
        return self.state

    def restore_snapshot(self, state: bytes) -> None:
        self.state = state
        self.restored.append(state)

    def advance_frames(self, count: int, frame_buffer: bytearray) -> None:
        self.frames += count
        fill = (len(self.rom) + len(self.state) + self.frames) % 256
        frame_buffer[:] = bytes([fill]) * len(frame_buffer)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def db(engine):
    return BlobDatabase(engine)


@pytest.fixture
def settings_slot():
    return MemoryTextSlot()


@pytest.fixture
def settings_store(settings_slot):
    return SettingsStore(settings_slot)


@pytest.fixture
def snapshots(db):
    return StateSnapshotService(db)


@pytest.fixture
def emulator():
    return FakeEmulator()


@pytest.fixture
def emulator_factory():
    consoles: list[FakeEmulator] = []

    def _factory(rom: bytes) -> FakeEmulator:
        console = FakeEmulator(rom)
        consoles.append(console)
        return console

    _factory.consoles = consoles  # type: ignore[attr-defined]
    return _factory


@pytest.fixture
def client(engine, settings_slot):
    app = create_app(engine=engine, settings_slot=settings_slot)
    with TestClient(app) as tc:
        yield tc


@pytest.fixture
def emulator_client(engine, settings_slot, emulator_factory):
    app = create_app(engine=engine, settings_slot=settings_slot, emulator_factory=emulator_factory)
    with TestClient(app) as tc:
        yield tc
