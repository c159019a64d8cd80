"""Contracts consumed from the emulation engine.

Snapshot and frame formats are opaque here: bytes go in and come out
untouched.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol


class Emulator(Protocol):
    def capture_snapshot(self) -> bytes: ...

    def restore_snapshot(self, state: bytes) -> None: ...

    def advance_frames(self, count: int, frame_buffer: bytearray) -> None: ...


EmulatorFactory = Callable[[bytes], Emulator]
