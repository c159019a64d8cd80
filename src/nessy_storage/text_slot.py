"""Durable string slots backing the settings record."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol


class TextSlot(Protocol):
    def read(self) -> str | None: ...

    def write(self, text: str) -> None: ...


class FileTextSlot:
    """A UTF-8 file replaced atomically on every write."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def read(self) -> str | None:
        if not self.path.is_file():
            return None
        return self.path.read_text(encoding="utf-8")

    def write(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(text, encoding="utf-8")
        os.replace(tmp, self.path)


class MemoryTextSlot:
    def __init__(self, text: str | None = None) -> None:
        self.text = text

    def read(self) -> str | None:
        return self.text

    def write(self, text: str) -> None:
        self.text = text
