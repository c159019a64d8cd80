"""SQLModel table for emulator snapshots.

The composite ``(rom_hash, timestamp)`` index backs the "latest save for a
ROM" query as a bounded reverse range scan.
"""

from sqlalchemy import Index
from sqlmodel import Field, SQLModel


class SaveEntry(SQLModel, table=True):
    __tablename__ = "saves"
    __table_args__ = (Index("ix_saves_rom_hash_timestamp", "rom_hash", "timestamp"),)

    timestamp: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    rom_hash: str = Field(max_length=64)
    state: bytes
