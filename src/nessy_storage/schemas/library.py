from pydantic import BaseModel


class RomOut(BaseModel):
    hash: str
    name: str
    size: int


class RomImportResult(BaseModel):
    hash: str
    name: str
    active: bool


class SaveOut(BaseModel):
    timestamp: int
    rom_hash: str
    size: int
