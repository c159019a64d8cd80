"""Endpoints for the ROM library: import, list, fetch."""

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from nessy_storage.models.rom import RomEntry
from nessy_storage.routers.deps import get_db, get_settings_store
from nessy_storage.schemas.library import RomImportResult, RomOut
from nessy_storage.services.library_service import display_name, import_rom
from nessy_storage.services.settings_store import SettingsStore
from nessy_storage.store.blob_database import BlobDatabase

router = APIRouter(prefix="/roms", tags=["roms"])


def _rom_out(rom: RomEntry) -> RomOut:
    return RomOut(hash=rom.hash, name=rom.name, size=len(rom.data))


@router.get("/", response_model=list[RomOut])
async def list_roms(db: BlobDatabase = Depends(get_db)) -> list[RomOut]:
    roms = await db.roms.list()
    return sorted((_rom_out(r) for r in roms), key=lambda r: r.name.lower())


@router.post("/", response_model=RomImportResult, status_code=201)
async def upload_rom(
    request: Request,
    filename: str = Query(..., min_length=1),
    activate: bool = True,
    db: BlobDatabase = Depends(get_db),
    settings_store: SettingsStore = Depends(get_settings_store),
) -> RomImportResult:
    """Import the raw request body as a ROM image."""
    data = await request.body()
    if not data:
        raise HTTPException(400, "Empty ROM file")
    if activate:
        rom_hash = await import_rom(db, settings_store, filename, data)
    else:
        rom_hash = await db.roms.insert(display_name(filename), data)
    return RomImportResult(hash=rom_hash, name=display_name(filename), active=activate)


@router.get("/{rom_hash}", response_model=RomOut)
async def get_rom(rom_hash: str, db: BlobDatabase = Depends(get_db)) -> RomOut:
    return _rom_out(await db.roms.get(rom_hash))


@router.get("/{rom_hash}/data")
async def download_rom(rom_hash: str, db: BlobDatabase = Depends(get_db)) -> Response:
    rom = await db.roms.get(rom_hash)
    return Response(content=rom.data, media_type="application/octet-stream")
