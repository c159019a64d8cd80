"""Endpoints for save states of a ROM."""

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from nessy_storage.models.save import SaveEntry
from nessy_storage.routers.deps import get_db, get_snapshots
from nessy_storage.schemas.library import SaveOut
from nessy_storage.services.snapshot_service import StateSnapshotService
from nessy_storage.store.blob_database import BlobDatabase

router = APIRouter(tags=["saves"])


def _save_out(save: SaveEntry) -> SaveOut:
    return SaveOut(timestamp=save.timestamp, rom_hash=save.rom_hash, size=len(save.state))


@router.get("/roms/{rom_hash}/saves", response_model=list[SaveOut])
async def list_saves(rom_hash: str, db: BlobDatabase = Depends(get_db)) -> list[SaveOut]:
    """List saves for a ROM, newest first."""
    saves = await db.saves.list(rom_hash)
    return [_save_out(s) for s in sorted(saves, key=lambda s: s.timestamp, reverse=True)]


@router.post("/roms/{rom_hash}/saves", response_model=SaveOut, status_code=201)
async def create_save(
    rom_hash: str,
    request: Request,
    snapshots: StateSnapshotService = Depends(get_snapshots),
) -> SaveOut:
    state = await request.body()
    timestamp = await snapshots.save(rom_hash, state)
    return SaveOut(timestamp=timestamp, rom_hash=rom_hash, size=len(state))


@router.get("/roms/{rom_hash}/saves/latest", response_model=SaveOut)
async def latest_save(rom_hash: str, db: BlobDatabase = Depends(get_db)) -> SaveOut:
    save = await db.saves.get_last(rom_hash)
    if save is None:
        raise HTTPException(404, "No saves for this ROM")
    return _save_out(save)


@router.get("/saves/{timestamp}/state")
async def download_state(
    timestamp: int, snapshots: StateSnapshotService = Depends(get_snapshots)
) -> Response:
    return Response(content=await snapshots.load(timestamp), media_type="application/octet-stream")
