from fastapi import APIRouter, Depends, HTTPException, Response

from nessy_storage.emulator import EmulatorFactory
from nessy_storage.routers.deps import get_db, get_emulator_factory, get_title_screen_cache
from nessy_storage.services.title_screen_cache import TitleScreenCache
from nessy_storage.store.blob_database import BlobDatabase

router = APIRouter(tags=["title-screens"])


@router.get("/roms/{rom_hash}/title-screen")
async def get_title_screen(
    rom_hash: str,
    db: BlobDatabase = Depends(get_db),
    cache: TitleScreenCache = Depends(get_title_screen_cache),
    factory: EmulatorFactory | None = Depends(get_emulator_factory),
) -> Response:
    """Raw RGB frame (256x240x3) of the ROM's title screen."""
    if factory is None:
        # Without an emulator we can only serve what was rendered before.
        cached = await db.title_screens.get(rom_hash)
        if cached is None:
            raise HTTPException(404, "Title screen not generated")
        data = cached.data
    else:
        data = await cache.title_screen_for(rom_hash, factory)
    return Response(content=data, media_type="application/octet-stream")
