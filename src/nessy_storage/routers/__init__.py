from fastapi import APIRouter

from nessy_storage.routers.roms import router as roms_router
from nessy_storage.routers.saves import router as saves_router
from nessy_storage.routers.settings import router as settings_router
from nessy_storage.routers.title_screens import router as title_screens_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(roms_router)
api_router.include_router(saves_router)
api_router.include_router(title_screens_router)
api_router.include_router(settings_router)
