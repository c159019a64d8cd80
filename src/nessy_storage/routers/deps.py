"""Shared FastAPI dependencies used across routers."""

from fastapi import Request

from nessy_storage.emulator import EmulatorFactory
from nessy_storage.services.settings_store import SettingsStore
from nessy_storage.services.snapshot_service import StateSnapshotService
from nessy_storage.services.title_screen_cache import TitleScreenCache
from nessy_storage.store.blob_database import BlobDatabase


def get_db(request: Request) -> BlobDatabase:
    return request.app.state.db


def get_settings_store(request: Request) -> SettingsStore:
    return request.app.state.settings_store


def get_snapshots(request: Request) -> StateSnapshotService:
    return request.app.state.snapshots


def get_title_screen_cache(request: Request) -> TitleScreenCache:
    return request.app.state.title_screens


def get_emulator_factory(request: Request) -> EmulatorFactory | None:
    return request.app.state.emulator_factory
