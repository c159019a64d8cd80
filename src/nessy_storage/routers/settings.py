from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from nessy_storage.routers.deps import get_settings_store
from nessy_storage.schemas.settings import SettingsOut, SettingsUpdate
from nessy_storage.services.settings_store import SettingsStore

router = APIRouter(prefix="/settings", tags=["settings"])


def _settings_out(store: SettingsStore) -> SettingsOut:
    record = store.record
    return SettingsOut(
        version=record.version,
        active_rom=record.active_rom,
        controls=record.controls,
        scaling_factor=record.scaling_factor,
        scaling_mode=record.scaling_mode,
        has_last_session=record.last_session_state is not None,
    )


@router.get("/", response_model=SettingsOut)
def get_settings(store: SettingsStore = Depends(get_settings_store)) -> SettingsOut:
    return _settings_out(store)


@router.patch("/", response_model=SettingsOut)
def update_settings(
    data: SettingsUpdate, store: SettingsStore = Depends(get_settings_store)
) -> SettingsOut:
    """Apply only the fields present in the request body."""
    try:
        for key, value in data.model_dump(exclude_unset=True).items():
            store.set(key, value)
    except ValidationError as exc:
        raise HTTPException(422, str(exc)) from exc
    return _settings_out(store)


@router.post("/save", response_model=SettingsOut)
def persist_settings(store: SettingsStore = Depends(get_settings_store)) -> SettingsOut:
    store.save()
    return _settings_out(store)
