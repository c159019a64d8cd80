"""In-memory settings record with change notification and a durable text slot.

The persisted form is the JSON dump of :class:`SettingsRecord`.  A record
whose ``version`` differs from :data:`SETTINGS_VERSION` is discarded as a
whole and replaced by the defaults; nothing is migrated field by field.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from pydantic import ValidationError

from nessy_storage.constants import SETTINGS_VERSION
from nessy_storage.schemas.settings import SettingsRecord
from nessy_storage.text_slot import TextSlot

logger = logging.getLogger(__name__)

ChangeHandler = Callable[[Any, Any], None]

READ_ONLY_KEYS = frozenset({"version"})


class SettingsState(StrEnum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


def default_record() -> SettingsRecord:
    return SettingsRecord()


def record_to_json(record: SettingsRecord) -> str:
    return record.model_dump_json()


def record_from_json(text: str | None) -> SettingsRecord:
    """Parse a persisted record, falling back to the defaults on any mismatch."""
    if text is None:
        return default_record()
    try:
        raw = json.loads(text)
    except json.JSONDecodeError:
        logger.warning("Persisted settings are not valid JSON, using defaults")
        return default_record()

    version = raw.get("version") if isinstance(raw, dict) else None
    if isinstance(version, bool) or version != SETTINGS_VERSION:
        logger.info(
            "Discarding settings with version %r (expected %d)", version, SETTINGS_VERSION
        )
        return default_record()

    try:
        return SettingsRecord.model_validate(raw)
    except ValidationError as exc:
        logger.warning("Persisted settings do not match the schema, using defaults: %s", exc)
        return default_record()


class SettingsStore:
    """The process-wide settings record.

    Construct once at startup; the persisted slot is read during
    construction and written back by :meth:`save`.
    """

    def __init__(self, slot: TextSlot) -> None:
        self.state = SettingsState.UNINITIALIZED
        self._slot = slot
        self._handlers: dict[str, list[tuple[int, ChangeHandler]]] = {}
        self._handler_keys: dict[int, str] = {}
        self._next_id = 0

        self.state = SettingsState.LOADING
        try:
            text = slot.read()
        except UnicodeDecodeError:
            logger.warning("Persisted settings are not valid UTF-8, using defaults")
            text = None
        self._record = record_from_json(text)
        self.state = SettingsState.READY

    @property
    def record(self) -> SettingsRecord:
        return self._record.model_copy(deep=True)

    def _check_key(self, key: str) -> None:
        if key not in SettingsRecord.model_fields:
            raise KeyError(f"Unknown setting '{key}'")

    def get(self, key: str) -> Any:
        self._check_key(key)
        return copy.deepcopy(getattr(self._record, key))

    def set(self, key: str, value: Any) -> None:
        """Validate and store *value*, then notify every handler for *key*."""
        self._check_key(key)
        if key in READ_ONLY_KEYS:
            raise KeyError(f"Setting '{key}' is read-only")
        previous = copy.deepcopy(getattr(self._record, key))
        setattr(self._record, key, copy.deepcopy(value))
        current = copy.deepcopy(getattr(self._record, key))
        for _, handler in list(self._handlers.get(key, [])):
            handler(current, previous)

    def subscribe(self, key: str, handler: ChangeHandler) -> int:
        """Register *handler* for changes to *key*; returns an id for :meth:`unsubscribe`."""
        self._check_key(key)
        self._next_id += 1
        self._handlers.setdefault(key, []).append((self._next_id, handler))
        self._handler_keys[self._next_id] = key
        return self._next_id

    def unsubscribe(self, subscription_id: int) -> bool:
        key = self._handler_keys.pop(subscription_id, None)
        if key is None:
            return False
        self._handlers[key] = [h for h in self._handlers[key] if h[0] != subscription_id]
        return True

    def to_json(self) -> str:
        return record_to_json(self._record)

    def save(self) -> None:
        self._slot.write(self.to_json())
        logger.info("Settings saved (version %d)", self._record.version)
