import json

import pytest
from pydantic import ValidationError

from nessy_storage.constants import SETTINGS_VERSION
from nessy_storage.schemas.settings import SettingsRecord
from nessy_storage.services.settings_store import (
    SettingsState,
    SettingsStore,
    default_record,
    record_from_json,
    record_to_json,
)
from nessy_storage.text_slot import FileTextSlot, MemoryTextSlot


class TestLoading:
    def test_fresh_install_uses_defaults(self, settings_store):
        assert settings_store.state is SettingsState.READY
        assert settings_store.record == default_record()

    def test_loads_persisted_record(self):
        persisted = SettingsRecord(active_rom="abc", scaling_factor=2, last_session_state=b"\x00\xff")
        store = SettingsStore(MemoryTextSlot(record_to_json(persisted)))
        assert store.get("active_rom") == "abc"
        assert store.get("scaling_factor") == 2
        assert store.get("last_session_state") == b"\x00\xff"

    def test_older_version_is_discarded_entirely(self):
        old = json.loads(record_to_json(SettingsRecord(active_rom="abc", scaling_mode="blurry")))
        old["version"] = SETTINGS_VERSION - 1
        store = SettingsStore(MemoryTextSlot(json.dumps(old)))
        assert store.record == default_record()

    def test_newer_version_is_discarded(self):
        raw = json.loads(record_to_json(SettingsRecord(scaling_factor=1)))
        raw["version"] = SETTINGS_VERSION + 1
        assert record_from_json(json.dumps(raw)) == default_record()

    def test_missing_version_is_discarded(self):
        assert record_from_json(json.dumps({"active_rom": "abc"})) == default_record()

    def test_invalid_json_falls_back(self):
        assert record_from_json("{not json") == default_record()

    def test_shape_mismatch_falls_back(self):
        raw = {"version": SETTINGS_VERSION, "scaling_factor": 9}
        assert record_from_json(json.dumps(raw)) == default_record()

    def test_undecodable_file_falls_back(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_bytes(b'{"version": 1, "scaling_mode": "\xff\xfe"}')
        store = SettingsStore(FileTextSlot(path))
        assert store.state is SettingsState.READY
        assert store.record == default_record()


class TestRoundTrip:
    def test_record_survives_json(self):
        record = SettingsRecord(
            active_rom="f" * 64,
            scaling_factor=4,
            scaling_mode="blurry",
            last_session_state=bytes(range(256)),
        )
        assert record_from_json(record_to_json(record)) == record

    def test_binary_field_is_text_in_json(self):
        text = record_to_json(SettingsRecord(last_session_state=b"\xff\x00"))
        assert isinstance(json.loads(text)["last_session_state"], str)

    def test_empty_state_round_trips(self):
        record = SettingsRecord(last_session_state=b"")
        assert record_from_json(record_to_json(record)).last_session_state == b""


class TestGetSet:
    def test_set_updates_value(self, settings_store):
        settings_store.set("scaling_mode", "blurry")
        assert settings_store.get("scaling_mode") == "blurry"

    def test_unknown_key(self, settings_store):
        with pytest.raises(KeyError):
            settings_store.get("volume")
        with pytest.raises(KeyError):
            settings_store.set("volume", 1)

    def test_version_is_read_only(self, settings_store):
        with pytest.raises(KeyError):
            settings_store.set("version", 99)

    def test_invalid_value_rejected(self, settings_store):
        with pytest.raises(ValidationError):
            settings_store.set("scaling_factor", 7)
        assert settings_store.get("scaling_factor") == 3

    def test_record_is_a_copy(self, settings_store):
        settings_store.record.controls["keyboard"]["inputs"]["up"] = "i"
        assert settings_store.get("controls")["keyboard"]["inputs"]["up"] == "w"

    def test_get_returns_a_copy(self, settings_store):
        controls = settings_store.get("controls")
        controls["keyboard"]["inputs"]["up"] = "i"
        assert settings_store.get("controls")["keyboard"]["inputs"]["up"] == "w"

    def test_set_keeps_its_own_copy(self, settings_store):
        controls = settings_store.get("controls")
        controls["keyboard"]["inputs"]["up"] = "i"
        settings_store.set("controls", controls)
        controls["keyboard"]["inputs"]["up"] = "k"
        assert settings_store.get("controls")["keyboard"]["inputs"]["up"] == "i"


class TestSubscriptions:
    def test_handler_gets_new_and_previous(self, settings_store):
        calls = []
        settings_store.subscribe("active_rom", lambda new, prev: calls.append((new, prev)))

        settings_store.set("active_rom", "abc")
        settings_store.set("active_rom", "def")

        assert calls == [("abc", None), ("def", "abc")]

    def test_only_matching_key_notified(self, settings_store):
        calls = []
        settings_store.subscribe("scaling_mode", lambda new, prev: calls.append(new))
        settings_store.set("active_rom", "abc")
        assert calls == []

    def test_unsubscribe(self, settings_store):
        calls = []
        sub_id = settings_store.subscribe("active_rom", lambda new, prev: calls.append(new))
        assert settings_store.unsubscribe(sub_id) is True
        assert settings_store.unsubscribe(sub_id) is False

        settings_store.set("active_rom", "abc")
        assert calls == []

    def test_notification_is_synchronous(self, settings_store):
        seen = []
        settings_store.subscribe(
            "scaling_factor", lambda new, prev: seen.append(settings_store.get("scaling_factor"))
        )
        settings_store.set("scaling_factor", 1)
        assert seen == [1]

    def test_edited_value_reports_previous(self, settings_store):
        calls = []
        settings_store.subscribe("controls", lambda new, prev: calls.append((new, prev)))

        controls = settings_store.get("controls")
        controls["keyboard"]["inputs"]["up"] = "i"
        settings_store.set("controls", controls)

        [(new, prev)] = calls
        assert new["keyboard"]["inputs"]["up"] == "i"
        assert prev["keyboard"]["inputs"]["up"] == "w"


class TestSave:
    def test_writes_slot(self, settings_store, settings_slot):
        settings_store.set("active_rom", "abc")
        settings_store.save()
        assert SettingsStore(settings_slot).get("active_rom") == "abc"

    def test_file_slot(self, tmp_path):
        path = tmp_path / "nested" / "settings.json"
        store = SettingsStore(FileTextSlot(path))
        store.set("last_session_state", b"\x00\x01\xfe\xff")
        store.save()

        reloaded = SettingsStore(FileTextSlot(path))
        assert reloaded.get("last_session_state") == b"\x00\x01\xfe\xff"
        assert not path.with_name("settings.json.tmp").exists()
