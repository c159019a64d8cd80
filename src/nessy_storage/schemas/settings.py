from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from nessy_storage.codec import decode_bytes, encode_bytes
from nessy_storage.constants import SETTINGS_VERSION

ScalingFactor = Literal[1, 2, 3, 4]
ScalingMode = Literal["pixelated", "blurry"]


def default_controls() -> dict[str, Any]:
    """Keyboard and gamepad bindings for a fresh install.

    Gamepad values are indices in the W3C standard gamepad mapping.
    """
    return {
        "keyboard": {
            "inputs": {
                "up": "w",
                "left": "a",
                "down": "s",
                "right": "d",
                "b": "k",
                "a": "l",
                "start": "Enter",
                "select": " ",
            },
            "meta": {
                "toggleUI": "Escape",
                "save": "META+s",
                "loadLastSave": "META+l",
            },
        },
        "gamepad": {
            "inputs": {
                "up": 12,
                "left": 14,
                "down": 13,
                "right": 15,
                "b": 0,
                "a": 1,
                "start": 9,
                "select": 8,
            },
            "meta": {
                "toggleUI": 6,
                "save": 10,
                "loadLastSave": 11,
            },
        },
    }


class SettingsRecord(BaseModel):
    """The single persisted settings row.

    ``last_session_state`` is an opaque emulator snapshot; it is written to
    JSON through the binary codec and accepts encoded text on input.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    version: int = SETTINGS_VERSION
    active_rom: str | None = None
    controls: dict[str, Any] = Field(default_factory=default_controls)
    scaling_factor: ScalingFactor = 3
    scaling_mode: ScalingMode = "pixelated"
    last_session_state: bytes | None = None

    @field_validator("last_session_state", mode="before")
    @classmethod
    def _decode_state(cls, value: Any) -> Any:
        if isinstance(value, str):
            return decode_bytes(value)
        if isinstance(value, (bytearray, memoryview)):
            return bytes(value)
        return value

    @field_serializer("last_session_state")
    def _encode_state(self, value: bytes | None) -> str | None:
        return None if value is None else encode_bytes(value)


class SettingsOut(BaseModel):
    version: int
    active_rom: str | None
    controls: dict[str, Any]
    scaling_factor: int
    scaling_mode: str
    has_last_session: bool


class SettingsUpdate(BaseModel):
    active_rom: str | None = None
    controls: dict[str, Any] | None = None
    scaling_factor: ScalingFactor | None = None
    scaling_mode: ScalingMode | None = None
