"""Text-safe encoding for binary fields stored in the settings slot."""

import base64
import binascii


def encode_bytes(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def decode_bytes(text: str) -> bytes:
    """Decode text produced by :func:`encode_bytes`.

    Raises ``ValueError`` if *text* is not valid base64.
    """
    try:
        return base64.b64decode(text.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise ValueError(f"Invalid encoded bytes: {exc}") from exc
