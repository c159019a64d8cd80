"""Content digests used as ROM primary keys."""

import hashlib

DIGEST_HEX_LENGTH = 64


def content_hash(data: bytes) -> str:
    """Return the SHA-256 digest of *data* as lowercase hex."""
    return hashlib.sha256(data).hexdigest()
