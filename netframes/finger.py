"""Packet fingerprints derived from a shared token."""

from __future__ import annotations

import hashlib

__all__ = ["Finger"]

FINGER_LEN = 12


class Finger:
    """Computes 12-byte fingerprints keyed by the SHA-256 of a token."""

    def __init__(self, token: str):
        self._hash = hashlib.sha256(token.encode("utf-8")).digest()

    @property
    def hash(self) -> bytes:
        """SHA-256 digest of the token."""
        return self._hash

    def calculate_finger(self, nonce, secret_body) -> bytes:
        """Return the last 12 bytes of SHA-256(nonce + secret_body + token hash)."""
        hasher = hashlib.sha256()
        hasher.update(bytes(nonce))
        hasher.update(bytes(secret_body))
        hasher.update(self._hash)
        return hasher.digest()[-FINGER_LEN:]