"""AES-256-GCM sealing of a single message under a session key.

Wire layout of a packaged message (no length field, the nonce size is fixed):

- 12 bytes: nonce
- N bytes: ciphertext
- 16 bytes: GCM tag

Callers must never reuse a nonce under the same key; nothing here detects it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from keyseal.core.exceptions import (
    AuthenticationFailedError,
    InvalidKeyOrNonceSizeError,
    MalformedMessageError,
)
from .entropy import RandomSource, read_random

logger = logging.getLogger(__name__)

KEY_SIZE = 32
NONCE_SIZE = 12
TAG_SIZE = 16


def _check_sizes(key: bytes, nonce: bytes) -> None:
    if len(key) != KEY_SIZE:
        raise InvalidKeyOrNonceSizeError(f"AES-256-GCM requires {KEY_SIZE}-byte key, got {len(key)} bytes")
    if len(nonce) != NONCE_SIZE:
        raise InvalidKeyOrNonceSizeError(f"AES-GCM requires {NONCE_SIZE}-byte nonce, got {len(nonce)} bytes")


def generate_nonce(random_source: Optional[RandomSource] = None) -> bytes:
    return read_random(NONCE_SIZE, random_source)


def seal(key: bytes, nonce: bytes, plaintext: bytes, associated_data: Optional[bytes] = None) -> bytes:
    """
    Encrypt plaintext with AES-256-GCM and return ``ciphertext || tag``.

    Raises:
        InvalidKeyOrNonceSizeError: if key is not 32 bytes or nonce is not 12 bytes
    """
    _check_sizes(key, nonce)
    return AESGCM(key).encrypt(nonce, plaintext, associated_data)


def unseal(key: bytes, nonce: bytes, ciphertext: bytes, associated_data: Optional[bytes] = None) -> bytes:
    """
    Verify and decrypt ``ciphertext || tag`` produced by :func:`seal`.

    Nothing is returned unless the tag verifies.

    Raises:
        InvalidKeyOrNonceSizeError: if key is not 32 bytes or nonce is not 12 bytes
        AuthenticationFailedError: if the tag does not match
    """
    _check_sizes(key, nonce)
    if len(ciphertext) < TAG_SIZE:
        raise AuthenticationFailedError("ciphertext too short to contain authentication tag")
    try:
        return AESGCM(key).decrypt(nonce, ciphertext, associated_data)
    except InvalidTag as e:
        logger.warning("message failed authentication")
        raise AuthenticationFailedError("message authentication failed (tag mismatch)") from e


@dataclass(frozen=True)
class SealedMessage:
    nonce: bytes
    ciphertext: bytes

    def to_bytes(self) -> bytes:
        return self.nonce + self.ciphertext

    @classmethod
    def from_bytes(cls, blob: bytes) -> "SealedMessage":
        if len(blob) < NONCE_SIZE + TAG_SIZE:
            raise MalformedMessageError(
                f"packaged message too short: {len(blob)} bytes, need at least {NONCE_SIZE + TAG_SIZE}"
            )
        return cls(nonce=blob[:NONCE_SIZE], ciphertext=blob[NONCE_SIZE:])


def seal_message(key: bytes, plaintext: bytes, random_source: Optional[RandomSource] = None) -> SealedMessage:
    """Seal plaintext under a fresh random nonce."""
    nonce = generate_nonce(random_source)
    return SealedMessage(nonce=nonce, ciphertext=seal(key, nonce, plaintext))


def open_message(key: bytes, message: SealedMessage) -> bytes:
    return unseal(key, message.nonce, message.ciphertext)
