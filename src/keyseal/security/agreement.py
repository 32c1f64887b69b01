"""X25519 key agreement.

Key pairs are kept as raw 32-byte values so they can be passed between the
two simulated parties without sharing library objects. The private half is
excluded from ``repr`` to keep it out of logs and display paths.
"""
from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass, field
from typing import Optional

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PrivateKey, X25519PublicKey

from keyseal.core.exceptions import InvalidInputError, InvalidPeerKeyError
from .entropy import RandomSource, read_random

logger = logging.getLogger(__name__)

KEY_SIZE = 32
_ZERO_SECRET = bytes(KEY_SIZE)


@dataclass(frozen=True)
class KeyPair:
    private_key: bytes = field(repr=False)
    public_key: bytes


def _load_private(private_key: bytes) -> X25519PrivateKey:
    if len(private_key) != KEY_SIZE:
        raise InvalidInputError(f"X25519 private key must be {KEY_SIZE} bytes, got {len(private_key)}")
    return X25519PrivateKey.from_private_bytes(private_key)


def public_key_from_private(private_key: bytes) -> bytes:
    """Return the raw public point for a raw private scalar."""
    return _load_private(private_key).public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


def generate_keypair(random_source: Optional[RandomSource] = None) -> KeyPair:
    """
    Generate an X25519 key pair from the given random source.

    The 32 random bytes are used as the private scalar; clamping is applied
    by the X25519 primitive when it multiplies.

    Raises:
        RandomnessUnavailableError: if the random source cannot be read
    """
    private_key = read_random(KEY_SIZE, random_source)
    public_key = public_key_from_private(private_key)
    logger.debug("generated X25519 key pair (public=%s...)", public_key[:4].hex())
    return KeyPair(private_key=private_key, public_key=public_key)


def compute_shared_secret(own_private: bytes, peer_public: bytes) -> bytes:
    """
    Compute the X25519 shared secret between our private key and a peer's public key.

    Raises:
        InvalidPeerKeyError: if the peer key is not 32 bytes or is a
            low-order point yielding an all-zero secret
    """
    if len(peer_public) != KEY_SIZE:
        raise InvalidPeerKeyError(
            f"peer public key must be {KEY_SIZE} bytes, got {len(peer_public)}"
        )

    private = _load_private(own_private)
    try:
        peer = X25519PublicKey.from_public_bytes(peer_public)
        secret = private.exchange(peer)
    except ValueError as e:
        # OpenSSL refuses low-order points itself
        logger.warning("rejected degenerate peer public key")
        raise InvalidPeerKeyError(f"peer public key is a low-order point: {e}") from e

    if hmac.compare_digest(secret, _ZERO_SECRET):
        logger.warning("rejected degenerate peer public key")
        raise InvalidPeerKeyError("peer public key is a low-order point (all-zero shared secret)")
    return secret
