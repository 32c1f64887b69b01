"""Security primitives for keyseal.

This package provides the three building blocks of the exchange:
- X25519 key pairs and shared-secret agreement
- HKDF-SHA256 session key derivation
- AES-256-GCM sealing and opening of a message

Randomness is injected through a ``random_source`` callable everywhere it is
needed so tests can make key pairs and nonces reproducible.
"""

from .entropy import DeterministicRandom, read_random
from .agreement import KeyPair, generate_keypair, compute_shared_secret, public_key_from_private
from .kdf import derive_key
from .aead import SealedMessage, generate_nonce, seal, unseal, seal_message, open_message

__all__ = [
    "DeterministicRandom",
    "read_random",
    "KeyPair",
    "generate_keypair",
    "compute_shared_secret",
    "public_key_from_private",
    "derive_key",
    "SealedMessage",
    "generate_nonce",
    "seal",
    "unseal",
    "seal_message",
    "open_message",
]
