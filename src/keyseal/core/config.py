"""Session settings and their environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .exceptions import ConfigurationError

DEFAULT_CONTEXT_LABEL = "X25519-HKDF-AES-Session"
DEFAULT_MESSAGE = "Hello from Alice!"
SESSION_KEY_LENGTH = 32

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class SessionConfig:
    """Parameters shared by both parties of one exchange."""

    context_label: str = DEFAULT_CONTEXT_LABEL
    salt: Optional[bytes] = None
    key_length: int = SESSION_KEY_LENGTH
    default_message: str = DEFAULT_MESSAGE
    parallel_keygen: bool = False

    def __post_init__(self) -> None:
        # AES-256-GCM takes exactly one key size
        if self.key_length != SESSION_KEY_LENGTH:
            raise ConfigurationError(
                f"session key length must be {SESSION_KEY_LENGTH} bytes, got {self.key_length}"
            )
        if not self.context_label:
            raise ConfigurationError("context label must not be empty")


def load_config(environ: Optional[Mapping[str, str]] = None) -> SessionConfig:
    """
    Build a SessionConfig from defaults plus ``KEYSEAL_*`` environment variables.

    - ``KEYSEAL_CONTEXT_LABEL``: HKDF info label
    - ``KEYSEAL_SALT``: HKDF salt as hex (unset means no salt)
    - ``KEYSEAL_DEFAULT_MESSAGE``: text used when the input is empty
    - ``KEYSEAL_PARALLEL_KEYGEN``: generate both key pairs on worker threads
    """
    env = os.environ if environ is None else environ

    salt = None
    salt_hex = env.get("KEYSEAL_SALT")
    if salt_hex:
        try:
            salt = bytes.fromhex(salt_hex)
        except ValueError as e:
            raise ConfigurationError(f"KEYSEAL_SALT is not valid hex: {e}") from e

    return SessionConfig(
        context_label=env.get("KEYSEAL_CONTEXT_LABEL", DEFAULT_CONTEXT_LABEL),
        salt=salt,
        default_message=env.get("KEYSEAL_DEFAULT_MESSAGE", DEFAULT_MESSAGE),
        parallel_keygen=env.get("KEYSEAL_PARALLEL_KEYGEN", "").strip().lower() in _TRUTHY,
    )
