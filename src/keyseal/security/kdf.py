from typing import Optional, Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from keyseal.core.exceptions import OutputLengthUnsupportedError

HASH_LENGTH = 32
MAX_OUTPUT_LENGTH = 255 * HASH_LENGTH
DEFAULT_KEY_LENGTH = 32


def derive_key(
    shared_secret: bytes,
    context_label: Union[str, bytes],
    salt: Optional[bytes] = None,
    length: int = DEFAULT_KEY_LENGTH,
) -> bytes:
    """
    Derive a session key from a shared secret using HKDF-SHA256.
    A missing salt is treated as a zero-filled block of the hash length.
    Returns raw derived key bytes.
    """
    if isinstance(context_label, str):
        context_label = context_label.encode("utf-8")

    if length < 1 or length > MAX_OUTPUT_LENGTH:
        raise OutputLengthUnsupportedError(
            f"HKDF-SHA256 output length must be between 1 and {MAX_OUTPUT_LENGTH}, got {length}"
        )

    hkdf = HKDF(algorithm=hashes.SHA256(), length=length, salt=salt, info=context_label)
    return hkdf.derive(shared_secret)
