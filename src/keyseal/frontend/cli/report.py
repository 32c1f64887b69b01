"""Text rendering of an exchange result for the frontend."""

from __future__ import annotations

import base64

from keyseal.core.session import SessionResult


def b64encode_unpadded(data: bytes) -> str:
    # No '=' padding and no line wraps.
    return base64.b64encode(data).decode("ascii").rstrip("=")


def render_report(result: SessionResult) -> str:
    sections = [
        ("Alice public (base64)", b64encode_unpadded(result.alice_public)),
        ("Bob public (base64)", b64encode_unpadded(result.bob_public)),
        ("Session key (HKDF, base64)", b64encode_unpadded(result.session_key)),
        ("Encrypted (nonce+cipher, base64)", b64encode_unpadded(result.packaged)),
        ("Decrypted text", result.decrypted),
    ]
    return "\n\n".join(f"{title}:\n{value}" for title, value in sections) + "\n"


def render_error(error: Exception) -> str:
    return f"Error: {error}"
