"""Clipboard utilities for the CLI frontend.

Uses pyperclip for cross-platform clipboard access.
"""

from __future__ import annotations

import pyperclip

from .report import b64encode_unpadded


def copy_to_clipboard(text: str) -> None:
    """Copy text to the system clipboard.

    Raises:
        pyperclip.PyperclipException: If clipboard access fails.
    """
    pyperclip.copy(text)


def copy_packaged(packaged: bytes) -> str:
    """Copy the Base64 form of a packaged message and return it."""
    text = b64encode_unpadded(packaged)
    copy_to_clipboard(text)
    return text
