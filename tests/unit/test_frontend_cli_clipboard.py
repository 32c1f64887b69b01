"""Unit tests for the clipboard helpers."""

from unittest.mock import patch

from keyseal.frontend.cli.clipboard import copy_packaged, copy_to_clipboard


def test_copy_to_clipboard_delegates():
    with patch("keyseal.frontend.cli.clipboard.pyperclip") as mock_clip:
        copy_to_clipboard("text")
    mock_clip.copy.assert_called_once_with("text")


def test_copy_packaged_copies_unpadded_base64():
    with patch("keyseal.frontend.cli.clipboard.pyperclip") as mock_clip:
        text = copy_packaged(b"\xff\xfe")
    assert text == "//4"
    mock_clip.copy.assert_called_once_with("//4")
