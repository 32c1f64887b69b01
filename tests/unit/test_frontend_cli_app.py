"""Unit tests for the keyseal Textual app and console entry."""

import pytest
from unittest.mock import patch

from textual.widgets import Input

from keyseal.core.config import SessionConfig
from keyseal.core.exceptions import RandomnessUnavailableError
from keyseal.frontend.cli.app import KeysealApp, build_parser, main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("KEYSEAL_CONTEXT_LABEL", "KEYSEAL_SALT", "KEYSEAL_DEFAULT_MESSAGE", "KEYSEAL_PARALLEL_KEYGEN"):
        monkeypatch.delenv(name, raising=False)


# --- Textual app ---

@pytest.mark.asyncio
async def test_run_button_shows_report():
    app = KeysealApp(config=SessionConfig())
    async with app.run_test() as pilot:
        app.query_one("#plain", Input).value = "Hi Bob"
        await pilot.click("#run")
        await pilot.pause()

        assert app.last_result is not None
        assert app.last_result.decrypted == "Hi Bob"
        assert "Decrypted text:\nHi Bob" in app.last_report


@pytest.mark.asyncio
async def test_empty_input_uses_default_message():
    app = KeysealApp(config=SessionConfig())
    async with app.run_test() as pilot:
        await pilot.click("#run")
        await pilot.pause()

        assert app.last_result.plaintext == "Hello from Alice!"


@pytest.mark.asyncio
async def test_error_is_rendered():
    app = KeysealApp(config=SessionConfig())
    with patch(
        "keyseal.frontend.cli.app.run_session",
        side_effect=RandomnessUnavailableError("secure random source unavailable"),
    ):
        async with app.run_test() as pilot:
            await pilot.click("#run")
            await pilot.pause()

            assert app.last_result is None
            assert app.last_report == "Error: secure random source unavailable"


# --- Console entry ---

def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.message == ""
    assert args.no_tui is False
    assert args.copy is False
    assert args.log_level == "WARNING"


def test_main_no_tui_prints_report(capsys):
    assert main(["--no-tui", "-m", "console hello"]) == 0
    out = capsys.readouterr().out
    assert "Alice public (base64):" in out
    assert "Decrypted text:\nconsole hello" in out


def test_main_copy(capsys):
    with patch("keyseal.frontend.cli.app.copy_packaged") as mock_copy:
        assert main(["--copy"]) == 0
    mock_copy.assert_called_once()
    assert "Decrypted text:\nHello from Alice!" in capsys.readouterr().out


def test_main_rejects_unencodable_message(capsys):
    assert main(["--no-tui", "-m", "caf\udce9"]) == 1
    captured = capsys.readouterr()
    assert "Error: plaintext is not encodable as UTF-8" in captured.err
    assert captured.out == ""


def test_main_reports_core_error(capsys):
    with patch(
        "keyseal.frontend.cli.app.run_session",
        side_effect=RandomnessUnavailableError("no entropy"),
    ):
        assert main(["--no-tui"]) == 1
    assert "Error: no entropy" in capsys.readouterr().err


def test_main_bad_log_level(capsys):
    assert main(["--no-tui", "--log-level", "LOUD"]) == 2
    assert "unknown log level" in capsys.readouterr().err


def test_main_bad_config(monkeypatch, capsys):
    monkeypatch.setenv("KEYSEAL_SALT", "zz")
    assert main(["--no-tui"]) == 2
    assert "KEYSEAL_SALT" in capsys.readouterr().err
