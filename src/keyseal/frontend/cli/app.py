"""Textual front end for the keyseal exchange demo.

Start here with `python -m keyseal.frontend.cli.app`, or pass `--no-tui`
to print a single report to stdout.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from textual import on
from textual.app import App, ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Button, Footer, Header, Input, Static

from keyseal.core.config import SessionConfig, load_config
from keyseal.core.exceptions import KeysealError
from keyseal.core.session import SessionResult, run_session
from keyseal.frontend.cli.clipboard import copy_packaged
from keyseal.frontend.cli.logging_config import configure_logging, parse_level
from keyseal.frontend.cli.report import render_error, render_report
from keyseal.security.entropy import RandomSource

logger = logging.getLogger(__name__)


class KeysealApp(App):
    """One input, one button, one result pane."""

    TITLE = "keyseal"

    CSS = """
    #controls { height: auto; padding: 0 1; }
    #plain { width: 1fr; }
    #info { padding: 1 1; }
    """

    # ctrl chords so typing in the input never triggers them
    BINDINGS = [
        ("ctrl+r", "run_exchange", "Run"),
        ("ctrl+y", "copy", "Copy sealed"),
    ]

    def __init__(self, config: SessionConfig | None = None, random_source: Optional[RandomSource] = None):
        super().__init__()
        self.config = config or load_config()
        self.random_source = random_source
        self.last_result: SessionResult | None = None
        self.last_report: str = ""

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="controls"):
            yield Input(placeholder=self.config.default_message, id="plain")
            yield Button("Run exchange", id="run", variant="primary")
        with VerticalScroll():
            yield Static("", id="info", markup=False)
        yield Footer()

    def _show(self, text: str) -> None:
        self.last_report = text
        self.query_one("#info", Static).update(text)

    @on(Button.Pressed, "#run")
    @on(Input.Submitted, "#plain")
    def handle_run(self) -> None:
        self.action_run_exchange()

    def action_run_exchange(self) -> None:
        plaintext = self.query_one("#plain", Input).value
        try:
            result = run_session(plaintext, self.config, self.random_source)
        except KeysealError as e:
            self.last_result = None
            self._show(render_error(e))
            return
        self.last_result = result
        self._show(render_report(result))

    def action_copy(self) -> None:  # pragma: no cover - needs a clipboard
        if self.last_result is None:
            self.notify("Run the exchange first", severity="warning")
            return
        try:
            copy_packaged(self.last_result.packaged)
            self.notify("Sealed message copied to clipboard!")
        except Exception:
            self.notify("Could not copy to clipboard", severity="error")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="keyseal",
        description="X25519 + HKDF + AES-256-GCM round-trip demo between Alice and Bob.",
    )
    parser.add_argument("-m", "--message", default="", help="plaintext to seal (default message if empty)")
    parser.add_argument("--no-tui", action="store_true", help="print one report instead of starting the TUI")
    parser.add_argument("--copy", action="store_true", help="copy the sealed message (base64) to the clipboard")
    parser.add_argument("--log-level", default="WARNING", help="logging level (default: WARNING)")
    return parser


def run_once(message: str, config: SessionConfig, copy: bool = False) -> int:
    try:
        result = run_session(message, config)
    except KeysealError as e:
        print(render_error(e), file=sys.stderr)
        return 1

    print(render_report(result), end="")
    if copy:
        try:
            copy_packaged(result.packaged)
        except Exception as e:  # pyperclip raises its own exception types per platform
            logger.warning("could not copy to clipboard: %s", e)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        configure_logging(parse_level(args.log_level))
        config = load_config()
    except (ValueError, KeysealError) as e:
        print(render_error(e), file=sys.stderr)
        return 2

    if args.no_tui or args.copy:
        return run_once(args.message, config, copy=args.copy)

    KeysealApp(config=config).run()  # pragma: no cover
    return 0  # pragma: no cover


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
