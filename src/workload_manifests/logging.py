# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console output for the command line and opt-in debug traces for the library."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from functools import lru_cache
from typing import Final

from rich.console import Console
from rich.rule import Rule
from rich.text import Text

PACKAGE_LOGGER_NAME: Final[str] = "workload_manifests"
_DEBUG_FLAG: Final[str] = "_workload_manifests_debug_configured"


@dataclass(frozen=True, slots=True)
class Tone:
    """Prefix glyph and Rich style of one kind of status line."""

    glyph: str
    style: str

    def render(self, msg: str, *, use_emoji: bool, use_color: bool) -> Text:
        text = Text(f"{self.glyph} {msg}" if use_emoji else msg)
        if use_color:
            text.stylize(self.style)
        return text


INFO: Final[Tone] = Tone("ℹ️", "cyan")
OK: Final[Tone] = Tone("✅", "green")
WARN: Final[Tone] = Tone("⚠️", "yellow")
FAIL: Final[Tone] = Tone("❌", "bold red")


def detect_tty() -> bool:
    """Return ``True`` when stdout is a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=8)
def _build_console(color: bool, emoji: bool, tty: bool) -> Console:
    colored = color and tty
    return Console(
        color_system="auto" if colored else None,
        force_terminal=tty,
        no_color=not colored,
        emoji=emoji,
        highlight=False,
        soft_wrap=True,
    )


def console_for(*, color: bool, emoji: bool) -> Console:
    """Return the shared console for the given output preferences.

    Consoles are cached per preference pair and per TTY state, so a test runner
    swapping stdout gets a console bound to the new stream.
    """

    return _build_console(color, emoji, detect_tty())


def report(tone: Tone, msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print ``msg`` as a status line in ``tone``."""

    color = detect_tty() if use_color is None else use_color
    console_for(color=color, emoji=use_emoji).print(tone.render(msg, use_emoji=use_emoji, use_color=color))


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    report(INFO, msg, use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    report(OK, msg, use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    report(WARN, msg, use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    report(FAIL, msg, use_emoji=use_emoji, use_color=use_color)


def section(title: str, *, use_color: bool) -> None:
    """Print a heading above a block of output."""

    console = console_for(color=use_color, emoji=False)
    if use_color:
        console.print()
        console.print(Rule(title))
    else:
        console.print(f"\n--- {title} ---")


def enable_debug_logging() -> None:
    """Stream resolver traces to stderr; repeated calls are no-ops."""

    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if getattr(logger, _DEBUG_FLAG, False):
        return
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    setattr(logger, _DEBUG_FLAG, True)


__all__ = [
    "FAIL",
    "INFO",
    "OK",
    "PACKAGE_LOGGER_NAME",
    "Tone",
    "WARN",
    "console_for",
    "detect_tty",
    "enable_debug_logging",
    "fail",
    "info",
    "ok",
    "report",
    "section",
    "warn",
]
