# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for console status lines and debug trace setup."""

from __future__ import annotations

import logging

from workload_manifests.logging import FAIL, OK, PACKAGE_LOGGER_NAME, console_for, enable_debug_logging


def test_tone_render_respects_emoji_and_color() -> None:
    plain = OK.render("done", use_emoji=False, use_color=False)
    decorated = FAIL.render("broken", use_emoji=True, use_color=True)

    assert plain.plain == "done"
    assert not plain.spans
    assert decorated.plain == "❌ broken"
    assert decorated.spans


def test_console_for_is_cached_per_preferences() -> None:
    assert console_for(color=False, emoji=False) is console_for(color=False, emoji=False)
    assert console_for(color=False, emoji=True) is not console_for(color=False, emoji=False)


def test_enable_debug_logging_is_idempotent() -> None:
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    before = list(logger.handlers)
    try:
        enable_debug_logging()
        enable_debug_logging()

        added = [handler for handler in logger.handlers if handler not in before]
        assert len(added) <= 1
        assert logger.level == logging.DEBUG
    finally:
        for handler in logger.handlers[len(before) :]:
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
        logger.propagate = True
        if hasattr(logger, "_workload_manifests_debug_configured"):
            delattr(logger, "_workload_manifests_debug_configured")
