# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Locate the optional localization catalog shipped beside a workload manifest."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import BinaryIO, Final

LOCALIZATION_DIRECTORY: Final[str] = "localize"
_LOCALE_VARIABLES: Final[tuple[str, ...]] = ("LC_ALL", "LC_MESSAGES", "LANG")


def current_ui_culture(env: Mapping[str, str] | None = None) -> str | None:
    """Return the UI culture name derived from POSIX locale variables.

    ``de_DE.UTF-8`` becomes ``de-DE``; ``C`` and ``POSIX`` mean no culture.
    """

    environment = env if env is not None else os.environ
    for variable in _LOCALE_VARIABLES:
        raw = environment.get(variable)
        if not raw:
            continue
        name = raw.split(".", 1)[0].split("@", 1)[0]
        if name in {"C", "POSIX"}:
            return None
        return name.replace("_", "-")
    return None


def culture_fallback_chain(culture: str) -> tuple[str, ...]:
    """Return ``culture`` followed by its parent cultures (``zh-Hant-TW`` → ``zh-Hant`` → ``zh``)."""

    parts = culture.split("-")
    return tuple("-".join(parts[:count]) for count in range(len(parts), 0, -1))


def localization_catalog_path(manifest_path: Path, culture: str | None) -> Path | None:
    """Return the localization catalog for ``manifest_path`` in ``culture``, if present.

    Args:
        manifest_path: Path to ``WorkloadManifest.json``.
        culture: Culture name such as ``fr-FR``; ``None`` disables lookup.

    Returns:
        Path | None: Existing catalog path, or ``None`` when no catalog matches.
    """

    if not culture:
        return None
    localize_dir = manifest_path.parent / LOCALIZATION_DIRECTORY
    if not localize_dir.is_dir():
        return None
    stem = manifest_path.stem
    for candidate_culture in culture_fallback_chain(culture):
        candidate = localize_dir / f"{stem}.{candidate_culture}.json"
        if candidate.is_file():
            return candidate
    return None


def open_localization_catalog(manifest_path: Path, culture: str | None = None) -> BinaryIO | None:
    """Open the localization catalog for ``manifest_path`` when one exists."""

    path = localization_catalog_path(manifest_path, culture if culture is not None else current_ui_culture())
    if path is None:
        return None
    return path.open("rb")


__all__ = [
    "LOCALIZATION_DIRECTORY",
    "culture_fallback_chain",
    "current_ui_culture",
    "localization_catalog_path",
    "open_localization_catalog",
]
