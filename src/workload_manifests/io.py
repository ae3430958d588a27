# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""I/O helpers for reading the JSON documents found in an SDK installation.

SDK JSON files (``global.json``, install state, workload set files) are written
by humans and installers alike and may contain ``//`` or ``/* */`` comments and
trailing commas. :func:`load_lenient_json` normalises those before handing the
text to :mod:`json`.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Final, TypeAlias, cast

from .errors import WorkloadManifestFormatError

JSONPrimitive: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONPrimitive | list["JSONValue"] | dict[str, "JSONValue"]

GLOBAL_JSON_FILENAME: Final[str] = "global.json"
WORKLOAD_MANIFEST_FILENAME: Final[str] = "WorkloadManifest.json"


def strip_json_extensions(text: str) -> str:
    """Remove comments and trailing commas from ``text`` outside string literals.

    Args:
        text: Raw JSON-with-comments document.

    Returns:
        str: Text acceptable to :func:`json.loads`.
    """

    output: list[str] = []
    pending_comma: int | None = None
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char == '"':
            end = index + 1
            while end < length and text[end] != '"':
                end += 2 if text[end] == "\\" else 1
            output.append(text[index : end + 1])
            pending_comma = None
            index = end + 1
            continue
        if char == "/" and index + 1 < length and text[index + 1] == "/":
            newline = text.find("\n", index)
            index = length if newline == -1 else newline
            continue
        if char == "/" and index + 1 < length and text[index + 1] == "*":
            close = text.find("*/", index + 2)
            index = length if close == -1 else close + 2
            output.append(" ")
            continue
        if char.isspace():
            output.append(char)
            index += 1
            continue
        if char in "}]" and pending_comma is not None:
            output[pending_comma] = ""
        pending_comma = len(output) if char == "," else None
        output.append(char)
        index += 1
    return "".join(output)


def load_lenient_json(path: Path) -> JSONValue:
    """Load a JSON document that may contain comments and trailing commas.

    Args:
        path: Filesystem path to the JSON document.

    Returns:
        JSONValue: Parsed JSON value.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        WorkloadManifestFormatError: If the document cannot be parsed.
    """

    if not path.exists():
        raise FileNotFoundError(path)
    text = path.read_text(encoding="utf-8-sig")
    try:
        return cast(JSONValue, json.loads(strip_json_extensions(text)))
    except json.JSONDecodeError as exc:
        raise WorkloadManifestFormatError(f"{path}: failed to parse JSON ({exc.msg} at line {exc.lineno})") from exc


def load_json_object(path: Path) -> Mapping[str, JSONValue]:
    """Load ``path`` and ensure the document is a JSON object.

    Raises:
        WorkloadManifestFormatError: If the document is not a JSON object.
    """

    payload = load_lenient_json(path)
    if not isinstance(payload, dict):
        raise WorkloadManifestFormatError(f"{path}: expected a JSON object")
    return payload


def find_global_json(start_dir: Path | str | None) -> Path | None:
    """Return the closest ``global.json`` at or above ``start_dir``."""

    if start_dir is None:
        return None
    directory = Path(start_dir).absolute()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / GLOBAL_JSON_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_global_json_workload_version(global_json_path: Path | str | None) -> str | None:
    """Return the ``sdk.workloadVersion`` value pinned by a ``global.json`` file.

    Args:
        global_json_path: Location of ``global.json`` or ``None``.

    Returns:
        str | None: The pinned workload set version, or ``None`` when absent.

    Raises:
        WorkloadManifestFormatError: If the file is malformed or the value is not a string.
    """

    if global_json_path is None:
        return None
    path = Path(global_json_path)
    if not path.is_file():
        return None
    document = load_json_object(path)
    sdk_section = document.get("sdk")
    if not isinstance(sdk_section, dict):
        return None
    workload_version = sdk_section.get("workloadVersion")
    if workload_version is None:
        return None
    if not isinstance(workload_version, str):
        raise WorkloadManifestFormatError(f"{path}: 'sdk.workloadVersion' must be a string")
    return workload_version or None


def sniff_manifest_version(manifest_path: Path) -> str | None:
    """Return the ``version`` declared by a workload manifest, if readable.

    Failures are not errors here: the caller falls back to the directory name.
    """

    try:
        document = load_lenient_json(manifest_path)
    except (OSError, UnicodeDecodeError, WorkloadManifestFormatError):
        return None
    if not isinstance(document, dict):
        return None
    version = document.get("version")
    if isinstance(version, str) and version:
        return version
    return None


__all__ = [
    "GLOBAL_JSON_FILENAME",
    "JSONValue",
    "WORKLOAD_MANIFEST_FILENAME",
    "find_global_json",
    "load_json_object",
    "load_lenient_json",
    "read_global_json_workload_version",
    "sniff_manifest_version",
    "strip_json_extensions",
]
