# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for lenient JSON loading and global.json helpers."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from workload_manifests.errors import WorkloadManifestFormatError
from workload_manifests.io import (
    find_global_json,
    load_json_object,
    load_lenient_json,
    read_global_json_workload_version,
    sniff_manifest_version,
    strip_json_extensions,
)


def test_strip_json_extensions_removes_comments_and_trailing_commas() -> None:
    text = """
    {
        // line comment
        "a": [1, 2, ],  /* block
        comment */
        "b": {"c": "value",},
    }
    """

    assert json.loads(strip_json_extensions(text)) == {"a": [1, 2], "b": {"c": "value"}}


def test_strip_json_extensions_leaves_strings_untouched() -> None:
    text = '{"url": "https://example.com/*x*/", "quote": "say \\"hi\\", // ok,"}'

    assert json.loads(strip_json_extensions(text)) == {
        "url": "https://example.com/*x*/",
        "quote": 'say "hi", // ok,',
    }


def test_load_lenient_json_handles_bom(tmp_path: Path) -> None:
    path = tmp_path / "doc.json"
    path.write_bytes(b'\xef\xbb\xbf{"a": 1,}')

    assert load_lenient_json(path) == {"a": 1}


def test_load_lenient_json_errors(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_lenient_json(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(WorkloadManifestFormatError, match="broken.json"):
        load_lenient_json(broken)


def test_load_json_object_requires_object(tmp_path: Path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(WorkloadManifestFormatError, match="expected a JSON object"):
        load_json_object(path)


def test_find_global_json_walks_upward(tmp_path: Path) -> None:
    (tmp_path / "global.json").write_text("{}", encoding="utf-8")
    nested = tmp_path / "src" / "app"
    nested.mkdir(parents=True)

    assert find_global_json(nested) == (tmp_path / "global.json").absolute()
    assert find_global_json(None) is None


def test_read_global_json_workload_version(tmp_path: Path) -> None:
    path = tmp_path / "global.json"
    path.write_text(
        '{\n  // pinned\n  "sdk": {"version": "8.0.100", "workloadVersion": "8.0.100-manifests.abcd1234",},\n}',
        encoding="utf-8",
    )

    assert read_global_json_workload_version(path) == "8.0.100-manifests.abcd1234"


def test_read_global_json_without_pin(tmp_path: Path) -> None:
    path = tmp_path / "global.json"
    path.write_text('{"sdk": {"version": "8.0.100"}}', encoding="utf-8")

    assert read_global_json_workload_version(path) is None
    assert read_global_json_workload_version(tmp_path / "absent.json") is None
    assert read_global_json_workload_version(None) is None


def test_read_global_json_rejects_non_string_pin(tmp_path: Path) -> None:
    path = tmp_path / "global.json"
    path.write_text('{"sdk": {"workloadVersion": 8}}', encoding="utf-8")

    with pytest.raises(WorkloadManifestFormatError, match="workloadVersion"):
        read_global_json_workload_version(path)


def test_sniff_manifest_version(tmp_path: Path) -> None:
    good = tmp_path / "good.json"
    good.write_text('{"version": "34.0.1", "workloads": {}}', encoding="utf-8")
    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")

    assert sniff_manifest_version(good) == "34.0.1"
    assert sniff_manifest_version(broken) is None
    assert sniff_manifest_version(tmp_path / "missing.json") is None
