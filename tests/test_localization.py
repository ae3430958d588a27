# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for localization catalog lookup."""

from __future__ import annotations

from pathlib import Path

import pytest

from workload_manifests.localization import (
    culture_fallback_chain,
    current_ui_culture,
    localization_catalog_path,
)
from workload_manifests.models import ReadableWorkloadManifest


@pytest.mark.parametrize(
    ("env", "expected"),
    [
        ({"LANG": "de_DE.UTF-8"}, "de-DE"),
        ({"LC_ALL": "fr_FR@euro", "LANG": "de_DE.UTF-8"}, "fr-FR"),
        ({"LC_MESSAGES": "C"}, None),
        ({"LANG": "POSIX"}, None),
        ({}, None),
    ],
)
def test_current_ui_culture(env: dict[str, str], expected: str | None) -> None:
    assert current_ui_culture(env) == expected


def test_culture_fallback_chain() -> None:
    assert culture_fallback_chain("zh-Hant-TW") == ("zh-Hant-TW", "zh-Hant", "zh")


def test_catalog_lookup_falls_back_to_parent_culture(tmp_path: Path) -> None:
    manifest_path = tmp_path / "WorkloadManifest.json"
    manifest_path.write_text("{}", encoding="utf-8")
    localize = tmp_path / "localize"
    localize.mkdir()
    catalog = localize / "WorkloadManifest.de.json"
    catalog.write_text('{"workloads/android/description": "Android"}', encoding="utf-8")

    assert localization_catalog_path(manifest_path, "de-AT") == catalog
    assert localization_catalog_path(manifest_path, "fr-FR") is None
    assert localization_catalog_path(manifest_path, None) is None


def test_readable_manifest_opens_catalog(tmp_path: Path) -> None:
    manifest = ReadableWorkloadManifest.from_directory("A", tmp_path, feature_band="8.0.100", version="1.0.0")
    manifest.manifest_path.write_text("{}", encoding="utf-8")
    (tmp_path / "localize").mkdir()
    (tmp_path / "localize" / "WorkloadManifest.fr-FR.json").write_text("{}", encoding="utf-8")

    stream = manifest.open_localization_catalog("fr-FR")
    assert stream is not None
    with stream:
        assert stream.read() == b"{}"
    assert manifest.open_localization_catalog("ja-JP") is None
