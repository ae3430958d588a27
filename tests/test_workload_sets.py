# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for workload set parsing and discovery."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from workload_manifests.errors import WorkloadManifestFormatError
from workload_manifests.models import WorkloadSet
from workload_manifests.versioning import ManifestId, ManifestVersion, SdkFeatureBand
from workload_manifests.workload_sets import WorkloadSetRepository, highest_workload_set

if TYPE_CHECKING:
    from conftest import FakeSdk

BAND = SdkFeatureBand("8.0.100")


def test_from_dictionary_parses_version_and_band() -> None:
    workload_set = WorkloadSet.from_dictionary_for_json(
        {"A": "1.0.0/8.0.100", "B": "2.0.0"},
        SdkFeatureBand("8.0.200"),
        version="8.0.201",
    )

    assert workload_set.version == "8.0.201"
    assert workload_set.manifest_versions[ManifestId("a")] == (ManifestVersion.parse("1.0.0"), BAND)
    assert workload_set.manifest_versions[ManifestId("B")][1] == SdkFeatureBand("8.0.200")
    assert workload_set.to_dictionary_for_json() == {"A": "1.0.0/8.0.100", "B": "2.0.0/8.0.200"}
    assert [str(specifier) for specifier in workload_set.specifiers()] == ["A: 1.0.0/8.0.100", "B: 2.0.0/8.0.200"]


@pytest.mark.parametrize("entry", [5, "not-a-version/8.0.100", "1.0.0/8.0"])
def test_from_dictionary_rejects_invalid_entries(entry: object) -> None:
    with pytest.raises(WorkloadManifestFormatError, match="'A'"):
        WorkloadSet.from_dictionary_for_json({"A": entry}, BAND)  # type: ignore[dict-item]


def test_workload_set_is_read_only() -> None:
    workload_set = WorkloadSet.from_dictionary_for_json({"A": "1.0.0"}, BAND)

    with pytest.raises(TypeError):
        workload_set.manifest_versions[ManifestId("B")] = (ManifestVersion.parse("1.0.0"), BAND)  # type: ignore[index]


def test_folder_merges_files_with_later_file_winning(fake_sdk: FakeSdk) -> None:
    directory = fake_sdk.add_workload_set("8.0.100", "8.0.100", {"A": "1.0.0", "B": "1.0.0"}, filename="a.workloadset.json")
    fake_sdk.add_workload_set("8.0.100", "8.0.100", {"C": "1.0.0"}, filename="b.workloadset.json")
    fake_sdk.add_workload_set("8.0.100", "8.0.100", {"B": "2.0.0"}, filename="c.workloadset.json")
    (directory / "notes.json").write_text("{}", encoding="utf-8")

    workload_set = WorkloadSet.from_workload_set_folder(directory, "8.0.100", BAND)

    assert len(workload_set.manifest_versions) == 3
    assert workload_set.manifest_versions[ManifestId("B")][0] == ManifestVersion.parse("2.0.0")
    assert not workload_set.is_baseline_workload_set


def test_folder_marks_baseline(fake_sdk: FakeSdk) -> None:
    directory = fake_sdk.add_workload_set("8.0.100", "8.0.100", {"A": "1.0.0"}, baseline=True)

    assert WorkloadSet.from_workload_set_folder(directory, "8.0.100", BAND).is_baseline_workload_set


def test_folder_without_workload_set_files_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(WorkloadManifestFormatError, match="No workload set information"):
        WorkloadSet.from_workload_set_folder(tmp_path, "8.0.100", BAND)


def test_repository_lists_sets_for_exact_band(fake_sdk: FakeSdk) -> None:
    fake_sdk.add_workload_set("8.0.100", "8.0.100", {"A": "1.0.0"})
    fake_sdk.add_workload_set("8.0.100", "8.0.101", {"A": "1.0.1"})
    fake_sdk.add_workload_set("8.0.200", "8.0.201", {"A": "2.0.0"})

    available = WorkloadSetRepository((fake_sdk.manifests_root,)).available_workload_sets(BAND)

    assert sorted(available) == ["8.0.100", "8.0.101"]
    assert available["8.0.101"].version == "8.0.101"


def test_repository_prefers_first_root(fake_sdk: FakeSdk, tmp_path: Path) -> None:
    first_root = tmp_path / "first"
    fake_sdk.add_workload_set("8.0.100", "8.0.101", {"A": "9.9.9"}, root=first_root)
    fake_sdk.add_workload_set("8.0.100", "8.0.101", {"A": "1.0.1"})

    available = WorkloadSetRepository((first_root, fake_sdk.manifests_root)).available_workload_sets(BAND)

    assert available["8.0.101"].to_dictionary_for_json() == {"A": "9.9.9/8.0.100"}


def test_repository_lists_all_bands(fake_sdk: FakeSdk) -> None:
    fake_sdk.add_workload_set("8.0.100", "8.0.100", {"A": "1.0.0"})
    fake_sdk.add_workload_set("8.0.200", "8.0.201", {"A": "2.0.0"})
    fake_sdk.add_workload_set("8.0.100-rtm.1", "8.0.100-rtm", {"A": "1.0.0"})

    available = WorkloadSetRepository((fake_sdk.manifests_root,)).all_available_workload_sets()

    assert sorted(available) == ["8.0.100", "8.0.201"]


def test_highest_workload_set_skips_unparsable_versions() -> None:
    sets = {
        version: WorkloadSet.from_dictionary_for_json({}, BAND, version=version)
        for version in ("8.0.100", "8.0.100.2", "8.0.100-preview.1", "custom")
    }

    highest = highest_workload_set(sets)

    assert highest is not None
    assert highest.version == "8.0.100.2"
    assert highest_workload_set({}) is None
