# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for install state parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from workload_manifests.errors import WorkloadManifestFormatError
from workload_manifests.install_state import InstallStateContents, install_state_path
from workload_manifests.versioning import ManifestId, SdkFeatureBand

BAND = SdkFeatureBand("8.0.100")


def test_install_state_path_layout(tmp_path: Path) -> None:
    assert install_state_path(tmp_path, BAND, "X64") == (
        tmp_path / "metadata" / "workloads" / "X64" / "8.0.100" / "InstallState" / "default.json"
    )


def test_missing_file_is_empty_state(tmp_path: Path) -> None:
    state = InstallStateContents.from_path(tmp_path / "default.json")

    assert state.workload_version is None
    assert state.manifests is None
    assert state.use_workload_sets is None
    assert state.manifests_as_workload_set(BAND, source=tmp_path) is None


def test_reads_aliases_and_ignores_unknown_keys(tmp_path: Path) -> None:
    path = tmp_path / "default.json"
    path.write_text(
        """{
            "workloadVersion": "8.0.101",
            "useWorkloadSets": true,
            "manifests": {"A": "1.0.0/8.0.100",},
            "installedWorkloadSets": ["8.0.101"]
        }""",
        encoding="utf-8",
    )

    state = InstallStateContents.from_path(path)

    assert state.workload_version == "8.0.101"
    assert state.use_workload_sets is True
    overrides = state.manifests_as_workload_set(BAND, source=path)
    assert overrides is not None
    assert overrides.version is None
    assert list(overrides.manifest_versions) == [ManifestId("A")]


@pytest.mark.parametrize("payload", ['{"useWorkloadSets": "maybe"}', '{"manifests": ["A"]}', "[]"])
def test_invalid_install_state_is_a_format_error(tmp_path: Path, payload: str) -> None:
    path = tmp_path / "default.json"
    path.write_text(payload, encoding="utf-8")

    with pytest.raises(WorkloadManifestFormatError):
        InstallStateContents.from_path(path)
