# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich and JSON rendering for resolver results."""

from __future__ import annotations

import json
from functools import cmp_to_key
from collections.abc import Mapping, Sequence
from typing import Any

from rich import box
from rich.table import Table

from ..models import ReadableWorkloadManifest, WorkloadSet, WorkloadVersionInfo
from ..versioning import ReleaseVersion, compare_versions


def manifests_payload(manifests: Sequence[ReadableWorkloadManifest]) -> list[dict[str, str]]:
    return [
        {
            "id": manifest.manifest_id,
            "version": manifest.manifest_version,
            "featureBand": manifest.manifest_feature_band,
            "directory": str(manifest.manifest_directory),
            "manifestPath": str(manifest.manifest_path),
        }
        for manifest in manifests
    ]


def version_payload(info: WorkloadVersionInfo) -> dict[str, Any]:
    return {
        "version": info.version,
        "isInstalled": info.is_installed,
        "workloadSetsEnabledWithoutWorkloadSet": info.workload_sets_enabled_without_workload_set,
        "globalJsonPath": str(info.global_json_path) if info.global_json_path is not None else None,
    }


def sorted_workload_sets(workload_sets: Mapping[str, WorkloadSet]) -> list[tuple[str, WorkloadSet]]:
    """Return ``workload_sets`` newest first; unparsable versions sort last by name."""

    versioned: list[tuple[str, WorkloadSet]] = []
    unversioned: list[tuple[str, WorkloadSet]] = []
    for version, workload_set in workload_sets.items():
        bucket = unversioned if ReleaseVersion.try_parse(version) is None else versioned
        bucket.append((version, workload_set))
    by_version = cmp_to_key(compare_versions)
    versioned.sort(key=lambda entry: by_version(entry[0]), reverse=True)
    unversioned.sort(key=lambda entry: entry[0])
    return versioned + unversioned


def workload_sets_payload(workload_sets: Mapping[str, WorkloadSet]) -> list[dict[str, Any]]:
    return [
        {
            "version": version,
            "baseline": workload_set.is_baseline_workload_set,
            "manifests": workload_set.to_dictionary_for_json(),
        }
        for version, workload_set in sorted_workload_sets(workload_sets)
    ]


def dump_json(payload: object) -> str:
    return json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False)


def build_manifests_table(manifests: Sequence[ReadableWorkloadManifest], *, color: bool) -> Table:
    """Return a table listing ``manifests`` in resolution order."""

    table = Table(
        title="Workload Manifests",
        box=box.ROUNDED if color else box.SIMPLE,
        show_header=True,
        header_style="bold" if color else None,
    )
    table.add_column("Id", style="cyan" if color else None)
    table.add_column("Version")
    table.add_column("Feature Band")
    table.add_column("Directory", overflow="fold")
    for manifest in manifests:
        table.add_row(
            manifest.manifest_id,
            manifest.manifest_version,
            manifest.manifest_feature_band,
            str(manifest.manifest_directory),
        )
    return table


def build_workload_sets_table(workload_sets: Mapping[str, WorkloadSet], *, color: bool) -> Table:
    """Return a table summarising installed workload sets."""

    table = Table(
        title="Workload Sets",
        box=box.ROUNDED if color else box.SIMPLE,
        show_header=True,
        header_style="bold" if color else None,
    )
    table.add_column("Version", style="cyan" if color else None)
    table.add_column("Manifests", justify="right")
    table.add_column("Baseline")
    for version, workload_set in sorted_workload_sets(workload_sets):
        table.add_row(
            version,
            str(len(workload_set.manifest_versions)),
            "yes" if workload_set.is_baseline_workload_set else "",
        )
    return table


__all__ = [
    "build_manifests_table",
    "build_workload_sets_table",
    "dump_json",
    "manifests_payload",
    "sorted_workload_sets",
    "version_payload",
    "workload_sets_payload",
]
