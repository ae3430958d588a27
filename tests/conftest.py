# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import pytest

from workload_manifests.config import ResolverSettings
from workload_manifests.provider import SdkDirectoryWorkloadManifestProvider


def _write_json(path: Path, payload: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return path


class FakeSdk:
    """Build a throwaway SDK installation tree under ``tmp_path``."""

    def __init__(self, base: Path, sdk_version: str = "8.0.100") -> None:
        self.root = base / "dotnet"
        self.sdk_version = sdk_version
        self.manifests_root = self.root / "sdk-manifests"
        self.root.mkdir(parents=True, exist_ok=True)

    def add_manifest(
        self,
        band: str,
        manifest_id: str,
        version: str | None = None,
        *,
        root: Path | None = None,
        declared_version: str | None = None,
    ) -> Path:
        """Create ``<root>/<band>/<id>[/<version>]/WorkloadManifest.json``."""

        directory = (root or self.manifests_root) / band / manifest_id
        if version is not None:
            directory = directory / version
        _write_json(
            directory / "WorkloadManifest.json",
            {"version": declared_version or version or "1.0.0", "workloads": {}, "packs": {}},
        )
        return directory

    def add_workload_set(
        self,
        band: str,
        version: str,
        entries: Mapping[str, str],
        *,
        filename: str = "microsoft.net.workloads.workloadset.json",
        baseline: bool = False,
        root: Path | None = None,
    ) -> Path:
        directory = (root or self.manifests_root) / band / "workloadsets" / version
        _write_json(directory / filename, dict(entries))
        if baseline:
            _write_json(directory / "baseline.workloadset.json", {})
        return directory

    def write_install_state(self, band: str, payload: Mapping[str, Any], *, architecture: str = "X64") -> Path:
        path = self.root / "metadata" / "workloads" / architecture / band / "InstallState" / "default.json"
        return _write_json(path, dict(payload))

    def write_known_manifests(self, manifest_ids: Iterable[str]) -> Path:
        path = self.root / "sdk" / self.sdk_version / "KnownWorkloadManifests.txt"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(manifest_ids) + "\n", encoding="utf-8")
        return path

    def write_global_json(self, directory: Path, workload_version: str | None) -> Path:
        sdk_section: dict[str, str] = {"version": self.sdk_version}
        if workload_version is not None:
            sdk_section["workloadVersion"] = workload_version
        return _write_json(directory / "global.json", {"sdk": sdk_section})

    def settings(self, **overrides: Any) -> ResolverSettings:
        payload: dict[str, Any] = {"architecture": "X64"}
        payload.update(overrides)
        return ResolverSettings(**payload)

    def provider(self, **kwargs: Any) -> SdkDirectoryWorkloadManifestProvider:
        kwargs.setdefault("settings", self.settings())
        return SdkDirectoryWorkloadManifestProvider(self.root, self.sdk_version, **kwargs)


@pytest.fixture
def fake_sdk(tmp_path: Path) -> FakeSdk:
    """Return an empty SDK tree for feature band ``8.0.100``."""

    return FakeSdk(tmp_path)


@pytest.fixture
def write_json() -> Any:
    return _write_json
