# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Interface consumed by layers that query the resolved workload manifests."""

# pylint: disable=too-few-public-methods -- Protocol definitions intentionally expose minimal method surfaces.

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .models import ReadableWorkloadManifest, WorkloadSet, WorkloadVersionInfo
from .versioning import SdkFeatureBand


@runtime_checkable
class WorkloadManifestProvider(Protocol):
    """Source of the workload manifests that should be loaded for an SDK."""

    def get_manifests(self) -> tuple[ReadableWorkloadManifest, ...]:
        """Return the resolved manifests in their stable order."""

        raise NotImplementedError

    def get_workload_version(self) -> str:
        """Return the workload version string for the resolved manifests."""

        raise NotImplementedError

    def get_workload_version_info(self) -> WorkloadVersionInfo:
        """Return the workload version together with its installation status."""

        raise NotImplementedError

    def get_sdk_feature_band(self) -> str:
        """Return the SDK feature band manifests are resolved for."""

        raise NotImplementedError

    def get_available_workload_sets(self, feature_band: SdkFeatureBand | None = None) -> dict[str, WorkloadSet]:
        """Return installed workload sets keyed by version."""

        raise NotImplementedError

    def refresh_workload_manifests(self) -> None:
        """Recompute the selection after installer state changed."""

        raise NotImplementedError


__all__ = ["WorkloadManifestProvider"]
