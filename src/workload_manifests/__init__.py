# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolution of the workload manifests an SDK installation should load."""

from __future__ import annotations

from .config import ResolverSettings
from .errors import (
    ManifestNotFoundError,
    ResolverConfigurationError,
    WorkloadManifestError,
    WorkloadManifestFormatError,
    WorkloadSetNotFoundError,
)
from .fingerprint import manifest_fingerprint
from .interfaces import WorkloadManifestProvider
from .models import ManifestSpecifier, ReadableWorkloadManifest, WorkloadSet, WorkloadVersionInfo
from .provider import SdkDirectoryWorkloadManifestProvider, TempDirectoryWorkloadManifestProvider
from .versioning import (
    ManifestId,
    ManifestVersion,
    ReleaseVersion,
    SdkFeatureBand,
    get_workload_set_feature_band,
    parse_workload_set_version,
    workload_set_version_from_package_version,
)

__all__ = [
    "ManifestId",
    "ManifestNotFoundError",
    "ManifestSpecifier",
    "ManifestVersion",
    "ReadableWorkloadManifest",
    "ReleaseVersion",
    "ResolverConfigurationError",
    "ResolverSettings",
    "SdkDirectoryWorkloadManifestProvider",
    "SdkFeatureBand",
    "TempDirectoryWorkloadManifestProvider",
    "WorkloadManifestError",
    "WorkloadManifestFormatError",
    "WorkloadManifestProvider",
    "WorkloadSet",
    "WorkloadSetNotFoundError",
    "WorkloadVersionInfo",
    "get_workload_set_feature_band",
    "manifest_fingerprint",
    "parse_workload_set_version",
    "workload_set_version_from_package_version",
]
