# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised while resolving workload manifests."""

from __future__ import annotations


class WorkloadManifestError(Exception):
    """Base class for every error raised by the manifest resolver."""


class ResolverConfigurationError(WorkloadManifestError, ValueError):
    """Raised when a resolver is constructed with invalid arguments."""


class WorkloadSetNotFoundError(WorkloadManifestError, FileNotFoundError):
    """Raised when a pinned workload set version is not installed."""


class ManifestNotFoundError(WorkloadManifestError, FileNotFoundError):
    """Raised when a workload set or install state references a missing manifest."""


class WorkloadManifestFormatError(WorkloadManifestError):
    """Raised when a workload set, install state or ``global.json`` document is malformed."""


__all__ = (
    "ManifestNotFoundError",
    "ResolverConfigurationError",
    "WorkloadManifestError",
    "WorkloadManifestFormatError",
    "WorkloadSetNotFoundError",
)
