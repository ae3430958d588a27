# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Synthetic workload version derived from the resolved manifest set."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable
from typing import Final

from .models import ReadableWorkloadManifest
from .versioning import SdkFeatureBand

FINGERPRINT_BYTES: Final[int] = 4


def manifest_fingerprint(manifests: Iterable[ReadableWorkloadManifest], feature_band: SdkFeatureBand) -> str:
    """Return a stable version string identifying ``manifests``.

    The string changes exactly when the set of ``id``/``band``/``version``
    triples changes.

    Args:
        manifests: Resolved manifests.
        feature_band: Feature band of the running SDK.

    Returns:
        str: ``"{band}-manifests.{hex}"`` where ``hex`` is the first four bytes
        of the SHA-256 digest of the sorted triples.
    """

    ordered = sorted(manifests, key=lambda manifest: manifest.manifest_id.upper())
    payload = ";".join(
        f"{manifest.manifest_id}.{manifest.manifest_feature_band}.{manifest.manifest_version}" for manifest in ordered
    )
    digest = hashlib.sha256(payload.encode("utf-8")).digest()
    return f"{feature_band.to_string_without_prerelease()}-manifests.{digest[:FINGERPRINT_BYTES].hex()}"


__all__ = ["FINGERPRINT_BYTES", "manifest_fingerprint"]
