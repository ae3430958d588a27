# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Assembly of the final, ordered manifest collection."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from .errors import ManifestNotFoundError
from .models import ReadableWorkloadManifest, WorkloadSet
from .scanner import ManifestDirectoryScanner
from .selection import ResolutionSnapshot
from .versioning import ManifestId, SdkFeatureBand

LOGGER = logging.getLogger(__name__)


def assemble_manifests(
    scanner: ManifestDirectoryScanner,
    feature_band: SdkFeatureBand,
    snapshot: ResolutionSnapshot,
    known_manifest_ids: Sequence[ManifestId] | None = None,
) -> tuple[ReadableWorkloadManifest, ...]:
    """Combine scanned, pinned and fallback manifests into one ordered collection.

    Each layer replaces entries for the same manifest id from the previous one:
    the directory scan, the active workload set, the install-state overrides, and
    finally older feature bands for known ids that are still missing.

    Args:
        scanner: Scanner bound to the ordered manifest roots.
        feature_band: Feature band of the running SDK.
        snapshot: Selection snapshot for this pass.
        known_manifest_ids: Ids the SDK expects, in their declared order.

    Returns:
        tuple[ReadableWorkloadManifest, ...]: Manifests ordered by
        :func:`order_manifests`.

    Raises:
        WorkloadSetNotFoundError: When the snapshot records an unresolvable pin.
        ManifestNotFoundError: When a pinned manifest is not installed.
    """

    snapshot.raise_if_unavailable()
    manifests: dict[ManifestId, ReadableWorkloadManifest] = {}
    band_text = str(feature_band)

    for entry in scanner.scan(feature_band):
        _add(manifests, entry.to_readable(band_text))

    workload_set = snapshot.workload_set
    if workload_set is not None:
        _apply_pins(
            manifests,
            scanner,
            workload_set,
            source=f"workload version {workload_set.version}",
        )

    overrides = snapshot.install_state_overrides
    if overrides is not None:
        _apply_pins(
            manifests,
            scanner,
            overrides,
            source=f"install state file {snapshot.install_state_path}",
        )

    for manifest_id in known_manifest_ids or ():
        if manifest_id in manifests:
            continue
        found = scanner.fallback_directory(manifest_id, feature_band)
        if found is None:
            LOGGER.debug("known manifest %s is not installed", manifest_id)
            continue
        entry, band = found
        _add(manifests, entry.to_readable(str(band)))

    return order_manifests(manifests, known_manifest_ids)


def order_manifests(
    manifests: Mapping[ManifestId, ReadableWorkloadManifest],
    known_manifest_ids: Sequence[ManifestId] | None,
) -> tuple[ReadableWorkloadManifest, ...]:
    """Order manifests: known ids in declared order, then the rest by id.

    Ids are compared ordinally and case-insensitively.
    """

    positions = {manifest_id: index for index, manifest_id in enumerate(known_manifest_ids or ())}
    unknown = len(positions)
    ordered = sorted(
        manifests.items(),
        key=lambda item: (positions.get(item[0], unknown), item[0].key),
    )
    return tuple(manifest for _, manifest in ordered)


def _apply_pins(
    manifests: dict[ManifestId, ReadableWorkloadManifest],
    scanner: ManifestDirectoryScanner,
    workload_set: WorkloadSet,
    *,
    source: str,
) -> None:
    for specifier in workload_set.specifiers():
        directory = scanner.find_specifier_directory(specifier)
        if directory is None:
            raise ManifestNotFoundError(f"Manifest specifier {specifier} from {source} was not installed.")
        _add(
            manifests,
            ReadableWorkloadManifest.from_directory(
                str(specifier.id),
                directory,
                feature_band=str(specifier.feature_band),
                version=specifier.version_text,
            ),
        )


def _add(manifests: dict[ManifestId, ReadableWorkloadManifest], manifest: ReadableWorkloadManifest) -> None:
    key = ManifestId(manifest.manifest_id)
    manifests.pop(key, None)
    manifests[key] = manifest


__all__ = ["assemble_manifests", "order_manifests"]
