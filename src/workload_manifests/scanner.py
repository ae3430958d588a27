# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Filesystem scanning of version-banded manifest directories."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .io import WORKLOAD_MANIFEST_FILENAME, sniff_manifest_version
from .models import ManifestSpecifier, ReadableWorkloadManifest
from .versioning import ManifestId, ManifestVersion, SdkFeatureBand

LOGGER = logging.getLogger(__name__)

WORKLOAD_SETS_FOLDER: Final[str] = "workloadsets"

# Legacy manifest ids superseded by versioned replacements; never loaded.
OUTDATED_MANIFEST_IDS: Final[frozenset[ManifestId]] = frozenset(
    ManifestId(name)
    for name in (
        "microsoft.net.workload.android",
        "microsoft.net.workload.blazorwebassembly",
        "microsoft.net.workload.ios",
        "microsoft.net.workload.maccatalyst",
        "microsoft.net.workload.macos",
        "microsoft.net.workload.tvos",
        "microsoft.net.workload.mono.toolchain",
    )
)


@dataclass(frozen=True, slots=True)
class ResolvedManifestDirectory:
    """Directory chosen for one manifest id, with its version when known."""

    manifest_id: str
    directory: Path
    version: str | None

    def to_readable(self, feature_band: str) -> ReadableWorkloadManifest:
        """Return a readable manifest filed under ``feature_band``.

        An unknown version falls back to the name of the resolved directory.
        """

        return ReadableWorkloadManifest.from_directory(
            self.manifest_id,
            self.directory,
            feature_band=feature_band,
            version=self.version or self.directory.name,
        )


def is_reserved_directory(name: str) -> bool:
    """Return ``True`` for directory names that never hold a manifest."""

    if not name.strip() or name.lower() == WORKLOAD_SETS_FOLDER:
        return True
    return ManifestId(name) in OUTDATED_MANIFEST_IDS


def resolve_manifest_directory(manifest_directory: Path) -> ResolvedManifestDirectory | None:
    """Choose the directory holding the newest manifest for one manifest id.

    Versioned subdirectories win over a ``WorkloadManifest.json`` placed directly
    in ``manifest_directory``. Subdirectories whose names are not release versions
    are ignored.

    Args:
        manifest_directory: ``<root>/<band>/<id>`` directory.

    Returns:
        ResolvedManifestDirectory | None: Selected directory, or ``None`` when the
        directory is reserved or contains no manifest.
    """

    manifest_id = manifest_directory.name
    if is_reserved_directory(manifest_id):
        return None

    best: tuple[ManifestVersion, Path] | None = None
    for child in _child_directories(manifest_directory):
        if not (child / WORKLOAD_MANIFEST_FILENAME).is_file():
            continue
        version = ManifestVersion.try_parse(child.name)
        if version is None:
            LOGGER.debug("ignoring non-version manifest directory %s", child)
            continue
        if best is None or version > best[0]:
            best = (version, child)
    if best is not None:
        return ResolvedManifestDirectory(manifest_id=manifest_id, directory=best[1], version=best[1].name)

    manifest_path = manifest_directory / WORKLOAD_MANIFEST_FILENAME
    if manifest_path.is_file():
        return ResolvedManifestDirectory(
            manifest_id=manifest_id,
            directory=manifest_directory,
            version=sniff_manifest_version(manifest_path),
        )
    return None


@dataclass(frozen=True, slots=True)
class ManifestDirectoryScanner:
    """Scan ordered manifest roots for the manifests of a feature band."""

    manifest_roots: tuple[Path, ...]

    def candidate_directories(self, feature_band: SdkFeatureBand) -> tuple[Path, ...]:
        """Return manifest id directories for ``feature_band`` across all roots.

        When the same directory name appears under several roots, the first
        declared root wins. Names are compared case-insensitively.

        Returns:
            tuple[Path, ...]: One directory per distinct manifest directory name.
        """

        selected: dict[str, Path] = {}
        for root in self.manifest_roots:
            band_directory = root / str(feature_band)
            for directory in _child_directories(band_directory):
                selected.setdefault(directory.name.upper(), directory)
        return tuple(selected.values())

    def scan(self, feature_band: SdkFeatureBand) -> tuple[ResolvedManifestDirectory, ...]:
        """Resolve every manifest present for ``feature_band``."""

        resolved: list[ResolvedManifestDirectory] = []
        for directory in self.candidate_directories(feature_band):
            entry = resolve_manifest_directory(directory)
            if entry is not None:
                resolved.append(entry)
        return tuple(resolved)

    def find_specifier_directory(self, specifier: ManifestSpecifier) -> Path | None:
        """Return the first root's directory that holds the manifest named by ``specifier``."""

        relative = specifier.relative_directory()
        for root in self.manifest_roots:
            candidate = root / relative
            if (candidate / WORKLOAD_MANIFEST_FILENAME).is_file():
                return candidate
        return None

    def fallback_directory(
        self,
        manifest_id: ManifestId,
        feature_band: SdkFeatureBand,
    ) -> tuple[ResolvedManifestDirectory, SdkFeatureBand] | None:
        """Search older feature bands of the last root for ``manifest_id``.

        Bands strictly older than ``feature_band`` qualify, as does the release
        form of a prerelease ``feature_band``. The newest qualifying band that
        resolves a manifest wins.

        Returns:
            tuple[ResolvedManifestDirectory, SdkFeatureBand] | None: Resolved
            directory and the band it was found in, or ``None``.
        """

        if not self.manifest_roots:
            return None
        fallback_root = self.manifest_roots[-1]
        release_band = feature_band.to_string_without_prerelease()
        candidates: set[SdkFeatureBand] = set()
        for directory in _child_directories(fallback_root):
            band = SdkFeatureBand.try_parse(directory.name)
            if band is None:
                continue
            if band < feature_band or str(band) == release_band:
                candidates.add(band)
        for band in sorted(candidates, reverse=True):
            manifest_directory = fallback_root / str(band) / str(manifest_id)
            if not manifest_directory.is_dir():
                continue
            entry = resolve_manifest_directory(manifest_directory)
            if entry is not None:
                LOGGER.debug("manifest %s resolved from fallback band %s", manifest_id, band)
                return entry, band
        return None


def _child_directories(directory: Path) -> Sequence[Path]:
    """Return the sorted child directories of ``directory`` (empty when missing)."""

    if not directory.is_dir():
        return ()
    return sorted(_directories(directory.iterdir()))


def _directories(paths: Iterable[Path]) -> Iterable[Path]:
    for path in paths:
        if path.is_dir():
            yield path


__all__ = [
    "ManifestDirectoryScanner",
    "OUTDATED_MANIFEST_IDS",
    "ResolvedManifestDirectory",
    "WORKLOAD_SETS_FOLDER",
    "is_reserved_directory",
    "resolve_manifest_directory",
]
