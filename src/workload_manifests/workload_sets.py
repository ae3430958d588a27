# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Discovery of installed workload set bundles."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .models import WorkloadSet
from .scanner import WORKLOAD_SETS_FOLDER
from .versioning import ReleaseVersion, SdkFeatureBand

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WorkloadSetRepository:
    """Read workload set bundles filed under ``<root>/<band>/workloadsets``."""

    manifest_roots: tuple[Path, ...]

    def available_workload_sets(self, feature_band: SdkFeatureBand) -> dict[str, WorkloadSet]:
        """Return workload sets installed for exactly ``feature_band``.

        When two roots hold a workload set with the same version, the first
        declared root wins.

        Args:
            feature_band: Feature band whose workload sets are requested.

        Returns:
            dict[str, WorkloadSet]: Workload sets keyed by version.
        """

        available: dict[str, WorkloadSet] = {}
        for root in self.manifest_roots:
            self._collect(available, root / str(feature_band), feature_band)
        return available

    def all_available_workload_sets(self) -> dict[str, WorkloadSet]:
        """Return workload sets installed for every feature band.

        Band directories whose name is not the canonical form of the band it
        parses to (``9.0.100-rtm.1`` parses to ``9.0.100``) are skipped because
        sets filed there could never be looked up again by version.
        """

        available: dict[str, WorkloadSet] = {}
        for root in self.manifest_roots:
            if not root.is_dir():
                continue
            for band_directory in sorted(path for path in root.iterdir() if path.is_dir()):
                feature_band = SdkFeatureBand.try_parse(band_directory.name)
                if feature_band is None or str(feature_band) != band_directory.name:
                    continue
                self._collect(available, band_directory, feature_band)
        return available

    @staticmethod
    def _collect(available: dict[str, WorkloadSet], band_directory: Path, feature_band: SdkFeatureBand) -> None:
        sets_root = band_directory / WORKLOAD_SETS_FOLDER
        if not sets_root.is_dir():
            return
        for set_directory in sorted(path for path in sets_root.iterdir() if path.is_dir()):
            version = set_directory.name
            if version in available:
                continue
            available[version] = WorkloadSet.from_workload_set_folder(set_directory, version, feature_band)
            LOGGER.debug("found workload set %s in %s", version, set_directory)


def highest_workload_set(workload_sets: Mapping[str, WorkloadSet]) -> WorkloadSet | None:
    """Return the workload set with the highest release version, if any.

    Versions that are not release versions cannot be ranked and are skipped.
    """

    best: tuple[ReleaseVersion, WorkloadSet] | None = None
    for version_text, workload_set in workload_sets.items():
        version = ReleaseVersion.try_parse(version_text)
        if version is None:
            LOGGER.debug("cannot rank workload set version %s", version_text)
            continue
        if best is None or version > best[0]:
            best = (version, workload_set)
    return best[1] if best is not None else None


__all__ = ["WorkloadSetRepository", "highest_workload_set"]
