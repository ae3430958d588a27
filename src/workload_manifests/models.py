# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Value objects describing resolved manifests and workload sets."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import BinaryIO, Final, TypeAlias

from .errors import WorkloadManifestFormatError
from .io import WORKLOAD_MANIFEST_FILENAME, JSONValue, load_json_object
from .localization import open_localization_catalog
from .versioning import ManifestId, ManifestVersion, SdkFeatureBand

WORKLOAD_SET_FILE_SUFFIX: Final[str] = ".workloadset.json"
BASELINE_WORKLOAD_SET_FILENAME: Final[str] = "baseline.workloadset.json"

ManifestVersionEntry: TypeAlias = tuple[ManifestVersion, SdkFeatureBand]


@dataclass(frozen=True, slots=True)
class ManifestSpecifier:
    """Fully qualified address of one manifest directory on disk."""

    id: ManifestId
    version: ManifestVersion
    feature_band: SdkFeatureBand

    @property
    def version_text(self) -> str:
        """Return the version as spelled in the workload set."""

        return self.version.text or str(self.version)

    def relative_directory(self) -> Path:
        """Return ``<band>/<id>/<version>`` relative to a manifest root."""

        return Path(str(self.feature_band), str(self.id), self.version_text)

    def __str__(self) -> str:
        return f"{self.id}: {self.version}/{self.feature_band}"


@dataclass(frozen=True, slots=True)
class ReadableWorkloadManifest:
    """Handle to one resolved workload manifest whose content is opened on demand."""

    manifest_id: str
    manifest_directory: Path
    manifest_path: Path
    manifest_feature_band: str
    manifest_version: str

    @classmethod
    def from_directory(
        cls,
        manifest_id: str,
        manifest_directory: Path,
        *,
        feature_band: str,
        version: str,
    ) -> ReadableWorkloadManifest:
        return cls(
            manifest_id=manifest_id,
            manifest_directory=manifest_directory,
            manifest_path=manifest_directory / WORKLOAD_MANIFEST_FILENAME,
            manifest_feature_band=feature_band,
            manifest_version=version,
        )

    @property
    def identity(self) -> ManifestId:
        return ManifestId(self.manifest_id)

    def open_manifest(self) -> BinaryIO:
        """Open ``WorkloadManifest.json`` for reading."""

        return self.manifest_path.open("rb")

    def open_localization_catalog(self, culture: str | None = None) -> BinaryIO | None:
        """Open the localization catalog for ``culture`` (default: the UI culture), if any."""

        return open_localization_catalog(self.manifest_path, culture)


@dataclass(frozen=True, slots=True)
class WorkloadVersionInfo:
    """Workload version reported for an SDK together with its installation status."""

    version: str
    is_installed: bool = True
    workload_sets_enabled_without_workload_set: bool = False
    global_json_path: Path | None = None


@dataclass(frozen=True, slots=True)
class WorkloadSet:
    """Coherent bundle pinning a version and feature band for each manifest it names."""

    manifest_versions: Mapping[ManifestId, ManifestVersionEntry] = field(default_factory=dict)
    version: str | None = None
    is_baseline_workload_set: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "manifest_versions", MappingProxyType(dict(self.manifest_versions)))

    @classmethod
    def from_dictionary_for_json(
        cls,
        entries: Mapping[str, JSONValue],
        default_feature_band: SdkFeatureBand,
        *,
        context: str = "<workload set>",
        version: str | None = None,
    ) -> WorkloadSet:
        """Build a workload set from ``{"id": "version/band"}`` entries.

        Args:
            entries: Mapping of manifest ids to ``version`` or ``version/band`` strings.
            default_feature_band: Band used for entries that omit one.
            context: Description of the source used in error messages.
            version: Optional workload set version.

        Returns:
            WorkloadSet: Parsed workload set.

        Raises:
            WorkloadManifestFormatError: If an entry is not a valid specifier string.
        """

        manifest_versions: dict[ManifestId, ManifestVersionEntry] = {}
        for raw_id, raw_value in entries.items():
            manifest_id, entry = _parse_entry(raw_id, raw_value, default_feature_band, context=context)
            manifest_versions.pop(manifest_id, None)
            manifest_versions[manifest_id] = entry
        return cls(manifest_versions=manifest_versions, version=version)

    @classmethod
    def from_json_file(cls, path: Path, default_feature_band: SdkFeatureBand) -> WorkloadSet:
        """Parse one ``*.workloadset.json`` file."""

        document = load_json_object(path)
        return cls.from_dictionary_for_json(document, default_feature_band, context=str(path))

    @classmethod
    def from_workload_set_folder(
        cls,
        path: Path,
        version: str,
        default_feature_band: SdkFeatureBand,
    ) -> WorkloadSet:
        """Merge every workload set file inside ``path`` into one workload set.

        Files are processed in name order and a later file wins when two files
        pin the same manifest id.

        Raises:
            WorkloadManifestFormatError: If ``path`` holds no workload set file.
        """

        files = sorted(
            (child for child in path.iterdir() if child.is_file() and child.name.endswith(WORKLOAD_SET_FILE_SUFFIX)),
            key=lambda child: child.name,
        )
        if not files:
            raise WorkloadManifestFormatError(f"No workload set information found in: {path}")
        merged: dict[ManifestId, ManifestVersionEntry] = {}
        for file_path in files:
            for manifest_id, entry in cls.from_json_file(file_path, default_feature_band).manifest_versions.items():
                merged.pop(manifest_id, None)
                merged[manifest_id] = entry
        return cls(
            manifest_versions=merged,
            version=version,
            is_baseline_workload_set=(path / BASELINE_WORKLOAD_SET_FILENAME).is_file(),
        )

    def specifiers(self) -> tuple[ManifestSpecifier, ...]:
        """Return a specifier for each pinned manifest."""

        return tuple(
            ManifestSpecifier(id=manifest_id, version=version, feature_band=band)
            for manifest_id, (version, band) in self.manifest_versions.items()
        )

    def to_dictionary_for_json(self) -> dict[str, str]:
        """Return the ``{"id": "version/band"}`` representation of the set."""

        return {str(manifest_id): f"{version}/{band}" for manifest_id, (version, band) in self.manifest_versions.items()}


def _parse_entry(
    raw_id: str,
    raw_value: JSONValue,
    default_feature_band: SdkFeatureBand,
    *,
    context: str,
) -> tuple[ManifestId, ManifestVersionEntry]:
    if not isinstance(raw_value, str):
        raise WorkloadManifestFormatError(f"{context}: entry '{raw_id}' must be a 'version/band' string")
    version_text, _, band_text = raw_value.partition("/")
    try:
        manifest_id = ManifestId(raw_id)
        version = ManifestVersion.parse(version_text)
        band = SdkFeatureBand(band_text) if band_text else default_feature_band
    except ValueError as exc:
        raise WorkloadManifestFormatError(f"{context}: invalid entry '{raw_id}': {exc}") from exc
    return manifest_id, (version, band)


__all__ = [
    "BASELINE_WORKLOAD_SET_FILENAME",
    "ManifestSpecifier",
    "ManifestVersionEntry",
    "ReadableWorkloadManifest",
    "WORKLOAD_SET_FILE_SUFFIX",
    "WorkloadSet",
    "WorkloadVersionInfo",
]
