# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Version and identity value types used throughout manifest resolution."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import total_ordering
from typing import Final

_IDENTIFIER: Final[str] = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"
_RELEASE_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"^(?P<core>\d+(?:\.\d+){{2,3}})(?:-(?P<prerelease>{_IDENTIFIER}))?(?:\+(?P<build>{_IDENTIFIER}))?$",
)
_WORKLOAD_SET_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(?P<core>[^-+]+)(?:(?P<separator>[-+])(?P<suffix>.+))?$")

# Prerelease SDK builds carrying one of these markers share the release band.
_COLLAPSING_PRERELEASE_MARKERS: Final[tuple[str, ...]] = ("dev", "ci", "rtm")

PrecedenceKey = tuple[tuple[int, ...], tuple[int, tuple[tuple[int, int, str], ...]]]


def _prerelease_key(prerelease: str | None) -> tuple[int, tuple[tuple[int, int, str], ...]]:
    """Return a sortable key implementing SemVer prerelease precedence.

    Args:
        prerelease: Dot-separated prerelease identifiers or ``None`` for a release.

    Returns:
        tuple[int, tuple[tuple[int, int, str], ...]]: Key where releases sort after
        prereleases, numeric identifiers sort numerically and before alphanumerics.
    """

    if prerelease is None:
        return (1, ())
    identifiers: list[tuple[int, int, str]] = []
    for part in prerelease.split("."):
        if part.isdigit():
            identifiers.append((0, int(part), ""))
        else:
            identifiers.append((1, 0, part))
    return (0, tuple(identifiers))


@total_ordering
@dataclass(frozen=True, slots=True, eq=False)
class ReleaseVersion:
    """Release-style version ``major.minor.patch[.revision][-prerelease][+build]``.

    ``text`` keeps the parsed spelling; it takes no part in comparisons.
    """

    core: tuple[int, ...]
    prerelease: str | None = None
    build: str | None = None
    text: str | None = field(default=None, repr=False)

    @classmethod
    def try_parse(cls, text: str | None) -> ReleaseVersion | None:
        """Parse ``text`` returning ``None`` when it is not a release version.

        Args:
            text: Candidate version text.

        Returns:
            ReleaseVersion | None: Parsed version, or ``None`` for invalid input.
        """

        if not text:
            return None
        stripped = text.strip()
        match = _RELEASE_PATTERN.match(stripped)
        if match is None:
            return None
        core = tuple(int(part) for part in match.group("core").split("."))
        return cls(core=core, prerelease=match.group("prerelease"), build=match.group("build"), text=stripped)

    @classmethod
    def parse(cls, text: str) -> ReleaseVersion:
        """Parse ``text`` into a version.

        Args:
            text: Version text to parse.

        Returns:
            ReleaseVersion: Parsed version instance.

        Raises:
            ValueError: If ``text`` is not a release version.
        """

        version = cls.try_parse(text)
        if version is None:
            raise ValueError(f"'{text}' is not a valid release version")
        return version

    @property
    def major(self) -> int:
        return self.core[0]

    @property
    def minor(self) -> int:
        return self.core[1]

    @property
    def patch(self) -> int:
        return self.core[2]

    @property
    def revision(self) -> int | None:
        return self.core[3] if len(self.core) > 3 else None

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    def precedence_key(self) -> PrecedenceKey:
        """Return the key used for ordering, equality and hashing."""

        return (self.core, _prerelease_key(self.prerelease))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReleaseVersion):
            return NotImplemented
        return self.precedence_key() == other.precedence_key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ReleaseVersion):
            return NotImplemented
        return self.precedence_key() < other.precedence_key()

    def __hash__(self) -> int:
        return hash(self.precedence_key())

    def __str__(self) -> str:
        text = ".".join(str(part) for part in self.core)
        if self.prerelease is not None:
            text = f"{text}-{self.prerelease}"
        if self.build is not None:
            text = f"{text}+{self.build}"
        return text


class ManifestVersion(ReleaseVersion):
    """Version of a single workload manifest."""

    __slots__ = ()


@total_ordering
@dataclass(frozen=True, slots=True, eq=False)
class ManifestId:
    """Case-insensitive identifier naming a workload manifest."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("manifest id cannot be blank")

    @property
    def key(self) -> str:
        """Return the ordinal case-insensitive comparison key."""

        return self.value.upper()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ManifestId):
            return NotImplemented
        return self.key == other.key

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ManifestId):
            return NotImplemented
        return self.key < other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return self.value


@total_ordering
class SdkFeatureBand:
    """Coarse SDK version bucket that manifests and workload sets are filed under.

    The patch number is rounded down to the hundred. Prerelease SDKs built from
    ``dev``/``ci``/``rtm`` branches share the release band, while other
    prereleases (``preview``, ``rc``) keep the first two prerelease identifiers so
    they never share a band with the release.
    """

    __slots__ = ("_band",)

    def __init__(self, version: str | ReleaseVersion) -> None:
        """Derive the feature band for ``version``.

        Args:
            version: Full SDK version or an existing feature band string.

        Raises:
            ValueError: If ``version`` is not a release version.
        """

        release = version if isinstance(version, ReleaseVersion) else ReleaseVersion.parse(version)
        prerelease: str | None = None
        if release.prerelease and not any(marker in release.prerelease for marker in _COLLAPSING_PRERELEASE_MARKERS):
            prerelease = ".".join(release.prerelease.split(".")[:2])
        band_patch = (release.patch // 100) * 100
        self._band = ReleaseVersion(core=(release.major, release.minor, band_patch), prerelease=prerelease)

    @classmethod
    def try_parse(cls, text: str | None) -> SdkFeatureBand | None:
        """Return the feature band for ``text`` or ``None`` when it does not parse."""

        release = ReleaseVersion.try_parse(text)
        return cls(release) if release is not None else None

    @property
    def version(self) -> ReleaseVersion:
        return self._band

    @property
    def major(self) -> int:
        return self._band.major

    @property
    def minor(self) -> int:
        return self._band.minor

    @property
    def patch(self) -> int:
        return self._band.patch

    @property
    def prerelease(self) -> str | None:
        return self._band.prerelease

    def to_string_without_prerelease(self) -> str:
        """Return the band rendered without its prerelease tag."""

        return f"{self.major}.{self.minor}.{self.patch}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SdkFeatureBand):
            return NotImplemented
        return self._band == other._band

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SdkFeatureBand):
            return NotImplemented
        return self._band < other._band

    def __hash__(self) -> int:
        return hash(self._band)

    def __str__(self) -> str:
        return str(self._band)

    def __repr__(self) -> str:
        return f"SdkFeatureBand('{self}')"


def parse_workload_set_version(workload_set_version: str) -> tuple[str, SdkFeatureBand]:
    """Split a workload set version into its manifest package version and feature band.

    ``8.0.201`` maps to package ``8.201.0`` in band ``8.0.200``; ``8.0.201.1`` maps
    to package ``8.201.1``; ``9.0.100-preview.2`` keeps its preview band.

    Args:
        workload_set_version: Version text of a workload set.

    Returns:
        tuple[str, SdkFeatureBand]: Manifest package version and SDK feature band.

    Raises:
        ValueError: If the version core is not three or four numeric components.
    """

    match = _WORKLOAD_SET_PATTERN.match(workload_set_version.strip())
    if match is None:
        raise ValueError(f"'{workload_set_version}' is not a valid workload set version")
    core_parts = match.group("core").split(".")
    if len(core_parts) not in (3, 4) or not all(part.isdigit() for part in core_parts):
        raise ValueError(f"'{workload_set_version}' is not a valid workload set version")
    major, minor, patch = core_parts[:3]
    separator = match.group("separator")
    suffix = match.group("suffix")

    workload_set_patch = core_parts[3] if len(core_parts) == 4 else "0"
    package_version = f"{major}.{patch}.{workload_set_patch}"
    if suffix is not None:
        package_version = f"{package_version}{separator}{suffix}"

    band_text = f"{major}.{minor}.{patch}"
    if len(core_parts) == 3 and suffix is not None:
        band_text = f"{band_text}{separator}{suffix}"
    return package_version, SdkFeatureBand(band_text)


def get_workload_set_feature_band(workload_set_version: str) -> SdkFeatureBand:
    """Return the SDK feature band a workload set version belongs to."""

    return parse_workload_set_version(workload_set_version)[1]


def workload_set_version_from_package_version(package_version: str, feature_band: SdkFeatureBand) -> str:
    """Invert :func:`parse_workload_set_version` for a manifest package version.

    Args:
        package_version: Package version such as ``8.201.1``.
        feature_band: Feature band supplying the major and minor numbers.

    Returns:
        str: Workload set version such as ``8.0.201.1``.
    """

    package = ReleaseVersion.parse(package_version)
    version = f"{feature_band.major}.{feature_band.minor}.{package.minor}"
    if package.patch != 0:
        version = f"{version}.{package.patch}"
    if package.prerelease is not None:
        version = f"{version}-{package.prerelease}"
    return version


def compare_versions(first: str, second: str) -> int:
    """Compare two version strings using release version precedence.

    Args:
        first: Left-hand version text.
        second: Right-hand version text.

    Returns:
        int: Negative, zero or positive as ``first`` sorts before, equal to or after ``second``.

    Raises:
        ValueError: If either string is not a release version.
    """

    if first == second:
        return 0
    left = ReleaseVersion.parse(first)
    right = ReleaseVersion.parse(second)
    return (left > right) - (left < right)


__all__ = [
    "ManifestId",
    "ManifestVersion",
    "ReleaseVersion",
    "SdkFeatureBand",
    "compare_versions",
    "get_workload_set_feature_band",
    "parse_workload_set_version",
    "workload_set_version_from_package_version",
]
