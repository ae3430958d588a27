# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers describing the on-disk layout of an SDK installation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .config import ResolverSettings
from .versioning import ManifestId, SdkFeatureBand

LOGGER = logging.getLogger(__name__)

MANIFESTS_FOLDER: Final[str] = "sdk-manifests"
USER_LOCAL_MARKER: Final[str] = "userlocal"
KNOWN_MANIFESTS_FILENAMES: Final[tuple[str, ...]] = (
    "KnownWorkloadManifests.txt",
    "IncludedWorkloadManifests.txt",
)


@dataclass(frozen=True, slots=True)
class ManifestRootLayout:
    """Ordered manifest roots plus the directory holding installer metadata."""

    manifest_roots: tuple[Path, ...]
    install_root: Path
    user_local: bool = False


def is_user_local(sdk_root: Path, feature_band: SdkFeatureBand) -> bool:
    """Return ``True`` when workloads for ``feature_band`` are installed per user."""

    return (sdk_root / "metadata" / "workloads" / str(feature_band) / USER_LOCAL_MARKER).exists()


def discover_manifest_roots(
    sdk_root: Path,
    feature_band: SdkFeatureBand,
    *,
    user_profile_dir: Path | None,
    settings: ResolverSettings,
) -> ManifestRootLayout:
    """Compute the ordered manifest roots for an SDK.

    Roots supplied through the environment come first, then the user-local
    ``sdk-manifests`` folder (only for user-local installs), then the SDK's own
    ``sdk-manifests`` folder. Default roots are dropped when the settings ask to
    ignore them.

    Args:
        sdk_root: SDK installation directory.
        feature_band: Feature band of the running SDK.
        user_profile_dir: Per-user SDK folder, typically ``~/.dotnet``.
        settings: Resolver settings derived from the environment.

    Returns:
        ManifestRootLayout: Ordered roots and the install metadata root.
    """

    default_roots: list[Path] = []
    install_root = sdk_root
    user_local = False
    user_manifests_root = user_profile_dir / MANIFESTS_FOLDER if user_profile_dir is not None else None
    if user_manifests_root is not None and is_user_local(sdk_root, feature_band) and user_manifests_root.is_dir():
        user_local = True
        install_root = user_profile_dir or sdk_root
        default_roots.append(user_manifests_root)
    default_roots.append(sdk_root / MANIFESTS_FOLDER)

    roots: list[Path] = list(settings.manifest_roots)
    if not settings.ignore_default_roots:
        roots.extend(default_roots)
    LOGGER.debug("manifest roots for %s: %s", feature_band, [str(root) for root in roots])
    return ManifestRootLayout(manifest_roots=tuple(roots), install_root=install_root, user_local=user_local)


def known_manifest_ids_path(sdk_root: Path, sdk_version: str) -> Path | None:
    """Return the known-manifest list shipped with ``sdk_version``, if any."""

    sdk_dir = sdk_root / "sdk" / sdk_version
    for filename in KNOWN_MANIFESTS_FILENAMES:
        candidate = sdk_dir / filename
        if candidate.is_file():
            return candidate
    return None


def load_known_manifest_ids(sdk_root: Path, sdk_version: str) -> tuple[ManifestId, ...] | None:
    """Return known manifest ids in declared order, or ``None`` without a list.

    Blank lines are skipped; a repeated id keeps its first position.
    """

    path = known_manifest_ids_path(sdk_root, sdk_version)
    if path is None:
        return None
    ordered: dict[ManifestId, None] = {}
    for line in path.read_text(encoding="utf-8-sig").splitlines():
        entry = line.strip()
        if entry:
            ordered.setdefault(ManifestId(entry), None)
    return tuple(ordered)


__all__ = [
    "KNOWN_MANIFESTS_FILENAMES",
    "MANIFESTS_FOLDER",
    "ManifestRootLayout",
    "discover_manifest_roots",
    "is_user_local",
    "known_manifest_ids_path",
    "load_known_manifest_ids",
]
