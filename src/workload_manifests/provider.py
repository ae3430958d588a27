# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Workload manifest providers backed by SDK directories."""

from __future__ import annotations

import logging
from pathlib import Path

from .assembly import assemble_manifests
from .config import ResolverSettings
from .errors import ResolverConfigurationError
from .install_state import install_state_path
from .io import WORKLOAD_MANIFEST_FILENAME, find_global_json, sniff_manifest_version
from .layout import discover_manifest_roots, load_known_manifest_ids
from .fingerprint import manifest_fingerprint
from .models import ReadableWorkloadManifest, WorkloadSet, WorkloadVersionInfo
from .scanner import ManifestDirectoryScanner
from .selection import ResolutionSnapshot, SelectionRequest, resolve_selection
from .versioning import ManifestId, SdkFeatureBand
from .workload_sets import WorkloadSetRepository

LOGGER = logging.getLogger(__name__)


def _require_text(value: str | Path | None, name: str) -> str:
    text = str(value) if value is not None else ""
    if not text.strip():
        raise ResolverConfigurationError(f"'{name}' cannot be null or whitespace")
    return text


def _feature_band_for(sdk_version: str) -> SdkFeatureBand:
    try:
        return SdkFeatureBand(sdk_version)
    except ValueError as exc:
        raise ResolverConfigurationError(f"'{sdk_version}' is not a valid SDK version") from exc


class SdkDirectoryWorkloadManifestProvider:
    """Resolve workload manifests from the ``sdk-manifests`` folders of an SDK.

    Construction performs a full selection pass. :meth:`get_manifests` re-scans
    disk on every call because installs may change between calls, while
    :meth:`refresh_workload_manifests` replaces the selection snapshot after the
    installer changed workload sets or install state. Instances are not safe for
    concurrent refresh and query calls.
    """

    def __init__(
        self,
        sdk_root_path: str | Path | None,
        sdk_version: str | None,
        user_profile_dir: str | Path | None = None,
        global_json_path: str | Path | None = None,
        *,
        workload_set_version: str | None = None,
        settings: ResolverSettings | None = None,
    ) -> None:
        """Bind the provider to an SDK installation and resolve the active workload set.

        Args:
            sdk_root_path: Root of the SDK installation (the ``dotnet`` folder).
            sdk_version: Full version of the running SDK.
            user_profile_dir: Per-user SDK folder used for user-local installs; ``None`` disables
                the user-local root.
            global_json_path: ``global.json`` that may pin a workload version.
            workload_set_version: Workload set version requested explicitly.
            settings: Resolver settings; read from the environment when omitted.

        Raises:
            ResolverConfigurationError: If the arguments are blank or conflicting.
            WorkloadSetNotFoundError: If a required workload set pin is not installed.
        """

        sdk_version_text = _require_text(sdk_version, "sdk_version")
        sdk_root_text = _require_text(sdk_root_path, "sdk_root_path")
        if global_json_path is not None and workload_set_version is not None:
            raise ResolverConfigurationError("Cannot specify both global_json_path and workload_set_version")

        self._settings = settings if settings is not None else ResolverSettings.from_environment()
        self._sdk_root = Path(sdk_root_text)
        self._sdk_version = sdk_version_text
        self._feature_band = _feature_band_for(sdk_version_text)
        self._workload_set_version = workload_set_version
        self._global_json_path = Path(global_json_path) if global_json_path is not None else None

        profile_dir = Path(user_profile_dir) if user_profile_dir is not None else None
        layout = discover_manifest_roots(
            self._sdk_root,
            self._feature_band,
            user_profile_dir=profile_dir,
            settings=self._settings,
        )
        self._manifest_roots = layout.manifest_roots
        self._install_root = layout.install_root
        self._scanner = ManifestDirectoryScanner(self._manifest_roots)
        self._workload_sets = WorkloadSetRepository(self._manifest_roots)
        self._known_manifest_ids = load_known_manifest_ids(self._sdk_root, sdk_version_text)
        self._snapshot = self._resolve()

    @classmethod
    def for_workload_set(
        cls,
        sdk_root_path: str | Path,
        sdk_version: str,
        user_profile_dir: str | Path | None,
        workload_set_version: str,
        *,
        settings: ResolverSettings | None = None,
    ) -> SdkDirectoryWorkloadManifestProvider:
        """Return a provider pinned to ``workload_set_version``."""

        return cls(
            sdk_root_path,
            sdk_version,
            user_profile_dir,
            workload_set_version=workload_set_version,
            settings=settings,
        )

    @staticmethod
    def find_global_json(start_dir: str | Path | None) -> Path | None:
        """Return the closest ``global.json`` at or above ``start_dir``."""

        return find_global_json(start_dir)

    @property
    def manifest_roots(self) -> tuple[Path, ...]:
        return self._manifest_roots

    @property
    def feature_band(self) -> SdkFeatureBand:
        return self._feature_band

    @property
    def install_state_path(self) -> Path:
        return install_state_path(self._install_root, self._feature_band, self._settings.architecture)

    @property
    def known_manifest_ids(self) -> tuple[ManifestId, ...] | None:
        return self._known_manifest_ids

    @property
    def snapshot(self) -> ResolutionSnapshot:
        """Return the selection snapshot of the last successful pass."""

        return self._snapshot

    def refresh_workload_manifests(self) -> None:
        """Recompute the active workload set and install-state overrides.

        The previous snapshot is kept when the new pass raises.
        """

        self._snapshot = self._resolve()

    def get_manifests(self) -> tuple[ReadableWorkloadManifest, ...]:
        """Return the resolved manifests in their stable order.

        Raises:
            WorkloadSetNotFoundError: If ``global.json`` pins a workload set that is not installed.
            ManifestNotFoundError: If a pinned manifest is not installed.
        """

        return assemble_manifests(self._scanner, self._feature_band, self._snapshot, self._known_manifest_ids)

    def get_workload_version_info(self) -> WorkloadVersionInfo:
        """Return the workload version and whether it is installed.

        A ``global.json`` pin is reported even when the pinned set is missing so
        callers can offer to install it.
        """

        snapshot = self._snapshot
        if snapshot.global_json_workload_set_version is not None:
            return WorkloadVersionInfo(
                version=snapshot.global_json_workload_set_version,
                is_installed=snapshot.manifests_available,
                global_json_path=snapshot.global_json_path,
            )
        if snapshot.workload_set is not None and snapshot.workload_set.version is not None:
            return WorkloadVersionInfo(version=snapshot.workload_set.version)
        return WorkloadVersionInfo(
            version=manifest_fingerprint(self.get_manifests(), self._feature_band),
            workload_sets_enabled_without_workload_set=snapshot.use_workload_sets is True,
        )

    def get_workload_version(self) -> str:
        """Return the active workload set version or the manifest fingerprint.

        Raises:
            WorkloadSetNotFoundError: If ``global.json`` pins a workload set that is not installed.
        """

        self._snapshot.raise_if_unavailable()
        return self.get_workload_version_info().version

    def get_sdk_feature_band(self) -> str:
        return str(self._feature_band)

    def get_available_workload_sets(self, feature_band: SdkFeatureBand | None = None) -> dict[str, WorkloadSet]:
        """Return workload sets installed for ``feature_band`` (default: the SDK's band)."""

        return self._workload_sets.available_workload_sets(feature_band or self._feature_band)

    def get_all_available_workload_sets(self) -> dict[str, WorkloadSet]:
        """Return workload sets installed for any feature band."""

        return self._workload_sets.all_available_workload_sets()

    def _resolve(self) -> ResolutionSnapshot:
        request = SelectionRequest(
            feature_band=self._feature_band,
            available_workload_sets=self.get_available_workload_sets(),
            install_state_path=self.install_state_path,
            explicit_version=self._workload_set_version,
            global_json_path=self._global_json_path,
        )
        snapshot = resolve_selection(request)
        LOGGER.debug(
            "workload selection for %s: %s (%s)",
            self._feature_band,
            snapshot.source.value,
            snapshot.workload_set.version if snapshot.workload_set is not None else "no workload set",
        )
        return snapshot


class TempDirectoryWorkloadManifestProvider:
    """Serve every manifest found directly under a flat directory.

    Used for manifests extracted to a temporary location, for instance while an
    update is being evaluated. There are no workload sets and nothing to refresh.
    """

    def __init__(self, manifests_path: str | Path, sdk_version: str) -> None:
        self._manifests_path = Path(_require_text(manifests_path, "manifests_path"))
        self._feature_band = _feature_band_for(_require_text(sdk_version, "sdk_version"))

    def get_manifests(self) -> tuple[ReadableWorkloadManifest, ...]:
        if not self._manifests_path.is_dir():
            return ()
        band_text = str(self._feature_band)
        manifests: list[ReadableWorkloadManifest] = []
        for directory in sorted(path for path in self._manifests_path.iterdir() if path.is_dir()):
            manifest_path = directory / WORKLOAD_MANIFEST_FILENAME
            if not manifest_path.is_file():
                continue
            manifests.append(
                ReadableWorkloadManifest.from_directory(
                    directory.name,
                    directory,
                    feature_band=band_text,
                    version=sniff_manifest_version(manifest_path) or directory.name,
                ),
            )
        return tuple(sorted(manifests, key=lambda manifest: manifest.manifest_id.upper()))

    def get_workload_version(self) -> str:
        return self.get_workload_version_info().version

    def get_workload_version_info(self) -> WorkloadVersionInfo:
        return WorkloadVersionInfo(version=manifest_fingerprint(self.get_manifests(), self._feature_band))

    def get_sdk_feature_band(self) -> str:
        return str(self._feature_band)

    def get_available_workload_sets(self, feature_band: SdkFeatureBand | None = None) -> dict[str, WorkloadSet]:
        return {}

    def refresh_workload_manifests(self) -> None:
        return None


__all__ = ["SdkDirectoryWorkloadManifestProvider", "TempDirectoryWorkloadManifestProvider"]
