# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Selection of the workload set that is active for one resolution pass.

Sources are consulted in strict priority order and the first applicable one
wins:

1. an explicit workload set version supplied by the caller;
2. ``sdk.workloadVersion`` pinned in ``global.json``;
3. the installer's install state (a pinned version and/or direct manifest
   overrides);
4. the highest installed workload set for the feature band;
5. nothing, in which case manifests come from the directory scan alone.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import WorkloadSetNotFoundError
from .install_state import InstallStateContents
from .io import read_global_json_workload_version
from .models import WorkloadSet
from .versioning import SdkFeatureBand
from .workload_sets import highest_workload_set

LOGGER = logging.getLogger(__name__)


class SelectionSource(str, Enum):
    """Enumerate where the active workload set came from."""

    EXPLICIT = "explicit"
    GLOBAL_JSON = "global-json"
    INSTALL_STATE = "install-state"
    HIGHEST_AVAILABLE = "highest-available"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class SelectionRequest:
    """Inputs consulted by :func:`resolve_selection`."""

    feature_band: SdkFeatureBand
    available_workload_sets: Mapping[str, WorkloadSet]
    install_state_path: Path
    explicit_version: str | None = None
    global_json_path: Path | None = None


@dataclass(frozen=True, slots=True)
class ResolutionSnapshot:
    """Immutable outcome of one selection pass."""

    source: SelectionSource
    workload_set: WorkloadSet | None = None
    manifests_from_install_state: WorkloadSet | None = None
    use_manifests_from_install_state: bool = True
    install_state_path: Path | None = None
    use_workload_sets: bool | None = None
    global_json_path: Path | None = None
    global_json_workload_set_version: str | None = None
    unavailable_reason: str | None = None

    @property
    def install_state_overrides(self) -> WorkloadSet | None:
        """Return install-state manifest overrides when they apply to this pass."""

        if not self.use_manifests_from_install_state:
            return None
        return self.manifests_from_install_state

    @property
    def manifests_available(self) -> bool:
        return self.unavailable_reason is None

    def raise_if_unavailable(self) -> None:
        """Raise the pin failure recorded for this pass, if any.

        Raises:
            WorkloadSetNotFoundError: When ``global.json`` pins a set that is not installed.
        """

        if self.unavailable_reason is not None:
            raise WorkloadSetNotFoundError(self.unavailable_reason)


def resolve_selection(request: SelectionRequest) -> ResolutionSnapshot:
    """Select the active workload set and install-state overrides.

    A ``global.json`` pin naming a missing workload set does not raise here; the
    failure is recorded on the snapshot so that callers can still report the
    pinned version (and install it) before manifests are requested.

    Args:
        request: Feature band, installed workload sets and override locations.

    Returns:
        ResolutionSnapshot: Snapshot describing the selection.

    Raises:
        WorkloadSetNotFoundError: If an explicit or install-state pin is not installed.
        WorkloadManifestFormatError: If ``global.json`` or the install state is malformed.
    """

    available = request.available_workload_sets

    if request.explicit_version is not None:
        workload_set = available.get(request.explicit_version)
        if workload_set is None:
            raise WorkloadSetNotFoundError(f"Workload version {request.explicit_version} was not found.")
        LOGGER.debug("using explicitly requested workload set %s", request.explicit_version)
        return ResolutionSnapshot(
            source=SelectionSource.EXPLICIT,
            workload_set=workload_set,
            use_manifests_from_install_state=False,
        )

    global_json_version = read_global_json_workload_version(request.global_json_path)
    if global_json_version is not None:
        workload_set = available.get(global_json_version)
        reason = None
        if workload_set is None:
            reason = (
                f"Workload version {global_json_version}, which was specified in {request.global_json_path}, "
                "was not found. Run \"dotnet workload restore\" to install this workload version."
            )
        LOGGER.debug("global.json %s pins workload set %s", request.global_json_path, global_json_version)
        return ResolutionSnapshot(
            source=SelectionSource.GLOBAL_JSON,
            workload_set=workload_set,
            use_manifests_from_install_state=False,
            global_json_path=request.global_json_path,
            global_json_workload_set_version=global_json_version,
            unavailable_reason=reason,
        )

    install_state_path = request.install_state_path
    install_state = InstallStateContents.from_path(install_state_path)
    overrides = install_state.manifests_as_workload_set(request.feature_band, source=install_state_path)

    if install_state.workload_version:
        workload_set = available.get(install_state.workload_version)
        if workload_set is None:
            raise WorkloadSetNotFoundError(
                f"Workload version {install_state.workload_version}, which was specified in "
                f"{install_state_path}, was not found.",
            )
        LOGGER.debug("install state %s pins workload set %s", install_state_path, install_state.workload_version)
        return ResolutionSnapshot(
            source=SelectionSource.INSTALL_STATE,
            workload_set=workload_set,
            manifests_from_install_state=overrides,
            install_state_path=install_state_path,
            use_workload_sets=install_state.use_workload_sets,
        )

    if overrides is None and install_state.use_workload_sets is not False:
        highest = highest_workload_set(available)
        if highest is not None:
            LOGGER.debug("using highest available workload set %s", highest.version)
            return ResolutionSnapshot(
                source=SelectionSource.HIGHEST_AVAILABLE,
                workload_set=highest,
                use_manifests_from_install_state=False,
                install_state_path=install_state_path,
                use_workload_sets=install_state.use_workload_sets,
            )

    return ResolutionSnapshot(
        source=SelectionSource.INSTALL_STATE if overrides is not None else SelectionSource.NONE,
        manifests_from_install_state=overrides,
        install_state_path=install_state_path,
        use_workload_sets=install_state.use_workload_sets,
    )


__all__ = [
    "ResolutionSnapshot",
    "SelectionRequest",
    "SelectionSource",
    "resolve_selection",
]
