# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Read-only access to the installer-authored install state file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import WorkloadManifestFormatError
from .io import load_json_object
from .models import WorkloadSet
from .versioning import SdkFeatureBand

LOGGER = logging.getLogger(__name__)

INSTALL_STATE_FILENAME: Final[str] = "default.json"


class InstallStateContents(BaseModel):
    """Contents of ``InstallState/default.json`` for one feature band."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    workload_version: str | None = Field(default=None, alias="workloadVersion")
    manifests: dict[str, str] | None = None
    use_workload_sets: bool | None = Field(default=None, alias="useWorkloadSets")

    @classmethod
    def from_path(cls, path: Path) -> InstallStateContents:
        """Load install state from ``path``; a missing file yields an empty state.

        Raises:
            WorkloadManifestFormatError: If the file is not a valid install state document.
        """

        if not path.is_file():
            return cls()
        document = load_json_object(path)
        try:
            contents = cls.model_validate(document)
        except ValidationError as exc:
            raise WorkloadManifestFormatError(f"{path}: invalid install state ({exc.error_count()} errors)") from exc
        LOGGER.debug("install state %s: %s", path, contents)
        return contents

    def manifests_as_workload_set(self, feature_band: SdkFeatureBand, *, source: Path) -> WorkloadSet | None:
        """Return the direct manifest overrides as a version-less workload set."""

        if self.manifests is None:
            return None
        return WorkloadSet.from_dictionary_for_json(self.manifests, feature_band, context=str(source))


def install_state_folder(install_root: Path, feature_band: SdkFeatureBand, architecture: str) -> Path:
    """Return ``<root>/metadata/workloads/<arch>/<band>/InstallState``."""

    return install_root / "metadata" / "workloads" / architecture / str(feature_band) / "InstallState"


def install_state_path(install_root: Path, feature_band: SdkFeatureBand, architecture: str) -> Path:
    """Return the path of the default install state file for ``feature_band``."""

    return install_state_folder(install_root, feature_band, architecture) / INSTALL_STATE_FILENAME


__all__ = [
    "INSTALL_STATE_FILENAME",
    "InstallStateContents",
    "install_state_folder",
    "install_state_path",
]
