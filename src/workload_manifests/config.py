# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Environment-driven settings for the workload manifest resolver."""

from __future__ import annotations

import os
import platform
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

MANIFEST_ROOTS_ENV: Final[str] = "DOTNETSDK_WORKLOAD_MANIFEST_ROOTS"
IGNORE_DEFAULT_ROOTS_ENV: Final[str] = "DOTNETSDK_WORKLOAD_MANIFEST_IGNORE_DEFAULT_ROOTS"
ARCHITECTURE_ENV: Final[str] = "DOTNET_WORKLOAD_ARCHITECTURE"
CLI_HOME_ENV: Final[str] = "DOTNET_CLI_HOME"
USER_PROFILE_FOLDER: Final[str] = ".dotnet"

_MACHINE_ARCHITECTURES: Final[dict[str, str]] = {
    "x86_64": "X64",
    "amd64": "X64",
    "x64": "X64",
    "aarch64": "Arm64",
    "arm64": "Arm64",
    "i386": "X86",
    "i686": "X86",
    "x86": "X86",
    "armv7l": "Arm",
    "armv6l": "Arm",
    "arm": "Arm",
}


def detect_architecture(machine: str | None = None) -> str:
    """Return the process architecture name used in install state paths."""

    raw = (machine if machine is not None else platform.machine()).lower()
    return _MACHINE_ARCHITECTURES.get(raw, raw.capitalize() or "X64")


class ResolverSettings(BaseModel):
    """Settings that influence where manifests are looked up."""

    model_config = ConfigDict(frozen=True)

    manifest_roots: tuple[Path, ...] = Field(default_factory=tuple)
    ignore_default_roots: bool = False
    architecture: str = Field(default_factory=detect_architecture)
    user_profile_dir: Path | None = None

    @field_validator("manifest_roots", mode="before")
    @classmethod
    def _split_roots(cls, value: object) -> object:
        if isinstance(value, str):
            return tuple(Path(entry) for entry in value.split(os.pathsep) if entry.strip())
        return value

    @classmethod
    def from_environment(cls, env: Mapping[str, str] | None = None) -> ResolverSettings:
        """Build settings from ``env`` (defaults to :data:`os.environ`).

        Args:
            env: Environment mapping consulted for overrides.

        Returns:
            ResolverSettings: Settings reflecting the environment.
        """

        environment = env if env is not None else os.environ
        payload: dict[str, object] = {
            "manifest_roots": environment.get(MANIFEST_ROOTS_ENV, ""),
            "ignore_default_roots": environment.get(IGNORE_DEFAULT_ROOTS_ENV) is not None,
            "user_profile_dir": default_user_profile_dir(environment),
        }
        architecture = environment.get(ARCHITECTURE_ENV)
        if architecture:
            payload["architecture"] = architecture
        return cls.model_validate(payload)


def default_user_profile_dir(env: Mapping[str, str] | None = None) -> Path:
    """Return ``$DOTNET_CLI_HOME/.dotnet`` or ``~/.dotnet``."""

    environment = env if env is not None else os.environ
    home = environment.get(CLI_HOME_ENV)
    base = Path(home) if home else Path.home()
    return base / USER_PROFILE_FOLDER


__all__ = [
    "ARCHITECTURE_ENV",
    "CLI_HOME_ENV",
    "IGNORE_DEFAULT_ROOTS_ENV",
    "MANIFEST_ROOTS_ENV",
    "ResolverSettings",
    "default_user_profile_dir",
    "detect_architecture",
]
