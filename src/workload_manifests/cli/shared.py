# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared CLI state and error handling."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, TypeVar

import typer

from ..config import ResolverSettings
from ..errors import WorkloadManifestError
from ..logging import fail
from ..provider import SdkDirectoryWorkloadManifestProvider

_T = TypeVar("_T")


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class ResolverOptions:
    """Options shared by every command, captured by the application callback."""

    sdk_root: Path
    sdk_version: str
    user_profile_dir: Path | None = None
    global_json: Path | None = None
    workload_set_version: str | None = None
    use_color: bool = True
    use_emoji: bool = True

    def build_provider(self) -> SdkDirectoryWorkloadManifestProvider:
        """Construct the provider described by these options.

        Raises:
            CLIError: If the provider rejects the options or a pin cannot be resolved.
        """

        settings = ResolverSettings.from_environment()
        profile_dir = self.user_profile_dir if self.user_profile_dir is not None else settings.user_profile_dir
        try:
            return SdkDirectoryWorkloadManifestProvider(
                self.sdk_root,
                self.sdk_version,
                profile_dir,
                self.global_json,
                workload_set_version=self.workload_set_version,
                settings=settings,
            )
        except WorkloadManifestError as exc:
            raise CLIError(str(exc)) from exc


def options_from_context(ctx: typer.Context) -> ResolverOptions:
    """Return the :class:`ResolverOptions` stored by the application callback."""

    options = ctx.obj
    if not isinstance(options, ResolverOptions):
        raise CLIError("resolver options were not initialised")
    return options


def exit_with_error(exc: CLIError, options: ResolverOptions) -> NoReturn:
    """Render ``exc`` and terminate the command with its exit code.

    Raises:
        typer.Exit: Always.
    """

    fail(str(exc), use_emoji=options.use_emoji, use_color=options.use_color)
    raise typer.Exit(code=exc.exit_code)


def run_query(options: ResolverOptions, query: Callable[[SdkDirectoryWorkloadManifestProvider], _T]) -> _T:
    """Build the provider and return ``query(provider)``, exiting on resolver errors."""

    try:
        return query(options.build_provider())
    except CLIError as exc:
        exit_with_error(exc, options)
    except WorkloadManifestError as exc:
        exit_with_error(CLIError(str(exc)), options)


__all__ = ["CLIError", "ResolverOptions", "exit_with_error", "options_from_context", "run_query"]
