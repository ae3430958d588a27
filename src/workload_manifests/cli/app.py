# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point for inspecting workload manifest resolution."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..io import find_global_json
from ..logging import console_for, detect_tty, enable_debug_logging, info, ok, section, warn
from .rendering import (
    build_manifests_table,
    build_workload_sets_table,
    dump_json,
    manifests_payload,
    version_payload,
    workload_sets_payload,
)
from .shared import ResolverOptions, options_from_context, run_query

app = typer.Typer(
    name="workload-manifests",
    help="Resolve the workload manifests an SDK installation would load.",
    no_args_is_help=True,
    add_completion=False,
)

JsonOption = Annotated[bool, typer.Option("--json", help="Emit machine-readable JSON.")]


@app.callback()
def main(
    ctx: typer.Context,
    sdk_root: Annotated[
        Path,
        typer.Option("--sdk-root", envvar="DOTNET_ROOT", help="Root folder of the SDK installation."),
    ],
    sdk_version: Annotated[str, typer.Option("--sdk-version", help="Full version of the SDK.")],
    user_profile_dir: Annotated[
        Path | None,
        typer.Option("--user-profile-dir", help="Per-user SDK folder used for user-local installs."),
    ] = None,
    global_json: Annotated[
        Path | None,
        typer.Option("--global-json", help="global.json that may pin a workload version."),
    ] = None,
    global_json_from: Annotated[
        Path | None,
        typer.Option("--global-json-from", help="Search this folder and its parents for global.json."),
    ] = None,
    workload_set_version: Annotated[
        str | None,
        typer.Option("--workload-set-version", help="Resolve against this workload set version."),
    ] = None,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable coloured output.")] = False,
    no_emoji: Annotated[bool, typer.Option("--no-emoji", help="Disable emoji output.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Print resolver debug traces.")] = False,
) -> None:
    """Capture resolver options shared by every command."""

    if global_json is not None and global_json_from is not None:
        raise typer.BadParameter("Use either --global-json or --global-json-from, not both.")
    if verbose:
        enable_debug_logging()
    if global_json_from is not None:
        global_json = find_global_json(global_json_from.expanduser())
    ctx.obj = ResolverOptions(
        sdk_root=sdk_root.expanduser(),
        sdk_version=sdk_version,
        user_profile_dir=user_profile_dir.expanduser() if user_profile_dir is not None else None,
        global_json=global_json.expanduser() if global_json is not None else None,
        workload_set_version=workload_set_version,
        use_color=not no_color and detect_tty(),
        use_emoji=not no_emoji,
    )


@app.command("manifests")
def manifests_command(ctx: typer.Context, as_json: JsonOption = False) -> None:
    """List the resolved manifests in load order."""

    options = options_from_context(ctx)
    band, manifests = run_query(options, lambda provider: (provider.get_sdk_feature_band(), provider.get_manifests()))

    if as_json:
        typer.echo(dump_json(manifests_payload(manifests)))
        return
    if not manifests:
        info("No workload manifests found.", use_emoji=options.use_emoji, use_color=options.use_color)
        return
    console = console_for(color=options.use_color, emoji=options.use_emoji)
    section(f"Feature band {band}", use_color=options.use_color)
    console.print(build_manifests_table(manifests, color=options.use_color))


@app.command("version")
def version_command(ctx: typer.Context, as_json: JsonOption = False) -> None:
    """Print the workload version of the SDK."""

    options = options_from_context(ctx)
    version_info = run_query(options, lambda provider: provider.get_workload_version_info())

    if as_json:
        typer.echo(dump_json(version_payload(version_info)))
        return
    typer.echo(version_info.version)
    if not version_info.is_installed:
        warn(
            f"Workload version {version_info.version} from {version_info.global_json_path} is not installed. "
            'Run "dotnet workload restore" to install it.',
            use_emoji=options.use_emoji,
            use_color=options.use_color,
        )
    elif version_info.workload_sets_enabled_without_workload_set:
        warn(
            "Workload sets are enabled but no workload set is installed.",
            use_emoji=options.use_emoji,
            use_color=options.use_color,
        )


@app.command("sets")
def sets_command(
    ctx: typer.Context,
    as_json: JsonOption = False,
    all_bands: Annotated[bool, typer.Option("--all-bands", help="Include every feature band.")] = False,
) -> None:
    """List the installed workload sets."""

    options = options_from_context(ctx)
    workload_sets = run_query(
        options,
        lambda provider: (
            provider.get_all_available_workload_sets() if all_bands else provider.get_available_workload_sets()
        ),
    )

    if as_json:
        typer.echo(dump_json(workload_sets_payload(workload_sets)))
        return
    if not workload_sets:
        ok("No workload sets installed.", use_emoji=options.use_emoji, use_color=options.use_color)
        return
    console = console_for(color=options.use_color, emoji=options.use_emoji)
    console.print(build_workload_sets_table(workload_sets, color=options.use_color))


__all__ = ["app"]
