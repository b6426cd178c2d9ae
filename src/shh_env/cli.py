"""CLI adapter for ``shh_env`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose the secret store, the layered list view, and environment injection as
the ``shh-env`` command line tool.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command wiring traceback handling and runtime settings.
* :func:`cli_set` / :func:`cli_get` / :func:`cli_delete` – single-secret
  commands.
* :func:`cli_list` – tree view of all namespaces or the active layers.
* :func:`cli_run` – run a command with the merged secrets injected.
* :func:`cli_info` – distribution metadata.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
Outermost layer. Commands call :mod:`shh_env.core` and never reach into
adapter details. The store, enumerator and spawner are looked up on the Click
context object first, which lets tests inject fakes through
``CliRunner.invoke(..., obj={...})``.
"""

from __future__ import annotations

import sys
from importlib import metadata
from typing import Callable, Final, Optional, Sequence, TextIO

import lib_cli_exit_tools
import rich_click as click

from .adapters.process.spawn import spawn_with_env
from .application.ports import Enumerator, SecretStore
from .core import default_enumerator, default_store, delete_secret, get_secret, list_view, resolve_secrets, set_secret
from .domain.errors import SpawnError
from .domain.naming import build_namespace, validate_key
from .observability import configure_logging
from .settings import Settings, load_settings

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_RUN_CONTEXT_SETTINGS = {
    **CLICK_CONTEXT_SETTINGS,
    "ignore_unknown_options": True,
    "allow_interspersed_args": False,
}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000
_DISTRIBUTION: Final[str] = "shh-env"
_COMMAND_NOT_FOUND: Final[int] = 127

Spawner = Callable[[str, Sequence[str], dict[str, str]], int]


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` for source checkouts."""

    try:
        return metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "0.0.0"


def _namespace_options(command: Callable[..., None]) -> Callable[..., None]:
    """Attach the shared ``--service`` / ``--env`` options to *command*."""

    command = click.option("--env", "environment", default=None, help="Environment layer (requires --service)")(command)
    return click.option("--service", default=None, help="Service namespace")(command)


@click.group(
    help="Load secrets from the OS keychain and inject them as environment variables",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name=_DISTRIBUTION,
    message="shh-env version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling and runtime settings.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and attaches a stderr
        log handler when ``SHH_ENV_LOG_LEVEL`` is set.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    settings = ctx.obj.get("settings") or load_settings()
    ctx.obj["settings"] = settings
    if settings.log_level and "log_handler" not in ctx.obj:
        ctx.obj["log_handler"] = configure_logging(settings.log_level)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        click.echo(f"{_DISTRIBUTION} (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', _DISTRIBUTION)}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("set", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("key")
@_namespace_options
@click.option("--value", default=None, help="Secret value (prompted for when omitted)")
@click.pass_context
def cli_set(ctx: click.Context, key: str, service: Optional[str], environment: Optional[str], value: Optional[str]) -> None:
    """Store a secret in the keychain.

    KEY is the environment variable name, e.g. ``API_KEY``. Without
    ``--value`` the secret is read from a hidden prompt so it stays out of the
    shell history. Piped input is read from the first line of stdin.
    """

    validate_key(key)
    target = build_namespace(service, environment)
    secret = value or _read_secret(key, click.get_text_stream("stdin"))
    if not secret:
        raise click.ClickException("No value provided")
    set_secret(key, secret, service, environment, store=_store(ctx))
    click.echo(f"✓ Set {key} in {target}")


@cli.command("get", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("key")
@_namespace_options
@click.pass_context
def cli_get(ctx: click.Context, key: str, service: Optional[str], environment: Optional[str]) -> None:
    """Print a secret's value for use in scripts."""

    target = build_namespace(service, environment)
    value = get_secret(key, service, environment, store=_store(ctx))
    if value is None:
        raise click.ClickException(f"{key} not found in {target}")
    click.echo(value)


@cli.command("delete", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("key")
@_namespace_options
@click.pass_context
def cli_delete(ctx: click.Context, key: str, service: Optional[str], environment: Optional[str]) -> None:
    """Remove a secret from the keychain."""

    target = build_namespace(service, environment)
    if not delete_secret(key, service, environment, store=_store(ctx)):
        raise click.ClickException(f"{key} not found in {target}")
    click.echo(f"✓ Deleted {key} from {target}")


@cli.command("list", context_settings=CLICK_CONTEXT_SETTINGS)
@_namespace_options
@click.pass_context
def cli_list(ctx: click.Context, service: Optional[str], environment: Optional[str]) -> None:
    """List secrets as a tree.

    Without ``--service`` every namespace is shown. With ``--service`` the
    merged view ``_ → service → service::env`` is shown and overridden keys are
    struck through.
    """

    for line in list_view(service, environment, enumerator=_enumerator(ctx)):
        click.echo(line)


@cli.command("run", context_settings=_RUN_CONTEXT_SETTINGS)
@_namespace_options
@click.argument("command", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def cli_run(ctx: click.Context, service: Optional[str], environment: Optional[str], command: Sequence[str]) -> None:
    """Run COMMAND with the merged secrets as environment variables.

    Separate the command from shh-env options with ``--`` when it takes
    options of its own. Exits with the command's exit status, or 127 when it
    cannot be started.
    """

    if not command:
        raise click.UsageError("No command specified. Usage: shh-env run [--service S] [--env E] -- COMMAND [ARGS...]")
    overlay = resolve_secrets(service, environment, store=_store(ctx), enumerator=_enumerator(ctx))
    spawner: Spawner = ctx.obj.get("spawner") or spawn_with_env
    try:
        exit_code = spawner(command[0], list(command[1:]), overlay)
    except SpawnError as exc:
        click.echo(f"Error: {exc}", err=True)
        exit_code = _COMMAND_NOT_FOUND
    ctx.exit(exit_code)


def _read_secret(key: str, stdin: TextIO) -> str:
    """Prompt for a hidden value on a terminal, otherwise read the first stdin line."""

    if stdin.isatty():
        return click.prompt(f"Enter value for {key}", hide_input=True, default="", show_default=False)
    return stdin.readline().strip()


def _store(ctx: click.Context) -> SecretStore:
    """Return the injected store or the keyring-backed default."""

    return ctx.obj.get("store") or default_store()


def _enumerator(ctx: click.Context) -> Enumerator:
    """Return the injected enumerator or the host platform default."""

    settings: Settings = ctx.obj["settings"]
    return ctx.obj.get("enumerator") or default_enumerator(settings)


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name=_DISTRIBUTION,
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
