from dataclasses import dataclass
import importlib
from importlib.metadata import PackageNotFoundError, version as package_version
import inspect
import json
from typing import Any, Callable

import typer

from trappack.core import TrapOutcome
from trappack.trap import (
    TrapConfigError,
    TrapPolicy,
    TrapTargetError,
    exception_name,
    get_active_policy,
    run_protected,
)

app = typer.Typer(help="TrapKit CLI")


@dataclass(slots=True)
class _OutputOptions:
    quiet: bool = False
    stable_json: bool = True


_OUTPUT_OPTIONS = _OutputOptions()


def _resolve_cli_version() -> str:
    try:
        return package_version("trapkit")
    except PackageNotFoundError:
        from trapkit import __version__ as local_version

        return local_version


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(_resolve_cli_version(), color=False)
    raise typer.Exit()


@app.callback()
def app_options(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show TrapKit version and exit.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Suppress non-error text output.",
    ),
    stable_json: bool = typer.Option(
        True,
        "--stable-json/--pretty-json",
        help="Emit stable compact JSON (or pretty JSON).",
    ),
) -> None:
    """Global output controls for all CLI commands."""
    _OUTPUT_OPTIONS.quiet = quiet
    _OUTPUT_OPTIONS.stable_json = stable_json


def _echo(message: str, *, err: bool = False) -> None:
    if _OUTPUT_OPTIONS.quiet and not err:
        return
    typer.echo(message, err=err)


def _echo_json(payload: dict[str, Any]) -> None:
    if _OUTPUT_OPTIONS.stable_json:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            separators=(",", ":"),
            default=repr,
        )
    else:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            indent=2,
            default=repr,
        )
    typer.echo(rendered)


def _resolve_target(target: str) -> Callable[[], object]:
    module_name, separator, attribute_path = target.partition(":")
    if not separator or not module_name or not attribute_path:
        raise TrapTargetError(f"target must be 'module:attribute', got {target!r}")

    try:
        resolved: Any = importlib.import_module(module_name)
    except Exception as error:
        raise TrapTargetError(
            f"cannot import module {module_name!r}: {error.__class__.__name__}: {error}"
        ) from error

    for part in attribute_path.split("."):
        try:
            resolved = getattr(resolved, part)
        except AttributeError as error:
            raise TrapTargetError(
                f"module {module_name!r} has no attribute {attribute_path!r}"
            ) from error

    if not callable(resolved):
        raise TrapTargetError(f"target {target!r} is not callable")
    if inspect.iscoroutinefunction(resolved):
        raise TrapTargetError(f"target {target!r} is a coroutine function; use a sync callable")
    return resolved


def _summarize(outcome: TrapOutcome) -> str:
    if outcome.error is None:
        return "protected call succeeded"
    name = exception_name(outcome.error) or "<unknown>"
    return f"protected call trapped {name}: {outcome.error.reason}"


@app.command()
def run(
    target: str = typer.Argument(..., help="Callable to run, as 'module:attribute'."),
    traceback: bool = typer.Option(
        False,
        "--traceback",
        help="Record the formatted traceback in the error metadata.",
    ),
    json_output: bool = typer.Option(
        True,
        "--json/--text",
        help="Print the outcome as JSON (or a one-line summary).",
    ),
) -> None:
    """Run a zero-argument callable under the exception trap."""
    try:
        env_policy = get_active_policy()
        callback = _resolve_target(target)
    except (TrapConfigError, TrapTargetError) as error:
        _echo(f"run failed: {error}", err=True)
        raise typer.Exit(code=2) from error

    policy = TrapPolicy(
        capture_traceback=traceback or env_policy.capture_traceback,
        trap_base_exceptions=env_policy.trap_base_exceptions,
    )
    outcome = run_protected(callback, policy=policy)

    if json_output:
        _echo_json(outcome.to_dict())
    else:
        _echo(_summarize(outcome))

    if not outcome.succeeded:
        raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
