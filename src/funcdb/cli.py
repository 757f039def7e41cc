"""Shared CLI utilities for funcdb commands.

Provides the common ``--target`` option, config and registry loading helpers,
and standardised error / JSON output so every command reports the same way.

Usage in a command::

    import typer
    from funcdb.cli import TargetOption, error_exit, get_config, load_registry

    app = typer.Typer()

    @app.callback(invoke_without_command=True)
    def main(target: str | None = TargetOption) -> None:
        cfg = get_config(target)
        functions = load_registry(cfg)
        ...
"""

from __future__ import annotations

import json
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from funcdb.config import ProjectConfig, load_config
from funcdb.errors import RegistryError
from funcdb.registry import FunctionInfo, load_functions, to_absolute

# Re-usable Typer option for --target
TargetOption: str | None = typer.Option(
    None,
    "--target",
    "-t",
    help="Target name from funcdb.toml (default: first target).",
)


def get_config(target: str | None = None, *, json_mode: bool = False) -> ProjectConfig:
    """Load the project config for *target*, exiting on failure."""
    try:
        return load_config(target=target)
    except (FileNotFoundError, KeyError, ValueError) as exc:
        error_exit(str(exc), json_mode=json_mode)


def load_registry(cfg: ProjectConfig, *, json_mode: bool = False) -> list[FunctionInfo]:
    """Load and validate the target's function list, exiting on failure."""
    try:
        return load_functions(cfg.functions_csv, cfg.address_base)
    except RegistryError as exc:
        error_exit(f"{cfg.functions_csv}: {exc}", json_mode=json_mode)
    except OSError as exc:
        error_exit(f"cannot read {cfg.functions_csv}: {exc}", json_mode=json_mode)


# ---------------------------------------------------------------------------
# Standardised output helpers
# ---------------------------------------------------------------------------

_err_console = Console(stderr=True)


def error_exit(msg: str, *, json_mode: bool = False, code: int = 1) -> NoReturn:
    """Print *msg* as an error and ``raise typer.Exit(code)``."""
    if json_mode:
        print(json.dumps({"error": msg}, indent=2))
    else:
        _err_console.print(f"[red bold]error:[/red bold] {escape(msg)}", highlight=False)
    raise typer.Exit(code=code)


def json_print(data: dict[str, Any] | list[Any]) -> None:
    """Print *data* as pretty-printed JSON to stdout."""
    print(json.dumps(data, indent=2))


def parse_va(va_str: str, *, json_mode: bool = False) -> int:
    """Parse an absolute hex address, exiting on invalid input.

    Accepts ``0x``-prefixed or bare hex strings.
    """
    try:
        return int(va_str.strip(), 16)
    except ValueError:
        error_exit(f"Invalid hex address: {va_str!r}", json_mode=json_mode)


def function_to_dict(info: FunctionInfo, base: int) -> dict[str, Any]:
    """Serialize a function entry for JSON output (absolute address)."""
    return {
        "address": f"0x{to_absolute(info.addr, base):016x}",
        "size": info.size,
        "name": info.name,
        "status": info.status.code,
        "status_description": info.status.description,
        "decompiled": info.is_decompiled,
    }
