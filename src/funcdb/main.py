"""main.py – Umbrella CLI entry point for funcdb.

Every funcdb command lives in its own module with a typer ``main`` callback.
The table below maps command names to those modules; each ``main`` is
registered as a flat ``funcdb <command>`` with the module's epilog as help text.
If a module cannot be imported, its command still shows up in ``--help`` and
prints the import error when run.
"""

import importlib
import sys
from collections.abc import Callable

import typer

app = typer.Typer(
    help="Function list tooling for decompilation projects.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Typical workflow:[/bold]
  funcdb status                  Progress per decompilation status
  funcdb find Heap::init         Locate a function by (demangled) name
  funcdb mark foo --status O     Record a matching function
  funcdb check                   Validate the function list
  funcdb format --check          Verify the file is canonical (CI)

[dim]All commands read the function list path and address base from funcdb.toml.[/dim]""",
)

# ---------------------------------------------------------------------------
# Subcommand registry
# ---------------------------------------------------------------------------

_SINGLE_COMMANDS: list[tuple[str, str, str]] = [
    ("check", "funcdb.check", "Validate the function list CSV."),
    ("status", "funcdb.status", "Decompilation progress overview."),
    ("find", "funcdb.find", "Find a function by exact or demangled name."),
    ("info", "funcdb.info", "Show the named function at an absolute address."),
    ("format", "funcdb.fmt", "Rewrite the function list in canonical form."),
    ("mark", "funcdb.mark", "Change a function's status or name."),
]


def _make_stub_cmd(mod_name: str, err: ImportError) -> Callable[[], None]:
    """Create a stub command function that reports a missing dependency."""

    def _stub() -> None:
        print(f"Error: could not load '{mod_name}': {err}", file=sys.stderr)
        raise typer.Exit(code=1)

    return _stub


for _name, _module, _help in _SINGLE_COMMANDS:
    try:
        _mod = importlib.import_module(_module)
        _epilog = getattr(_mod.app.info, "epilog", None)
        if not isinstance(_epilog, str):
            _epilog = None
        app.command(name=_name, help=_help, epilog=_epilog)(_mod.main)
    except ImportError as _exc:
        app.command(name=_name, help=f"[unavailable] {_help}")(_make_stub_cmd(_module, _exc))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
