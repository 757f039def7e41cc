"""find.py – Resolve a function by name.

Tries an exact name match first, then a substring match against demangled
C++ names, so ``funcdb find Heap::init`` finds ``_ZN4sead4Heap4initEv``.
"""

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from funcdb.cli import (
    TargetOption,
    error_exit,
    function_to_dict,
    get_config,
    json_print,
    load_registry,
)
from funcdb.errors import DemangleError
from funcdb.registry import demangle, find_function_fuzzy, to_absolute

app = typer.Typer(
    help="Find a function by exact or demangled name.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

funcdb find _ZN4sead4Heap4initEv       Exact mangled name

funcdb find Heap::init                 Substring of the demangled name

funcdb find Heap::init --json          Machine-readable output

[dim]When several functions contain the query in their demangled names,
any one of them may be reported.[/dim]""",
)


@app.callback(invoke_without_command=True)
def main(
    name: str = typer.Argument(..., help="Exact name or part of a demangled name"),
    target: str | None = TargetOption,
    jobs: int | None = typer.Option(None, "--jobs", "-j", min=1, help="Worker threads"),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON"),
) -> None:
    """Look up a function by name and print its entry."""
    cfg = get_config(target, json_mode=json_output)
    functions = load_registry(cfg, json_mode=json_output)

    info = find_function_fuzzy(functions, name, jobs=jobs)
    if info is None:
        error_exit(f"no function matches {name!r}", json_mode=json_output)

    try:
        demangled = demangle(info.name)
    except DemangleError:
        demangled = ""

    if json_output:
        data = function_to_dict(info, cfg.address_base)
        data["demangled"] = demangled
        json_print(data)
        return

    tbl = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    tbl.add_column("Address")
    tbl.add_column("Status")
    tbl.add_column("Size", justify="right")
    tbl.add_column("Name")
    tbl.add_row(
        f"0x{to_absolute(info.addr, cfg.address_base):016x}",
        info.status.description,
        str(info.size),
        escape(info.name),
    )
    console = Console()
    console.print(tbl)
    if demangled:
        console.print(f"[dim]{escape(demangled)}[/dim]", highlight=False)


def main_entry() -> None:
    """Run the find CLI app."""
    app()


if __name__ == "__main__":
    main_entry()
