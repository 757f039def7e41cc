"""mark.py – Change the status or name of one function and save the list.

The function is selected by absolute address (``0x...``) or by name, using
the same exact-then-demangled lookup as ``funcdb find``.  The edited list is
validated again before the file is rewritten, so an edit that would leave a
decompiled function unnamed or duplicate a name is refused.

Usage::

    funcdb mark 0x7100000040 --status O --name _ZN4sead4Heap4initEv
    funcdb mark Heap::init --status m
    funcdb mark Heap::init --status U --dry-run --json
"""

from dataclasses import replace
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from funcdb.cli import (
    TargetOption,
    error_exit,
    function_to_dict,
    get_config,
    json_print,
    load_registry,
)
from funcdb.errors import RegistryError
from funcdb.registry import (
    FunctionInfo,
    Status,
    find_function_fuzzy,
    parse_address,
    validate_functions,
    write_functions,
)

app = typer.Typer(
    help="Change a function's status or name and rewrite the function list.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

funcdb mark 0x7100000040 --status O --name foo     Mark by address

funcdb mark Heap::init --status m                  Mark by (demangled) name

funcdb mark foo --status U --dry-run               Show what would change

[bold]Status codes:[/bold]

O matching · m non-matching (minor) · M non-matching (major) ·
U not decompiled · W WIP · L library function""",
)


def _select(
    functions: list[FunctionInfo], query: str, base: int, json_mode: bool
) -> int:
    """Return the list index of the function *query* refers to."""
    if query.startswith("0x"):
        try:
            addr = parse_address(query, base)
        except RegistryError as exc:
            error_exit(str(exc), json_mode=json_mode)
        for i, info in enumerate(functions):
            if info.addr == addr:
                return i
        error_exit(f"no function at {query}", json_mode=json_mode)

    found = find_function_fuzzy(functions, query)
    if found is None:
        error_exit(f"no function matches {query!r}", json_mode=json_mode)
    # Identity, not equality: two unnamed entries can compare equal.
    return next(i for i, info in enumerate(functions) if info is found)


def apply_edit(
    functions: list[FunctionInfo],
    index: int,
    status: Status | None = None,
    name: str | None = None,
) -> FunctionInfo:
    """Replace ``functions[index]`` with an edited copy and return the copy."""
    updated = functions[index]
    if status is not None:
        updated = replace(updated, status=status)
    if name is not None:
        updated = replace(updated, name=name)
    functions[index] = updated
    return updated


@app.callback(invoke_without_command=True)
def main(
    query: str = typer.Argument(..., help="Absolute address (0x...) or function name"),
    status: str | None = typer.Option(
        None, "--status", "-s", help="New status code: O, m, M, U, W or L"
    ),
    name: str | None = typer.Option(None, "--name", "-n", help="New function name"),
    target: str | None = TargetOption,
    dry_run: bool = typer.Option(False, "--dry-run", help="Show the change without writing"),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON"),
) -> None:
    """Edit one function entry and rewrite the function list."""
    if status is None and name is None:
        error_exit("nothing to change; pass --status and/or --name", json_mode=json_output)

    new_status = None
    if status is not None:
        try:
            new_status = Status.from_code(status)
        except RegistryError as exc:
            error_exit(str(exc), json_mode=json_output)

    cfg = get_config(target, json_mode=json_output)
    functions = load_registry(cfg, json_mode=json_output)

    index = _select(functions, query, cfg.address_base, json_output)
    before = functions[index]
    after = apply_edit(functions, index, status=new_status, name=name)

    try:
        validate_functions(functions, cfg.address_base)
    except RegistryError as exc:
        error_exit(f"refusing to save: {exc}", json_mode=json_output)

    if not dry_run:
        try:
            write_functions(cfg.functions_csv, functions, cfg.address_base)
        except (RegistryError, OSError) as exc:
            error_exit(f"cannot write {cfg.functions_csv}: {exc}", json_mode=json_output)

    if json_output:
        result: dict[str, Any] = {
            "before": function_to_dict(before, cfg.address_base),
            "after": function_to_dict(after, cfg.address_base),
            "written": not dry_run,
        }
        json_print(result)
        return

    console = Console(stderr=True)
    prefix = "[yellow](dry run)[/yellow] " if dry_run else ""
    change = (
        f"{before.name or '<unnamed>'} [{before.status.code}] -> "
        f"{after.name or '<unnamed>'} [{after.status.code}]"
    )
    console.print(prefix + escape(change), highlight=False)


def main_entry() -> None:
    """Run the mark CLI app."""
    app()


if __name__ == "__main__":
    main_entry()
