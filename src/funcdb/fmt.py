"""fmt.py – Rewrite the function list in canonical form.

Loading and writing back normalises every row: lowercase 16-digit
addresses, zero-padded sizes, and the exact header.
"""

import typer
from rich.console import Console

from funcdb.cli import TargetOption, error_exit, get_config, load_registry
from funcdb.errors import FormatError
from funcdb.registry import format_functions, write_functions

app = typer.Typer(
    help="Rewrite the function list in canonical form.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

funcdb format                    Normalise the function list in place

funcdb format --check            Exit 1 if the file is not canonical (for CI)""",
)


@app.callback(invoke_without_command=True)
def main(
    target: str | None = TargetOption,
    check: bool = typer.Option(
        False, "--check", help="Only report whether the file would change"
    ),
) -> None:
    """Load, validate and rewrite the function list."""
    cfg = get_config(target)
    functions = load_registry(cfg)
    console = Console(stderr=True)

    try:
        text = format_functions(functions, cfg.address_base)
    except FormatError as exc:
        error_exit(str(exc))
    current = cfg.functions_csv.read_bytes().decode("utf-8")

    if check:
        if current != text:
            error_exit(f"{cfg.functions_csv.name} is not in canonical form")
        console.print(f"{cfg.functions_csv.name} is already canonical", highlight=False)
        return

    if current == text:
        console.print(f"{cfg.functions_csv.name} unchanged", highlight=False)
        return

    try:
        write_functions(cfg.functions_csv, functions, cfg.address_base)
    except OSError as exc:
        error_exit(f"cannot write {cfg.functions_csv}: {exc}")
    console.print(
        f"[green]Rewrote[/green] {cfg.functions_csv.name} ({len(functions):,} functions)",
        highlight=False,
    )


def main_entry() -> None:
    """Run the format CLI app."""
    app()


if __name__ == "__main__":
    main_entry()
