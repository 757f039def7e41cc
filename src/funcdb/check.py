"""check.py – Validate the function list.

Loads the CSV with every load-time check (header, per-row parsing, names on
decompiled functions, duplicate names) and reports the result.
"""

import typer
from rich.console import Console

from funcdb.cli import TargetOption, get_config, json_print, load_registry

app = typer.Typer(
    help="Validate the function list CSV.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

funcdb check                     Validate the default target's function list

funcdb check -t main --json      Machine-readable result

[dim]Exits with status 1 and prints the first problem found (or every
duplicated name) when the list is invalid.[/dim]""",
)


@app.callback(invoke_without_command=True)
def main(
    target: str | None = TargetOption,
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON"),
) -> None:
    """Load and validate the function list."""
    cfg = get_config(target, json_mode=json_output)
    functions = load_registry(cfg, json_mode=json_output)
    named = sum(1 for info in functions if info.name)

    if json_output:
        json_print(
            {
                "target": cfg.target_name,
                "path": str(cfg.functions_csv),
                "ok": True,
                "functions": len(functions),
                "named": named,
            }
        )
        return

    console = Console(stderr=True)
    console.print(
        f"[green]OK[/green] {cfg.functions_csv.name}: "
        f"{len(functions):,} functions ({named:,} named)",
        highlight=False,
    )


def main_entry() -> None:
    """Run the check CLI app."""
    app()


if __name__ == "__main__":
    main_entry()
