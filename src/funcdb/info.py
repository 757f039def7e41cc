"""info.py – Show the named function at an address."""

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
    parse_va,
)
from funcdb.errors import AddressRangeError
from funcdb.registry import make_known_function_map, to_relative

app = typer.Typer(
    help="Show the named function at an absolute address.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

funcdb info 0x7100000040               Named function starting at the address

funcdb info 7100000040 --json          Bare hex, JSON output""",
)


@app.callback(invoke_without_command=True)
def main(
    address: str = typer.Argument(..., help="Absolute function address (hex)"),
    target: str | None = TargetOption,
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON"),
) -> None:
    """Print the named function starting at *address*."""
    cfg = get_config(target, json_mode=json_output)
    absolute = parse_va(address, json_mode=json_output)
    try:
        addr = to_relative(absolute, cfg.address_base)
    except AddressRangeError as exc:
        error_exit(str(exc), json_mode=json_output)

    known = make_known_function_map(load_registry(cfg, json_mode=json_output))
    info = known.get(addr)
    if info is None:
        error_exit(f"no named function at 0x{absolute:016x}", json_mode=json_output)

    if json_output:
        json_print(function_to_dict(info, cfg.address_base))
        return

    console = Console()
    console.print(
        f"0x{absolute:016x}  {info.status.code}  {info.size:06}  [bold]{escape(info.name)}[/bold]"
        f"  [dim]({info.status.description})[/dim]",
        highlight=False,
    )


def main_entry() -> None:
    """Run the info CLI app."""
    app()


if __name__ == "__main__":
    main_entry()
