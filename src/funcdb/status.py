"""status.py – Decompilation progress overview.

Counts functions and bytes per status in the function list and prints a
Rich-formatted summary, or JSON with ``--json``.
"""

from dataclasses import dataclass, field

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from funcdb.cli import TargetOption, get_config, json_print, load_registry
from funcdb.registry import FunctionInfo, Status

# ---------------------------------------------------------------------------
# Data collection
# ---------------------------------------------------------------------------


@dataclass
class RegistryStats:
    """Aggregated counts for one function list."""

    name: str
    function_count: int = 0
    total_bytes: int = 0

    status_counts: dict[Status, int] = field(default_factory=dict)
    status_bytes: dict[Status, int] = field(default_factory=dict)

    @property
    def decompiled_count(self) -> int:
        return sum(n for s, n in self.status_counts.items() if s.is_decompiled)

    @property
    def decompiled_bytes(self) -> int:
        return sum(n for s, n in self.status_bytes.items() if s.is_decompiled)

    @property
    def coverage_pct(self) -> float:
        """Decompiled bytes as a percentage of all listed bytes."""
        if self.total_bytes == 0:
            return 0.0
        return self.decompiled_bytes / self.total_bytes * 100.0

    def to_dict(self) -> dict[str, object]:
        """Serialize to a plain dict for JSON output."""
        return {
            "target": self.name,
            "functions": self.function_count,
            "bytes": self.total_bytes,
            "decompiled": self.decompiled_count,
            "decompiled_bytes": self.decompiled_bytes,
            "coverage_pct": round(self.coverage_pct, 2),
            "by_status": {
                s.code: {
                    "description": s.description,
                    "count": self.status_counts.get(s, 0),
                    "bytes": self.status_bytes.get(s, 0),
                }
                for s in Status
            },
        }


def collect_stats(name: str, functions: list[FunctionInfo]) -> RegistryStats:
    """Aggregate per-status counts and sizes."""
    stats = RegistryStats(name=name, function_count=len(functions))
    for info in functions:
        stats.status_counts[info.status] = stats.status_counts.get(info.status, 0) + 1
        stats.status_bytes[info.status] = stats.status_bytes.get(info.status, 0) + info.size
        stats.total_bytes += info.size
    return stats


# ---------------------------------------------------------------------------
# Rich output
# ---------------------------------------------------------------------------

_STATUS_COLORS = {
    Status.MATCHING: "green",
    Status.NON_MATCHING_MINOR: "cyan",
    Status.NON_MATCHING_MAJOR: "yellow",
    Status.WIP: "magenta",
    Status.NOT_DECOMPILED: "red",
    Status.LIBRARY: "blue",
}


def _render(console: Console, stats: RegistryStats) -> None:
    """Print a Rich panel for one function list."""
    title = Text(f"  {stats.name}  ", style="bold white on blue")

    tbl = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    tbl.add_column("Code")
    tbl.add_column("Status")
    tbl.add_column("Count", justify="right")
    tbl.add_column("Bytes", justify="right")
    tbl.add_column("", justify="left")  # bar

    for status in Status:
        count = stats.status_counts.get(status, 0)
        if count == 0:
            continue
        size = stats.status_bytes.get(status, 0)
        bar = "█" * int(size / max(stats.total_bytes, 1) * 20)
        color = _STATUS_COLORS[status]
        tbl.add_row(
            status.code,
            f"[{color}]{status.description}[/]",
            f"{count:,}",
            f"{size:,}",
            f"[{color}]{bar}[/]",
        )

    subtitle = "  ·  ".join(
        [
            f"[bold]{stats.decompiled_count:,}[/]/{stats.function_count:,} functions decompiled",
            f"[bold]{stats.decompiled_bytes:,}[/]/{stats.total_bytes:,} bytes",
            f"[bold]{stats.coverage_pct:.3f}%[/]",
        ]
    )
    console.print(Panel(tbl, title=title, subtitle=subtitle, border_style="blue"))


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="Decompilation progress overview.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

funcdb status                          Rich table per status

funcdb status --json                   Machine-readable JSON output

funcdb status -t main                  Status for a specific target

[dim]Functions marked O/m/M/W count as decompiled; U and L do not.[/dim]""",
)


@app.callback(invoke_without_command=True)
def main(
    target: str | None = TargetOption,
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON"),
) -> None:
    """Print an overview of decompilation progress."""
    cfg = get_config(target, json_mode=json_output)
    functions = load_registry(cfg, json_mode=json_output)
    stats = collect_stats(cfg.target_name, functions)

    if json_output:
        json_print(stats.to_dict())
        return

    console = Console(stderr=True)
    console.print()
    _render(console, stats)
    console.print()


def main_entry() -> None:
    """Run the status CLI app."""
    app()


if __name__ == "__main__":
    main_entry()
