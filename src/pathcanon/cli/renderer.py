"""Rich-based terminal output for the pathcanon CLI."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..canon import CanonTrace, Component
from ..config import AppConfig
from ..selftest import CheckResult

console = Console(stderr=True)

# ---------------------------------------------------------------------------
# Color palette
# ---------------------------------------------------------------------------

GOLD = "#C5A059"  # accents, table titles
SLATE = "#94A3B8"  # labels
MUTED = "#8b8b8b"  # elided components, secondary text
CHROME = "#6b7280"  # hints, summaries
ERROR_RED = "#CD6B6B"  # invalid paths and failures


def _show(value: str | None) -> str:
    """Quote a path for display; None means the path is invalid."""
    if value is None:
        return "(invalid)"
    return repr(value)


def render_error(message: str) -> None:
    console.print(f"[{ERROR_RED}]{escape(message)}[/{ERROR_RED}]")


def render_invalid(path: str) -> None:
    render_error(f"invalid path: {path}")


def render_components(title: str, components: list[Component]) -> None:
    """Render a component table: index, length, text, state."""
    table = Table(title=title, show_header=True, header_style="bold", title_style=GOLD)
    table.add_column("#", justify="right", style=CHROME)
    table.add_column("Len", justify="right")
    table.add_column("Component", style="cyan")
    table.add_column("State")

    for index, component in enumerate(components):
        if component.elided:
            state = f"[{MUTED}]elided[/{MUTED}]"
        elif not component.text:
            state = f"[{MUTED}]empty[/{MUTED}]"
        else:
            state = "[green]live[/green]"
        table.add_row(str(index), str(component.length), escape(component.text), state)

    console.print(table)


def render_trace(trace: CanonTrace) -> None:
    """Render the split and resolved component tables of a canonicalization."""
    console.print(f"[{SLATE}]in:[/{SLATE}] {escape(_show(trace.path))} [{CHROME}]({trace.style.name})[/{CHROME}]")
    if trace.volume:
        console.print(f"[{SLATE}]volume:[/{SLATE}] {escape(_show(trace.volume))}")
    if not trace.split:
        console.print(f"[{CHROME}]Nothing to resolve.[/{CHROME}]")
    else:
        render_components(f"Split ({len(trace.split)})", trace.split)
        render_components("Resolved", trace.resolved)
    if trace.valid:
        console.print(f"[{SLATE}]out:[/{SLATE}] {escape(_show(trace.result))}")
    else:
        render_error(trace.error or "invalid path")


def render_check_results(style_name: str, results: list[CheckResult]) -> None:
    """Render a self-check summary; failures get a row each."""
    failures = [r for r in results if not r.passed]
    passed = len(results) - len(failures)

    if failures:
        table = Table(title=f"{style_name} failures", show_header=True, header_style="bold", title_style=ERROR_RED)
        table.add_column("Path", style="cyan")
        table.add_column("Expected")
        table.add_column("Got")
        for r in failures:
            table.add_row(escape(_show(r.case.path)), escape(_show(r.case.expected)), escape(_show(r.actual)))
        console.print(table)

    color = "green" if not failures else ERROR_RED
    console.print(f"[{color}]{style_name}: {passed}/{len(results)} passed[/{color}]")


def render_config(config: AppConfig) -> None:
    table = Table(title="Configuration", show_header=False, title_style=GOLD)
    table.add_column("Key", style=SLATE)
    table.add_column("Value")
    table.add_row("source", escape(str(config.source)) if config.source else f"[{CHROME}](defaults)[/{CHROME}]")
    table.add_row("canon.style", config.canon.style)
    table.add_row("canon.debug", "yes" if config.canon.debug else "no")
    table.add_row("logging.level", config.logging.level)
    console.print(table)
