"""Rich formatting utilities for the CLI.

Keeps all Rich rendering (tables, panels) in one module that knows
nothing about how the values were produced.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from neuro_reader.domain.models.document import ReaderDocument, ReaderStats
    from neuro_reader.domain.models.settings import ReaderSettings
    from neuro_reader.domain.rules.adaptation import AdaptationProjection
    from neuro_reader.domain.rules.compositor import RenderDirectives

console = Console()


# ---------------------------------------------------------------------------
# Success / error panels
# ---------------------------------------------------------------------------


def success_panel(message: str, title: str = "Neuro Reader") -> None:
    """Print a green success panel."""
    console.print(Panel(message, title=title, border_style="green"))


def error_message(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]❌ {message}[/]")


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def settings_table(settings: ReaderSettings, title: str = "Reader Settings") -> None:
    """Print every settings field with its persisted (camelCase) name."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="bold")
    table.add_column("Field", style="dim")
    table.add_column("Value", justify="right")

    fields = type(settings).model_fields
    for field, value in settings.model_dump(mode="json").items():
        if isinstance(value, bool):
            shown = "[green]on[/]" if value else "[dim]off[/]"
        elif value is None:
            shown = "[dim]—[/]"
        else:
            shown = str(value)
        table.add_row(fields[field].alias or field, field, shown)

    console.print(table)


# ---------------------------------------------------------------------------
# Rendering directives
# ---------------------------------------------------------------------------


def directives_table(directives: RenderDirectives) -> None:
    """Print the compositor output plus its CSS equivalent."""
    table = Table(title="🖥️  Rendering Directives", show_header=True, header_style="bold magenta")
    table.add_column("Directive", style="bold")
    table.add_column("Value")

    table.add_row("Scale", f"{directives.scale:g}×")
    table.add_row("Letter spacing", f"{directives.letter_spacing_em:g} em")
    table.add_row("Line height", f"{directives.line_height:g}")
    table.add_row(
        "Colours",
        f"{directives.foreground} on {directives.background} ({directives.color_scheme.value})",
    )
    table.add_row("Transition", f"{directives.transition_ms} ms")

    if directives.stabilizer:
        bar = directives.stabilizer
        table.add_row("Stabilizer bar", f"{bar.width_percent:g}% wide at {bar.top_percent:g}%")
    else:
        table.add_row("Stabilizer bar", "[dim]off[/]")

    if directives.darkness_mask:
        mask = directives.darkness_mask
        table.add_row(
            "Darkness mask",
            f"band {mask.band_top_percent:g}%–{mask.band_bottom_percent:g}% "
            f"(height {mask.band_height_percent:g}%), edges {mask.edge_opacity:g}",
        )
    else:
        table.add_row("Darkness mask", "[dim]off[/]")

    console.print(table)

    css = Table(title="CSS", show_header=False)
    css.add_column("Property", style="cyan")
    css.add_column("Value")
    for prop, value in directives.css().items():
        css.add_row(prop, value)
    console.print(css)


# ---------------------------------------------------------------------------
# Adaptation
# ---------------------------------------------------------------------------


def adaptation_panel(projection: AdaptationProjection) -> None:
    """Print adaptation progress and the projected fields."""
    body = (
        f"Day [bold]{projection.days_since_start}[/] — "
        f"{projection.progress:.0f}% complete, "
        f"{projection.days_remaining} day(s) remaining\n\n"
        f"Line window: [bold]{projection.line_window_size}[/]\n"
        f"Peripheral darkness: [bold]{projection.peripheral_darkness_level}%[/]\n"
        f"Letter spacing: [bold]{projection.letter_spacing_percentage}%[/]"
    )
    console.print(Panel(body, title="🧠 Neural Adaptation", border_style="blue"))


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


def documents_table(documents: list[ReaderDocument], active_id: str | None = None) -> None:
    """Print the document library."""
    if not documents:
        console.print("[dim]The library is empty.[/]")
        return

    table = Table(title="📚 Library", show_header=True, header_style="bold cyan")
    table.add_column("", width=1)
    table.add_column("ID", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Page", justify="right")

    for doc in documents:
        pages = f"{doc.current_page}/{doc.page_count}" if doc.page_count else f"{doc.current_page}/?"
        table.add_row(
            "▶" if doc.id == active_id else "",
            doc.id,
            doc.title,
            doc.author or "—",
            pages,
        )
    console.print(table)


def stats_line(stats: ReaderStats) -> None:
    console.print(
        f"[cyan]{stats.completion_percentage:.1f}% complete[/] · "
        f"{stats.pages_read} page(s) read · "
        f"~{stats.reading_time / 60:.0f} min at {stats.words_per_minute} wpm"
    )
