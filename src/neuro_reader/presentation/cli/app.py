"""Thin CLI wrapper — Typer commands that delegate to the application layer.

All services are obtained through the Container (bootstrap.py).
No direct imports from infrastructure adapters here, except the Qt timer
used by ``adapt watch``.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any, Optional

import typer
from pydantic import ValidationError
from rich.logging import RichHandler

from neuro_reader.application.error_messages import friendly_message
from neuro_reader.domain.errors import NeuroReaderError
from neuro_reader.domain.rules import constants as c
from neuro_reader.domain.rules.compositor import compose
from neuro_reader.presentation.cli.formatters import (
    adaptation_panel,
    console,
    directives_table,
    documents_table,
    error_message,
    settings_table,
    stats_line,
    success_panel,
)

if TYPE_CHECKING:
    from neuro_reader.bootstrap import Container

app = typer.Typer(
    name="neuro-reader",
    help="📖 Adaptive document reader — calibration, presets and neural adaptation",
    rich_markup_mode="rich",
    no_args_is_help=True,
)

settings_app = typer.Typer(name="settings", help="⚙️  Show and edit reader settings", no_args_is_help=True)
preset_app = typer.Typer(name="preset", help="🎛️  Apply an accessibility preset", no_args_is_help=True)
adapt_app = typer.Typer(name="adapt", help="🧠 Neural adaptation schedule", no_args_is_help=True)
library_app = typer.Typer(name="library", help="📚 Manage documents", no_args_is_help=True)
config_app = typer.Typer(name="config", help="🔧 Runtime configuration", no_args_is_help=True)

app.add_typer(settings_app, name="settings")
app.add_typer(preset_app, name="preset")
app.add_typer(adapt_app, name="adapt")
app.add_typer(library_app, name="library")
app.add_typer(config_app, name="config")

# Options from the root callback, read by every command
_options: dict[str, Any] = {"config": None, "data_dir": None}


def _container() -> "Container":
    from neuro_reader.bootstrap import Container

    return Container(config_path=_options["config"], data_dir=_options["data_dir"])


def _fail(exc: Exception) -> None:
    if isinstance(exc, NeuroReaderError):
        error_message(friendly_message(exc))
        console.print(f"[dim]{exc}[/]")
    else:
        error_message(str(exc))
    raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    config: Annotated[
        Optional[str], typer.Option("--config", "-c", help="Path to a JSON config file")
    ] = None,
    data_dir: Annotated[
        Optional[str], typer.Option("--data-dir", help="Where settings and documents are stored")
    ] = None,
) -> None:
    """Adaptive document reader."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    _options["config"] = config
    _options["data_dir"] = data_dir


# ---------------------------------------------------------------------------
# neuro-reader settings
# ---------------------------------------------------------------------------

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _field_name(name: str) -> str:
    """Accept ``lineWindowSize``, ``line-window-size`` or ``line_window_size``."""
    return _CAMEL_BOUNDARY.sub("_", name).replace("-", "_").lower()


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


@settings_app.command("show")
def settings_show() -> None:
    """Show the current settings."""
    settings_table(_container().settings_store.get())


@settings_app.command("set")
def settings_set(
    name: Annotated[str, typer.Argument(help="Setting name, e.g. lineWindowSize")],
    value: Annotated[str, typer.Argument(help="New value (JSON literal or text)")],
) -> None:
    """Change one setting."""
    container = _container()
    field = _field_name(name)
    try:
        # The attached scheduler stamps the start date when adaptation is switched on
        with container.adaptation_scheduler():
            updated = container.settings_store.update({field: _parse_value(value)})
    except ValidationError as exc:
        _fail(ValueError(f"Invalid value for {name}: {exc.errors()[0]['msg']}"))
        return
    success_panel(f"✅ [bold]{name}[/] = {getattr(updated, field)}", title="⚙️  Settings")


@settings_app.command("reset")
def settings_reset() -> None:
    """Restore factory defaults."""
    settings_table(_container().settings_store.reset(), title="Reader Settings (defaults)")


@settings_app.command("toggle-dark")
def settings_toggle_dark() -> None:
    """Switch between dark and light mode."""
    updated = _container().settings_store.toggle_dark_mode()
    success_panel(f"Dark mode {'on' if updated.is_dark_mode else 'off'}", title="🌓 Theme")


# ---------------------------------------------------------------------------
# neuro-reader preset
# ---------------------------------------------------------------------------


@preset_app.command("low-vision")
def preset_low_vision() -> None:
    """Larger text, narrow line window, maximum spacing."""
    settings_table(_container().apply_preset().low_vision(), title="Low Vision Profile")


@preset_app.command("academic")
def preset_academic() -> None:
    """Dense layout with a wide line window for long-form reading."""
    settings_table(_container().apply_preset().academic(), title="Academic Reading Mode")


# ---------------------------------------------------------------------------
# neuro-reader calibrate
# ---------------------------------------------------------------------------


@app.command()
def calibrate(
    crowding: Annotated[
        float, typer.Option("--crowding", help="Crowding threshold (10-50)", min=1)
    ],
    amplitude: Annotated[
        int, typer.Option("--amplitude", help="Preferred text block size: 10, 15 or 20")
    ],
    stability: Annotated[
        Optional[int],
        typer.Option("--stability", help="Fixation stability (0-100) measured elsewhere"),
    ] = None,
    simulate: Annotated[
        bool, typer.Option("--simulate", help="Simulate the fixation measurement")
    ] = False,
) -> None:
    """Run the three-step calibration and apply the derived settings."""
    if amplitude not in c.SACCADE_AMPLITUDE_CHOICES:
        error_message(f"--amplitude must be one of {', '.join(map(str, c.SACCADE_AMPLITUDE_CHOICES))}")
        raise typer.Exit(code=1)
    if stability is None and not simulate:
        error_message("Pass --stability N or --simulate.")
        raise typer.Exit(code=1)

    container = _container()
    wizard = container.calibration()
    with wizard:
        wizard.start()
        if stability is not None:
            wizard.complete_step(stability)
        else:
            from neuro_reader.infrastructure.gaze.simulated import SimulatedGazeSource

            gaze = SimulatedGazeSource(container.config.calibration.max_simulated_deviation)
            while wizard.samples_taken < container.config.calibration.sample_count:
                wizard.record_sample(gaze.deviation())
        console.print(f"Fixation stability: [bold]{wizard.result.fixation_stability}%[/]")
        wizard.complete_step(crowding)
        result = wizard.complete_step(amplitude)

    if result is not None:
        settings_table(container.settings_store.get(), title="Calibrated Settings")


# ---------------------------------------------------------------------------
# neuro-reader adapt
# ---------------------------------------------------------------------------


@adapt_app.command("enable")
def adapt_enable() -> None:
    """Start (or resume) the 28-day adaptation programme."""
    projection = _container().adaptation_scheduler().enable()
    if projection is not None:
        adaptation_panel(projection)


@adapt_app.command("disable")
def adapt_disable() -> None:
    """Stop adapting; the start date is kept."""
    _container().adaptation_scheduler().disable()
    success_panel("Neural adaptation disabled.", title="🧠 Neural Adaptation")


@adapt_app.command("status")
def adapt_status() -> None:
    """Re-evaluate today's projection and show progress."""
    projection = _container().adaptation_scheduler().evaluate()
    if projection is None:
        console.print("[dim]Neural adaptation is off.[/]")
        return
    adaptation_panel(projection)


@adapt_app.command("reset-progress")
def adapt_reset_progress() -> None:
    """Restart the programme from today."""
    projection = _container().adaptation_scheduler().reset_progress()
    if projection is None:
        console.print("[dim]Start date reset; adaptation is off.[/]")
        return
    adaptation_panel(projection)


@adapt_app.command("watch")
def adapt_watch(
    interval_ms: Annotated[
        Optional[int], typer.Option("--interval-ms", help="Override the re-evaluation cadence", min=1)
    ] = None,
) -> None:
    """Keep re-asserting the projection on a timer until interrupted."""
    import signal

    from PySide6.QtCore import QCoreApplication

    from neuro_reader.application.adaptation import AdaptationScheduler
    from neuro_reader.infrastructure.timers.qt_timer import QtPeriodicTimer

    container = _container()
    if not container.settings_store.get().is_neural_adaptation_enabled:
        error_message("Neural adaptation is off; run `neuro-reader adapt enable` first.")
        raise typer.Exit(code=1)

    qt_app = QCoreApplication.instance() or QCoreApplication([])
    timer = QtPeriodicTimer()
    scheduler = AdaptationScheduler(
        container.settings_store,
        timer,
        interval_ms=interval_ms or container.config.adaptation.interval_ms,
        period_days=container.config.adaptation.period_days,
    )
    signal.signal(signal.SIGINT, lambda *_: qt_app.quit())
    # Wake the interpreter regularly so Ctrl+C is handled
    wake = timer.start(250, lambda: None)

    with scheduler:
        projection = scheduler.status()
        if projection is not None:
            adaptation_panel(projection)
        console.print("[dim]Watching — press Ctrl+C to stop.[/]")
        qt_app.exec()
    wake.cancel()


# ---------------------------------------------------------------------------
# neuro-reader render
# ---------------------------------------------------------------------------


@app.command()
def render() -> None:
    """Show the rendering directives for the current settings."""
    directives_table(compose(_container().settings_store.get()))


# ---------------------------------------------------------------------------
# neuro-reader library
# ---------------------------------------------------------------------------


@library_app.command("add")
def library_add(
    path: Annotated[str, typer.Argument(help="Document to add (PDF)")],
    mime: Annotated[
        Optional[str], typer.Option("--mime", help="Override the detected MIME type")
    ] = None,
) -> None:
    """Add a document to the library."""
    file_path = Path(path)
    if not file_path.exists():
        error_message(f"File not found: {file_path}")
        raise typer.Exit(code=1)

    docs = _container().documents()
    try:
        doc = docs.upload(str(file_path.resolve()), file_path.name, mime_type=mime)
    except NeuroReaderError as exc:
        _fail(exc)
        return
    success_panel(f"✅ Added [bold]{doc.title}[/]\nID: {doc.id}", title="📚 Library")


@library_app.command("list")
def library_list() -> None:
    """List documents in upload order."""
    docs = _container().documents()
    documents_table(docs.documents, docs.active.id if docs.active else None)


@library_app.command("open")
def library_open(document_id: Annotated[str, typer.Argument(help="Document ID")]) -> None:
    """Load a document and show its page count."""
    docs = _container().documents()
    try:
        doc = docs.open(document_id)
    except NeuroReaderError as exc:
        _fail(exc)
        return
    documents_table(docs.documents, doc.id)
    stats_line(docs.stats)


@library_app.command("remove")
def library_remove(document_id: Annotated[str, typer.Argument(help="Document ID")]) -> None:
    """Delete a document from the library."""
    docs = _container().documents()
    try:
        docs.delete(document_id)
    except NeuroReaderError as exc:
        _fail(exc)
        return
    success_panel(f"Removed {document_id}", title="📚 Library")


@library_app.command("page")
def library_page(
    document_id: Annotated[str, typer.Argument(help="Document ID")],
    page: Annotated[int, typer.Argument(help="1-based page number")],
) -> None:
    """Jump to a page of a document."""
    docs = _container().documents()
    try:
        docs.open(document_id)
        doc = docs.go_to_page(page)
    except NeuroReaderError as exc:
        _fail(exc)
        return
    console.print(f"[bold]{doc.title}[/] — page {doc.current_page}/{doc.page_count}")
    stats_line(docs.stats)


# ---------------------------------------------------------------------------
# neuro-reader config
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show() -> None:
    """Print the active runtime configuration as JSON."""
    from rich.syntax import Syntax

    raw_json = _container().config.model_dump_json(indent=2)
    console.print(Syntax(raw_json, "json", theme="monokai", line_numbers=True))


if __name__ == "__main__":
    app()
