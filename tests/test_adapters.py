"""Tests for infrastructure adapters and the DI container.

Covers:
1. QtPeriodicTimer (requires pytest-qt, offscreen platform)
2. PdfplumberDocumentLoader with a patched ``pdfplumber.open``
3. Simulated gaze and null haptics
4. Container wiring
"""

from __future__ import annotations

import random
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from conftest import FixedClock
from neuro_reader.bootstrap import Container
from neuro_reader.domain.errors import DocumentLoadError
from neuro_reader.infrastructure.documents.pdfplumber_loader import PdfplumberDocumentLoader
from neuro_reader.infrastructure.gaze.simulated import SimulatedGazeSource
from neuro_reader.infrastructure.haptics.null_haptics import NullHaptics


# ---------------------------------------------------------------------------
# 1. Qt timer
# ---------------------------------------------------------------------------


class TestQtPeriodicTimer:
    def test_fires_until_cancelled(self, qtbot) -> None:
        from neuro_reader.infrastructure.timers.qt_timer import QtPeriodicTimer

        calls: list[int] = []
        handle = QtPeriodicTimer().start(10, lambda: calls.append(1))
        assert handle.active is True

        qtbot.waitUntil(lambda: len(calls) >= 3, timeout=2000)
        handle.cancel()
        assert handle.active is False

        seen = len(calls)
        qtbot.wait(60)
        assert len(calls) == seen

    def test_cancel_twice(self, qtbot) -> None:
        from neuro_reader.infrastructure.timers.qt_timer import QtPeriodicTimer

        handle = QtPeriodicTimer().start(1000, lambda: None)
        handle.cancel()
        handle.cancel()
        assert handle.active is False

    def test_scheduler_on_qt_timer(self, qtbot, store) -> None:
        from neuro_reader.application.adaptation import AdaptationScheduler
        from neuro_reader.infrastructure.timers.qt_timer import QtPeriodicTimer

        clock = FixedClock()
        scheduler = AdaptationScheduler(store, QtPeriodicTimer(), clock=clock, interval_ms=10)
        scheduler.enable()
        clock.advance(days=28)
        qtbot.waitUntil(lambda: store.get().line_window_size == 7, timeout=2000)

        scheduler.disable()
        assert scheduler.active is False


# ---------------------------------------------------------------------------
# 2. pdfplumber loader
# ---------------------------------------------------------------------------


def _fake_pdf(pages: int = 3, metadata: dict | None = None) -> MagicMock:
    pdf = MagicMock()
    pdf.__enter__.return_value = pdf
    pdf.metadata = metadata if metadata is not None else {"Title": "Saccades", "Author": b"K. Rayner"}
    pdf.pages = []
    for i in range(pages):
        page = MagicMock()
        page.width = 612
        page.height = 792
        page.extract_text.return_value = f"page {i + 1}"
        pdf.pages.append(page)
    return pdf


@pytest.fixture()
def pdf_path(tmp_path: Path) -> Path:
    path = tmp_path / "paper.pdf"
    path.write_bytes(b"%PDF-1.7\n")
    return path


class TestPdfplumberLoader:
    def test_load_reads_page_count_and_metadata(self, pdf_path: Path) -> None:
        with patch("pdfplumber.open", return_value=_fake_pdf()) as pdf_open:
            info = PdfplumberDocumentLoader().load(str(pdf_path))
        pdf_open.assert_called_once_with(str(pdf_path))
        assert info.page_count == 3
        assert info.title == "Saccades"
        assert info.author == "K. Rayner"

    def test_blank_metadata_is_none(self, pdf_path: Path) -> None:
        with patch("pdfplumber.open", return_value=_fake_pdf(metadata={"Title": "  "})):
            info = PdfplumberDocumentLoader().load(str(pdf_path))
        assert info.title is None
        assert info.author is None

    def test_bytes_source(self) -> None:
        with patch("pdfplumber.open", return_value=_fake_pdf(pages=1)) as pdf_open:
            info = PdfplumberDocumentLoader().load(b"%PDF-1.7")
        assert info.page_count == 1
        assert pdf_open.call_args.args[0].read() == b"%PDF-1.7"

    def test_render_page(self, pdf_path: Path) -> None:
        with patch("pdfplumber.open", return_value=_fake_pdf()):
            view = PdfplumberDocumentLoader().render(str(pdf_path), 1)
        assert view.page_number == 2
        assert view.text == "page 2"
        assert (view.width, view.height) == (612.0, 792.0)

    def test_render_out_of_range(self, pdf_path: Path) -> None:
        with patch("pdfplumber.open", return_value=_fake_pdf()):
            with pytest.raises(DocumentLoadError):
                PdfplumberDocumentLoader().render(str(pdf_path), 3)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DocumentLoadError):
            PdfplumberDocumentLoader().load(str(tmp_path / "gone.pdf"))

    def test_url_not_fetched(self) -> None:
        with pytest.raises(DocumentLoadError):
            PdfplumberDocumentLoader().load("https://example.org/paper.pdf")

    def test_parse_failure_wrapped(self, pdf_path: Path) -> None:
        with patch("pdfplumber.open", side_effect=ValueError("no startxref")):
            with pytest.raises(DocumentLoadError, match="no startxref"):
                PdfplumberDocumentLoader().load(str(pdf_path))


# ---------------------------------------------------------------------------
# 3. Gaze and haptics
# ---------------------------------------------------------------------------


class TestSimulatedDevices:
    def test_gaze_within_range(self) -> None:
        gaze = SimulatedGazeSource(max_deviation=10, rng=random.Random(7))
        samples = [gaze.deviation() for _ in range(100)]
        assert all(0 <= s < 10 for s in samples)

    def test_null_haptics_reports_unsupported(self) -> None:
        assert NullHaptics().pulse([50, 50]) is False
        assert NullHaptics().pulse(100) is False


# ---------------------------------------------------------------------------
# 4. Container
# ---------------------------------------------------------------------------


class TestContainer:
    def test_services_share_one_store(self, tmp_path: Path) -> None:
        container = Container(data_dir=tmp_path)
        container.apply_preset().academic()
        wizard = container.calibration()
        wizard.start()
        wizard.complete_step(90)
        wizard.complete_step(30)
        wizard.complete_step(15)

        s = container.settings_store.get()
        assert s.is_academic_reading_mode_enabled is True
        assert s.letter_spacing_percentage == 30
        assert (tmp_path / "readerSettings.json").exists()
        assert (tmp_path / "calibrationResults.json").exists()

    def test_documents_use_case_cached(self, tmp_path: Path) -> None:
        container = Container(data_dir=tmp_path)
        assert container.documents() is container.documents()

    def test_injected_adapters(self, memory_store) -> None:
        loader = MagicMock()
        container = Container(storage=memory_store, loader=loader)
        assert container.storage is memory_store
        assert container.loader is loader
        assert isinstance(container.haptics, NullHaptics)

    def test_calibration_with_timer_gets_simulated_gaze(self, tmp_path: Path, manual_timer) -> None:
        container = Container(data_dir=tmp_path)
        wizard = container.calibration(timer=manual_timer)
        wizard.start()
        for _ in range(container.config.calibration.sample_count):
            manual_timer.fire()
        assert wizard.samples_taken == 20
        assert wizard.result.fixation_stability > 85
