"""Tests for logging setup."""

import io
import logging

from rich.console import Console
from rich.logging import RichHandler

from sharpscaffold.adapters.io.enhanced_logging import (
    LoggerManager,
    get_operation_logger,
    setup_enhanced_logging,
)
from sharpscaffold.adapters.io.rich_cli import SHARPSCAFFOLD_THEME, RichCliComponents
from sharpscaffold.domain.models import GenerationReport, ParseError


class TestLoggerManager:
    """Test root logger configuration."""

    def test_single_rich_handler_installed(self):
        console = Console(file=io.StringIO())

        logger = setup_enhanced_logging(console)
        setup_enhanced_logging(console)

        handlers = [h for h in logging.getLogger().handlers if isinstance(h, RichHandler)]
        assert len(handlers) == 1
        assert logger.name == "sharpscaffold"

    def test_levels(self, monkeypatch):
        monkeypatch.delenv("SHARPSCAFFOLD_QUIET", raising=False)

        assert LoggerManager.set_log_level() == logging.INFO
        assert LoggerManager.set_log_level(verbose=True) == logging.DEBUG
        assert LoggerManager.set_log_level(verbose=True, quiet=True) == logging.WARNING

    def test_quiet_from_environment(self, monkeypatch):
        monkeypatch.setenv("SHARPSCAFFOLD_QUIET", "1")
        assert LoggerManager.set_log_level(verbose=True) == logging.WARNING

    def test_suppressed_modules(self):
        LoggerManager.set_log_level(suppress_modules=["asyncio"])
        assert logging.getLogger("asyncio").level == logging.WARNING

        LoggerManager.set_log_level(verbose=True, suppress_modules=["asyncio"])
        assert logging.getLogger("asyncio").level == logging.DEBUG

    def test_operation_logger_name(self):
        assert get_operation_logger("generate").name == "sharpscaffold.generate"


class TestRichCliComponents:
    """Test console display helpers."""

    def setup_method(self):
        self.buffer = io.StringIO()
        self.cli = RichCliComponents(Console(file=self.buffer, width=120, theme=SHARPSCAFFOLD_THEME))

    def test_display_errors_lists_each_error(self):
        self.cli.display_errors([ParseError("Invalid C# syntax in [x].cs")])

        output = self.buffer.getvalue()
        assert "ParseError" in output
        assert "[x].cs" in output

    def test_display_report(self):
        report = GenerationReport(
            files_read=1, units_generated=1, written_files=["out/FooTests.cs"], dry_run=True
        )

        self.cli.display_report(report)

        output = self.buffer.getvalue()
        assert "Would write 1 file(s)" in output
        assert "FooTests" in output
