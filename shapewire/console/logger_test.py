"""
Unit tests for the console logger module.
"""
from __future__ import annotations

import io
import re
import unittest

from rich.console import Console
from rich.table import Table

from shapewire.console.logger import Logger, SHAPEWIRE_THEME, get_logger
from shapewire.errors import InvalidInputShapeError


def strip_ansi(text: str) -> str:
    """Remove ANSI escape codes from text."""
    ansi_escape = re.compile(r'\x1b\[[0-9;]*m')
    return ansi_escape.sub('', text)


class TestLogger(unittest.TestCase):
    """Tests for the themed console output."""

    def setUp(self) -> None:
        self.output = io.StringIO()
        self.logger = Logger()
        self.logger.console = Console(
            file=self.output, force_terminal=True, width=200, theme=SHAPEWIRE_THEME
        )

    def text(self) -> str:
        return strip_ansi(self.output.getvalue())

    def test_log_keeps_brackets(self) -> None:
        self.logger.log("network.output_type=[InputTypeFeedForward(size=10)]")
        self.assertIn("[InputTypeFeedForward(size=10)]", self.text())

    def test_success_and_error_icons(self) -> None:
        self.logger.success("wired")
        self.logger.error("miswired")
        self.assertIn("✓ wired", self.text())
        self.assertIn("✗ miswired", self.text())

    def test_failure_reports_cause_chain(self) -> None:
        inner = InvalidInputShapeError("RnnToFeedForward", [], expected="Recurrent")
        try:
            raise InvalidInputShapeError("out", [], layer_index=1) from inner
        except InvalidInputShapeError as e:
            self.logger.failure(e)
        lines = self.text().splitlines()
        self.assertIn('layer index = 1, layer name="out"', lines[0])
        self.assertIn("caused by:", lines[1])
        self.assertIn("expected Recurrent", lines[1])

    def test_failure_without_cause(self) -> None:
        self.logger.failure(ValueError("Unsupported format: .txt"))
        self.assertEqual(self.text().strip(), "✗ Error: Unsupported format: .txt")

    def test_header_names_network(self) -> None:
        self.logger.header("Shape plan", "mnist")
        self.assertIn("Shape plan • mnist", self.text())

    def test_table_has_columns_and_is_not_printed(self) -> None:
        table = self.logger.table("Plan", ["layer", "n_in"])
        self.assertIsInstance(table, Table)
        self.assertEqual([c.header for c in table.columns], ["layer", "n_in"])
        self.assertEqual(self.output.getvalue(), "")

    def test_key_value(self) -> None:
        self.logger.key_value({"layers": 3})
        self.assertIn("layers:", self.text())
        self.assertIn("3", self.text())

    def test_step_keeps_brackets(self) -> None:
        self.logger.step(2, 5, "DenseLayer name=fc [InputTypeFeedForward(size=4)]")
        self.assertIn("[2/5] DenseLayer name=fc [InputTypeFeedForward(size=4)]", self.text())

    def test_path(self) -> None:
        self.logger.path("/tmp/net.yml", label="manifest")
        self.assertIn("manifest: /tmp/net.yml", self.text())


class TestGetLogger(unittest.TestCase):
    def test_singleton(self) -> None:
        self.assertIs(get_logger(), get_logger())


if __name__ == "__main__":
    unittest.main()
