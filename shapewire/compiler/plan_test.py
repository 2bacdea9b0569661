"""
Unit tests for the plan printer.
"""
from __future__ import annotations

import io
import unittest

from rich.console import Console

from shapewire.compiler import Compiler
from shapewire.config.input_type import convolutional, feed_forward
from shapewire.console.logger import SHAPEWIRE_THEME
from shapewire.config.layer import DenseLayerConfig, OutputLayerConfig
from shapewire.config.network import NetworkConfig
from shapewire.config.preprocessor import RnnToFeedForwardPreprocessor


class TestPlanner(unittest.TestCase):
    """Tests for Planner rendering."""

    def setUp(self) -> None:
        self.compiler = Compiler()
        network = NetworkConfig(
            name="cnn-head",
            input_type=convolutional(4, 4, 3),
            layers=[DenseLayerConfig(name="fc", n_out=10), OutputLayerConfig(name="out", n_out=2)],
        )
        self.plan = self.compiler.compile(network)

    def test_format(self) -> None:
        text = self.compiler.planner.format(self.plan)
        lines = text.splitlines()
        self.assertEqual(lines[0], "network.name=cnn-head")
        self.assertIn("- layer=DenseLayer index=0 name=fc n_in=48 n_out=10", text)
        self.assertIn("preprocessor=CnnToFeedForward(height=4, width=4, depth=3)", text)
        self.assertIn("- layer=OutputLayer index=1 name=out n_in=10 n_out=2", text)
        self.assertEqual(lines[-1], f"network.output_type={feed_forward(2)}")

    def test_format_preprocessor(self) -> None:
        planner = self.compiler.planner
        self.assertEqual(planner.format_preprocessor(None), "-")
        self.assertEqual(planner.format_preprocessor(RnnToFeedForwardPreprocessor()), "RnnToFeedForward")

    def test_table(self) -> None:
        table = self.compiler.planner.table(self.plan)
        self.assertEqual(table.row_count, 2)
        self.assertEqual(len(table.columns), 8)

        output = io.StringIO()
        Console(file=output, width=200, theme=SHAPEWIRE_THEME).print(table)
        self.assertIn("CnnToFeedForward", output.getvalue())


if __name__ == "__main__":
    unittest.main()
