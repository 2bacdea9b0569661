import importlib
import io
import sys
import unittest
from pathlib import Path
from typing import Any, Callable, cast

from rich.console import Console

from shapewire.console import logger
from shapewire.console.logger import SHAPEWIRE_THEME

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    tomllib = cast(Any, importlib.import_module("tomli"))


REPO = Path(__file__).resolve().parents[1]


def _script_target() -> Callable[[list[str]], None]:
    """Import the callable that `[project.scripts] shapewire` points at."""
    with (REPO / "pyproject.toml").open("rb") as f:
        target = tomllib.load(f)["project"]["scripts"]["shapewire"]
    module_name, _, attr = target.partition(":")
    return getattr(importlib.import_module(module_name), attr)


class TestShapewireConsoleScript(unittest.TestCase):
    """The installed `shapewire` script compiles manifests and sets the exit status."""

    def setUp(self) -> None:
        self.output = io.StringIO()
        self._console = logger.console
        logger.console = Console(file=self.output, width=200, theme=SHAPEWIRE_THEME)
        self.script = _script_target()

    def tearDown(self) -> None:
        logger.console = self._console

    def test_target_is_package_main(self) -> None:
        from shapewire.__main__ import main

        self.assertIs(self.script, main)

    def test_compiles_sequence_preset(self) -> None:
        preset = REPO / "shapewire" / "config" / "presets" / "sequence_classifier.yml"
        with self.assertRaises(SystemExit) as ctx:
            self.script(["compile", str(preset), "--print-plan", "--plain"])
        self.assertEqual(ctx.exception.code, 0)

        output = self.output.getvalue()
        self.assertIn("- layer=DenseLayer index=0 name=proj n_in=64 n_out=128", output)
        self.assertIn("preprocessor=RnnToFeedForward", output)
        self.assertIn("- layer=OutputLayer index=1 name=out n_in=128 n_out=5", output)

    def test_unsupported_manifest_exits_nonzero(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self.script(["compile", str(REPO / "pyproject.toml")])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("Unsupported format", self.output.getvalue())


if __name__ == "__main__":
    unittest.main()
