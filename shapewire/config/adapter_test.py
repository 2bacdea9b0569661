"""
Unit tests for preprocessor resolution.
"""
from __future__ import annotations

import unittest

from shapewire.config.adapter import FEED_FORWARD_NATIVE, resolve_preprocessor
from shapewire.config.input_type import (
    InputKind,
    convolutional,
    convolutional_flat,
    feed_forward,
    recurrent,
)
from shapewire.config.preprocessor import (
    CnnToFeedForwardPreprocessor,
    RnnToFeedForwardPreprocessor,
)
from shapewire.errors import InvalidShapeArityError, UnsupportedShapeKindError


class TestResolvePreprocessor(unittest.TestCase):
    """Tests for resolve_preprocessor."""

    def test_native_kinds(self) -> None:
        self.assertEqual(
            FEED_FORWARD_NATIVE,
            frozenset({InputKind.FEED_FORWARD, InputKind.CONVOLUTIONAL_FLAT}),
        )
        self.assertIsNone(resolve_preprocessor("a", [feed_forward(3)]))
        self.assertIsNone(resolve_preprocessor("a", [convolutional_flat(3, 3, 1)]))

    def test_recurrent(self) -> None:
        self.assertEqual(
            resolve_preprocessor("a", [recurrent(3)]), RnnToFeedForwardPreprocessor()
        )

    def test_convolutional_captures_dims(self) -> None:
        pre = resolve_preprocessor("a", [convolutional(5, 6, 7)])
        self.assertEqual(pre, CnnToFeedForwardPreprocessor(height=5, width=6, depth=7))

    def test_arity(self) -> None:
        with self.assertRaises(InvalidShapeArityError) as ctx:
            resolve_preprocessor("fc3", [feed_forward(1), feed_forward(2)])
        self.assertEqual(ctx.exception.count, 2)
        self.assertEqual(ctx.exception.layer_name, "fc3")
        self.assertIn('"fc3"', str(ctx.exception))

        with self.assertRaises(InvalidShapeArityError) as ctx:
            resolve_preprocessor("fc3", [])
        self.assertEqual(ctx.exception.count, 0)

    def test_unsupported_kind(self) -> None:
        with self.assertRaises(UnsupportedShapeKindError) as ctx:
            resolve_preprocessor("fc", ["FeedForward(3)"])  # type: ignore[list-item]
        self.assertEqual(ctx.exception.kind, "str")

    def test_narrowed_native_kinds(self) -> None:
        only_ff = frozenset({InputKind.FEED_FORWARD})
        with self.assertRaises(UnsupportedShapeKindError):
            resolve_preprocessor("fc", [convolutional_flat(2, 2, 1)], native_kinds=only_ff)


if __name__ == "__main__":
    unittest.main()
