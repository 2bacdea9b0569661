"""Shape-propagation errors.

Every error here is a configuration-time failure: the network is miswired
and assembly must stop. They all subclass ValueError so the CLI and any
caller that already treats bad configs as ValueError keeps working.
"""
from __future__ import annotations

from collections.abc import Sequence


def format_input_types(input_types: Sequence[object] | None) -> str:
    """Render a shape sequence for diagnostics."""
    if input_types is None:
        return "None"
    return "[" + ", ".join(str(t) for t in input_types) + "]"


class ShapeError(ValueError):
    """Base class for all shape-propagation failures."""


class InvalidShapeArityError(ShapeError):
    """The upstream shape sequence did not hold exactly one element."""

    def __init__(
        self,
        layer_name: str | None,
        count: int | None,
        *,
        layer_index: int | None = None,
    ) -> None:
        self.layer_name = layer_name
        self.count = count
        self.layer_index = layer_index
        where = f'layer name = "{layer_name}"'
        if layer_index is not None:
            where = f"layer index = {layer_index}, {where}"
        super().__init__(
            f"Invalid input for layer ({where}): "
            f"input type should be length 1 (got: {count})"
        )


class UnsupportedShapeKindError(ShapeError):
    """The upstream shape is not a variant the resolver knows about."""

    def __init__(self, layer_name: str | None, kind: object) -> None:
        self.layer_name = layer_name
        self.kind = kind
        super().__init__(
            f'Unknown input type for layer (layer name = "{layer_name}"): {kind!r}'
        )


class InvalidInputShapeError(ShapeError):
    """The effective upstream shape is not one the layer consumes natively."""

    def __init__(
        self,
        layer_name: str | None,
        input_types: Sequence[object] | None,
        *,
        layer_index: int | None = None,
        expected: str = "FeedForward",
    ) -> None:
        self.layer_name = layer_name
        self.input_types = None if input_types is None else list(input_types)
        self.layer_index = layer_index
        where = f'layer name="{layer_name}"'
        if layer_index is not None:
            where = f"layer index = {layer_index}, {where}"
        super().__init__(
            f"Invalid input type ({where}): expected {expected} input type. "
            f"Got: {format_input_types(self.input_types)}"
        )


class UnknownParameterRoleError(ShapeError):
    """A penalty lookup used a parameter role outside {weight, bias}."""

    def __init__(self, role: object) -> None:
        self.role = role
        super().__init__(f'Unknown parameter: "{role}"')
