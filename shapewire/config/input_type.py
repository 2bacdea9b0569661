"""Input types: the tensor layout at a boundary between two layers.

Every layer publishes the layout it produces and consumes the layout the
previous layer published. The four layouts are a closed set, discriminated
by the `type` field so YAML like `type: Convolutional` deserializes into
the right class:

- FeedForward: flat vector of `size` features per example
- ConvolutionalFlat: an image volume already flattened into a vector
- Convolutional: an image volume of height × width × depth
- Recurrent: a sequence of `size` features per time step
"""
from __future__ import annotations

import enum
from typing import Annotated, Literal, TypeAlias

from pydantic import ConfigDict, Field

from shapewire.config import Config, PositiveInt


class InputKind(str, enum.Enum):
    """Enumeration of input layouts for type-safe config parsing."""

    FEED_FORWARD = "FeedForward"
    CONVOLUTIONAL_FLAT = "ConvolutionalFlat"
    CONVOLUTIONAL = "Convolutional"
    RECURRENT = "Recurrent"


class _InputTypeBase(Config):
    """Shared immutability for all input types."""

    model_config = ConfigDict(frozen=True)


class FeedForwardInputType(_InputTypeBase):
    """A flat feature vector."""

    type: Literal[InputKind.FEED_FORWARD] = InputKind.FEED_FORWARD
    size: PositiveInt

    def array_elements_per_example(self) -> int:
        return self.size

    def __str__(self) -> str:
        return f"InputTypeFeedForward(size={self.size})"


class ConvolutionalFlatInputType(_InputTypeBase):
    """An image volume that arrives already flattened, e.g. raw MNIST rows.

    Feed-forward layers consume it as a vector of `flattened_size`; the
    spatial dims are kept so convolutional layers can reshape it back.
    """

    type: Literal[InputKind.CONVOLUTIONAL_FLAT] = InputKind.CONVOLUTIONAL_FLAT
    height: PositiveInt
    width: PositiveInt
    depth: PositiveInt

    @property
    def flattened_size(self) -> int:
        return self.height * self.width * self.depth

    def array_elements_per_example(self) -> int:
        return self.flattened_size

    def __str__(self) -> str:
        return (
            f"InputTypeConvolutionalFlat(height={self.height}, width={self.width}, "
            f"depth={self.depth}, flattenedSize={self.flattened_size})"
        )


class ConvolutionalInputType(_InputTypeBase):
    """An image volume of height × width × depth (channels)."""

    type: Literal[InputKind.CONVOLUTIONAL] = InputKind.CONVOLUTIONAL
    height: PositiveInt
    width: PositiveInt
    depth: PositiveInt

    def array_elements_per_example(self) -> int:
        return self.height * self.width * self.depth

    def __str__(self) -> str:
        return (
            f"InputTypeConvolutional(height={self.height}, width={self.width}, "
            f"depth={self.depth})"
        )


class RecurrentInputType(_InputTypeBase):
    """A sequence of feature vectors.

    The sequence length is usually only known at runtime, so it is optional.
    """

    type: Literal[InputKind.RECURRENT] = InputKind.RECURRENT
    size: PositiveInt
    time_series_length: PositiveInt | None = None

    def array_elements_per_example(self) -> int:
        if self.time_series_length is None:
            return self.size
        return self.size * self.time_series_length

    def __str__(self) -> str:
        if self.time_series_length is None:
            return f"InputTypeRecurrent(size={self.size})"
        return (
            f"InputTypeRecurrent(size={self.size}, "
            f"timeSeriesLength={self.time_series_length})"
        )


# Union type for any input type, with automatic deserialization
InputType: TypeAlias = Annotated[
    FeedForwardInputType
    | ConvolutionalFlatInputType
    | ConvolutionalInputType
    | RecurrentInputType,
    Field(discriminator="type"),
]


def feed_forward(size: int) -> FeedForwardInputType:
    return FeedForwardInputType(size=size)


def convolutional(height: int, width: int, depth: int) -> ConvolutionalInputType:
    return ConvolutionalInputType(height=height, width=width, depth=depth)


def convolutional_flat(height: int, width: int, depth: int) -> ConvolutionalFlatInputType:
    return ConvolutionalFlatInputType(height=height, width=width, depth=depth)


def recurrent(size: int, time_series_length: int | None = None) -> RecurrentInputType:
    return RecurrentInputType(size=size, time_series_length=time_series_length)
