"""Preprocessors: layout adapters inserted between incompatible layers.

When a layer's native input layout differs from what the previous layer
produces, a preprocessor converts one into the other. Feed-forward layers
need two of them:

- RnnToFeedForward: folds the time axis into the batch axis, so each time
  step is fed through the layer as an independent example
- CnnToFeedForward: flattens a height × width × depth volume into a vector

"No preprocessor" is represented by None rather than an identity adapter.
"""
from __future__ import annotations

import enum
from collections.abc import Sequence
from typing import Annotated, Literal, TypeAlias

from pydantic import ConfigDict, Field

from shapewire.config import Config, PositiveInt
from shapewire.config.input_type import (
    ConvolutionalInputType,
    FeedForwardInputType,
    InputType,
    RecurrentInputType,
)
from shapewire.errors import InvalidInputShapeError, InvalidShapeArityError


class PreprocessorType(str, enum.Enum):
    """Enumeration of preprocessor types for type-safe config parsing."""

    RNN_TO_FEED_FORWARD = "RnnToFeedForward"
    CNN_TO_FEED_FORWARD = "CnnToFeedForward"


def _require_single(name: str, input_types: Sequence[InputType] | None) -> None:
    if input_types is None or len(input_types) != 1:
        raise InvalidShapeArityError(
            name, None if input_types is None else len(input_types)
        )


class _PreprocessorBase(Config):
    """Preprocessors are values: built once per layer pair, never mutated."""

    model_config = ConfigDict(frozen=True)

    def output_type(self, input_types: Sequence[InputType] | None) -> list[InputType]:
        """Return the layout this preprocessor produces for the given input."""
        raise NotImplementedError("Subclasses must implement output_type.")


class RnnToFeedForwardPreprocessor(_PreprocessorBase):
    """Recurrent [batch, size, time] → feed-forward [batch*time, size]."""

    type: Literal[PreprocessorType.RNN_TO_FEED_FORWARD] = (
        PreprocessorType.RNN_TO_FEED_FORWARD
    )

    def output_type(self, input_types: Sequence[InputType] | None) -> list[InputType]:
        _require_single(self.type.value, input_types)
        if not isinstance(input_types[0], RecurrentInputType):
            raise InvalidInputShapeError(
                self.type.value, input_types, expected="Recurrent"
            )
        return [FeedForwardInputType(size=input_types[0].size)]


class CnnToFeedForwardPreprocessor(_PreprocessorBase):
    """Convolutional [batch, depth, height, width] → [batch, depth*height*width].

    The output size comes from the preprocessor's own dims, which were
    captured from the upstream layout when the preprocessor was resolved.
    """

    type: Literal[PreprocessorType.CNN_TO_FEED_FORWARD] = (
        PreprocessorType.CNN_TO_FEED_FORWARD
    )
    height: PositiveInt
    width: PositiveInt
    depth: PositiveInt

    @property
    def flattened_size(self) -> int:
        return self.height * self.width * self.depth

    def output_type(self, input_types: Sequence[InputType] | None) -> list[InputType]:
        _require_single(self.type.value, input_types)
        if not isinstance(input_types[0], ConvolutionalInputType):
            raise InvalidInputShapeError(
                self.type.value, input_types, expected="Convolutional"
            )
        return [FeedForwardInputType(size=self.flattened_size)]


# Union type for any preprocessor config
PreprocessorConfig: TypeAlias = Annotated[
    RnnToFeedForwardPreprocessor | CnnToFeedForwardPreprocessor,
    Field(discriminator="type"),
]
