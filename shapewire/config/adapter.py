"""Adapter resolution: which preprocessor sits in front of a layer.

Given the layout the previous layer produces, decide whether a layer can
consume it directly or needs a preprocessor first, and build that
preprocessor with the dims it needs. Resolution is a pure function of its
inputs and does not chain preprocessors; callers resolve against the
layout that is actually upstream of the layer.
"""
from __future__ import annotations

from collections.abc import Sequence

from shapewire.config.input_type import (
    ConvolutionalInputType,
    InputKind,
    InputType,
    RecurrentInputType,
)
from shapewire.config.preprocessor import (
    CnnToFeedForwardPreprocessor,
    PreprocessorConfig,
    RnnToFeedForwardPreprocessor,
)
from shapewire.errors import InvalidShapeArityError, UnsupportedShapeKindError


# FF -> FF and CNN (flattened format) -> FF need no preprocessor
FEED_FORWARD_NATIVE: frozenset[InputKind] = frozenset(
    {InputKind.FEED_FORWARD, InputKind.CONVOLUTIONAL_FLAT}
)


def resolve_preprocessor(
    layer_name: str | None,
    input_types: Sequence[InputType] | None,
    *,
    native_kinds: frozenset[InputKind] = FEED_FORWARD_NATIVE,
) -> PreprocessorConfig | None:
    """Return the preprocessor a layer needs for `input_types`, or None.

    Raises:
        InvalidShapeArityError: input_types is None or not of length 1.
        UnsupportedShapeKindError: no preprocessor converts the given
            layout into one of `native_kinds`.
    """
    if input_types is None or len(input_types) != 1:
        raise InvalidShapeArityError(
            layer_name, None if input_types is None else len(input_types)
        )

    if getattr(input_types[0], "type", None) in native_kinds:
        return None

    match input_types[0]:
        case RecurrentInputType():
            return RnnToFeedForwardPreprocessor()
        case ConvolutionalInputType() as c:
            return CnnToFeedForwardPreprocessor(
                height=c.height, width=c.width, depth=c.depth
            )
        case other:
            raise UnsupportedShapeKindError(
                layer_name, getattr(other, "type", type(other).__name__)
            )
