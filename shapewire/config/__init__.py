"""Configuration models for shapewire manifests.

Input layouts, layers and the preprocessors between them are pydantic
models. A manifest validates into them before any shape is propagated, so
a negative width or a zero-unit layer is rejected while the YAML is still
being read.
"""
from __future__ import annotations

import enum
from typing import Annotated, TypeVar

from pydantic import AfterValidator, BaseModel


N = TypeVar("N", int, float)


class Bound(enum.Enum):
    """Lower bounds for sizes and coefficients."""

    POSITIVE = "positive"
    NON_NEGATIVE = "non-negative"


class Config(BaseModel):
    """Base class for shapewire's config models."""

    @staticmethod
    def bounded(value: N, bound: Bound) -> N:
        """Return `value` if it respects `bound`, else raise ValueError.

        Sizes (layer widths, volume dims, sequence lengths) are POSITIVE.
        `n_in` and penalty coefficients are NON_NEGATIVE, with 0 standing
        for "unset" and "no penalty" respectively.
        """
        match bound:
            case Bound.POSITIVE if value <= 0:
                raise ValueError(f"expected a positive size, got {value!r}")
            case Bound.NON_NEGATIVE if value < 0:
                raise ValueError(f"expected a non-negative value, got {value!r}")
        return value


PositiveInt = Annotated[int, AfterValidator(lambda v: Config.bounded(v, Bound.POSITIVE))]
NonNegativeInt = Annotated[int, AfterValidator(lambda v: Config.bounded(v, Bound.NON_NEGATIVE))]
NonNegativeFloat = Annotated[
    float, AfterValidator(lambda v: Config.bounded(v, Bound.NON_NEGATIVE))
]
