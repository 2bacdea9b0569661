"""Layer configuration with discriminated unions.

Each feed-forward layer type (dense, output) has its own config class.
Pydantic's discriminated unions allow YAML like `type: DenseLayer` to
automatically deserialize into the correct config class.

All feed-forward layers share one shape contract: they consume a flat
vector (FeedForward, or ConvolutionalFlat read as a vector), infer `n_in`
from it, and publish FeedForward(n_out). Anything else upstream needs a
preprocessor, which the layer can select for itself.
"""
from __future__ import annotations

import enum
from collections.abc import Sequence
from typing import Annotated, Any, ClassVar, Literal, Protocol, TypeAlias

from pydantic import Field, PrivateAttr, model_validator
from typing_extensions import assert_never

from shapewire.config import Config, NonNegativeFloat, NonNegativeInt, PositiveInt
from shapewire.config.adapter import FEED_FORWARD_NATIVE, resolve_preprocessor
from shapewire.config.input_type import (
    ConvolutionalFlatInputType,
    FeedForwardInputType,
    InputKind,
    InputType,
)
from shapewire.config.preprocessor import PreprocessorConfig
from shapewire.errors import (
    InvalidInputShapeError,
    InvalidShapeArityError,
    ShapeError,
    UnknownParameterRoleError,
)


class LayerType(str, enum.Enum):
    """Enumeration of layer types for type-safe config parsing."""

    DENSE = "DenseLayer"
    OUTPUT = "OutputLayer"


class Activation(str, enum.Enum):
    """Activation applied to the layer's pre-activations."""

    IDENTITY = "identity"
    RELU = "relu"
    SIGMOID = "sigmoid"
    SOFTMAX = "softmax"
    TANH = "tanh"


class LossFunction(str, enum.Enum):
    """Loss computed by an output layer."""

    MSE = "mse"
    MCXENT = "mcxent"
    NEGATIVE_LOG_LIKELIHOOD = "negativeloglikelihood"
    XENT = "xent"


class PenaltyKind(str, enum.Enum):
    """Which regularization penalty a coefficient belongs to."""

    L1 = "l1"
    L2 = "l2"

    @classmethod
    def from_str(cls, s: str) -> "PenaltyKind":
        """Convert a string to a PenaltyKind, ignoring case."""
        return cls(s.lower())


class ParamRole(str, enum.Enum):
    """Parameter roles, keyed the same way parameter initializers key them."""

    WEIGHT = "W"
    BIAS = "b"

    @classmethod
    def from_key(cls, role: "ParamRole | str") -> "ParamRole":
        """Accept the enum, its key ("W", "b") or its name ("weight", "bias")."""
        if isinstance(role, ParamRole):
            return role
        if isinstance(role, str):
            for member in cls:
                if role == member.value or role.upper() == member.name:
                    return member
        raise UnknownParameterRoleError(role)


class ShapeContract(Protocol):
    """What a network assembler needs from every layer, whatever its type."""

    def get_preprocessor_for_input_type(
        self, input_types: Sequence[InputType] | None
    ) -> PreprocessorConfig | None:
        ...

    def adopt_preprocessor(
        self, input_types: Sequence[InputType] | None
    ) -> PreprocessorConfig | None:
        ...

    def set_n_in(
        self,
        input_types: Sequence[InputType] | None,
        override: bool,
        *,
        layer_index: int | None = None,
    ) -> None:
        ...

    def get_output_type(
        self, layer_index: int, input_types: Sequence[InputType] | None
    ) -> list[InputType]:
        ...

    def penalty_for(self, kind: PenaltyKind | str, role: ParamRole | str) -> float:
        ...

    def is_pretrain_param(self, role: ParamRole | str) -> bool:
        ...


class FeedForwardLayerConfig(Config):
    """Shared configuration and shape contract for feed-forward layers.

    `n_in` of 0 means "not configured": it is inferred from the upstream
    layout during network assembly. A user-set `n_in` wins unless the
    assembler asks to override it.
    """

    NATIVE_KINDS: ClassVar[frozenset[InputKind]] = FEED_FORWARD_NATIVE

    name: str | None = None
    n_in: NonNegativeInt = 0
    n_out: PositiveInt
    activation: Activation = Activation.SIGMOID

    # Regularization coefficients, keyed by parameter role at lookup time
    l1: NonNegativeFloat = 0.0
    l2: NonNegativeFloat = 0.0
    l1_bias: NonNegativeFloat = 0.0
    l2_bias: NonNegativeFloat = 0.0

    preprocessor: PreprocessorConfig | None = None

    # The preprocessor this layer last selected for itself, if any
    _inferred_preprocessor: PreprocessorConfig | None = PrivateAttr(default=None)

    @model_validator(mode="before")
    @classmethod
    def _units_alias(cls, data: Any) -> Any:
        """Accept `units` as a synonym for `n_out`."""
        if not isinstance(data, dict) or "units" not in data:
            return data
        data = dict(data)
        units = data.pop("units")
        if "n_out" in data and data["n_out"] != units:
            raise ValueError(
                f"units={units!r} conflicts with n_out={data['n_out']!r}; set only one"
            )
        data["n_out"] = units
        return data

    # ─────────────────────────────────────────────────────────────────────
    # Shape contract
    # ─────────────────────────────────────────────────────────────────────

    def get_preprocessor_for_input_type(
        self, input_types: Sequence[InputType] | None
    ) -> PreprocessorConfig | None:
        """Select the preprocessor this layer needs for `input_types`."""
        return resolve_preprocessor(
            self.name, input_types, native_kinds=self.NATIVE_KINDS
        )

    def adopt_preprocessor(
        self, input_types: Sequence[InputType] | None
    ) -> PreprocessorConfig | None:
        """Store the preprocessor for `input_types` unless one was given.

        A preprocessor this layer selected on an earlier call is selected
        again, so a changed upstream layout is followed. One assigned from
        outside (manifest or caller) is kept as is.
        """
        if self.preprocessor is None or self.preprocessor is self._inferred_preprocessor:
            self.preprocessor = self.get_preprocessor_for_input_type(input_types)
            self._inferred_preprocessor = self.preprocessor
        return self.preprocessor

    def set_n_in(
        self,
        input_types: Sequence[InputType] | None,
        override: bool,
        *,
        layer_index: int | None = None,
    ) -> None:
        """Infer `n_in` from the upstream layout.

        The layer's preprocessor, if any, is applied to `input_types` first.
        An already-set `n_in` is kept unless `override` is true.
        """
        native = self._native_input(input_types, layer_index=layer_index)

        if self.n_in > 0 and not override:
            return

        match native:
            case FeedForwardInputType() as f:
                self.n_in = f.size
            case ConvolutionalFlatInputType() as f:
                self.n_in = f.flattened_size
            case _:
                assert_never(native)

    def get_output_type(
        self, layer_index: int, input_types: Sequence[InputType] | None
    ) -> list[InputType]:
        """Return the layout this layer publishes: FeedForward(n_out).

        The input is still validated so a miswired layer fails here rather
        than when its weights are allocated.
        """
        self._native_input(input_types, layer_index=layer_index)
        return [FeedForwardInputType(size=self.n_out)]

    def _native_input(
        self,
        input_types: Sequence[InputType] | None,
        *,
        layer_index: int | None,
    ) -> FeedForwardInputType | ConvolutionalFlatInputType:
        """Apply the preprocessor and require exactly one native layout."""
        if input_types is None or len(input_types) != 1:
            raise InvalidShapeArityError(
                self.name,
                None if input_types is None else len(input_types),
                layer_index=layer_index,
            )
        effective = input_types
        if self.preprocessor is not None:
            try:
                effective = self.preprocessor.output_type(input_types)
            except ShapeError as e:
                # Report against this layer, not the preprocessor that refused
                raise InvalidInputShapeError(
                    self.name, input_types, layer_index=layer_index
                ) from e

        t = effective[0] if len(effective) == 1 else None
        if not isinstance(t, (FeedForwardInputType, ConvolutionalFlatInputType)):
            raise InvalidInputShapeError(
                self.name, effective, layer_index=layer_index
            )
        return t

    # ─────────────────────────────────────────────────────────────────────
    # Parameter lookups
    # ─────────────────────────────────────────────────────────────────────

    def penalty_for(self, kind: PenaltyKind | str, role: ParamRole | str) -> float:
        """Return the regularization coefficient for a parameter role."""
        if not isinstance(kind, PenaltyKind):
            kind = PenaltyKind.from_str(kind)
        role = ParamRole.from_key(role)

        l1 = kind is PenaltyKind.L1
        match role:
            case ParamRole.WEIGHT:
                return self.l1 if l1 else self.l2
            case ParamRole.BIAS:
                return self.l1_bias if l1 else self.l2_bias
            case _:
                assert_never(role)

    def l1_by_param(self, role: ParamRole | str) -> float:
        return self.penalty_for(PenaltyKind.L1, role)

    def l2_by_param(self, role: ParamRole | str) -> float:
        return self.penalty_for(PenaltyKind.L2, role)

    def is_pretrain_param(self, role: ParamRole | str) -> bool:
        """Feed-forward layers have no pretrain-only parameters."""
        return False


class DenseLayerConfig(FeedForwardLayerConfig):
    """Configuration for a fully connected layer."""

    type: Literal[LayerType.DENSE] = LayerType.DENSE
    has_bias: bool = True


class OutputLayerConfig(FeedForwardLayerConfig):
    """Configuration for a fully connected layer that also computes a loss."""

    type: Literal[LayerType.OUTPUT] = LayerType.OUTPUT
    activation: Activation = Activation.SOFTMAX
    loss: LossFunction = LossFunction.MCXENT
    has_bias: bool = True


# Union type for any layer config, with automatic deserialization
LayerConfig: TypeAlias = Annotated[
    DenseLayerConfig | OutputLayerConfig,
    Field(discriminator="type"),
]
