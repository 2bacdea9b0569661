"""Shape propagation: walk a layer stack and wire each layer to the last.

This is the network-assembly side of the layer shape contract. Layers
themselves know how to pick a preprocessor, infer n_in and publish their
output layout; the propagator only supplies each layer with the layout
the previous layer published and records what happened.
"""
from __future__ import annotations

from dataclasses import dataclass

from shapewire.config.input_type import InputType
from shapewire.config.layer import LayerConfig
from shapewire.config.network import NetworkConfig
from shapewire.config.preprocessor import PreprocessorConfig
from shapewire.console import logger
from shapewire.errors import format_input_types


@dataclass(frozen=True, slots=True)
class LayerPlan:
    """What the shape pass decided for one layer."""

    index: int
    name: str | None
    layer_type: str
    input_types: list[InputType]
    preprocessor: PreprocessorConfig | None
    n_in: int
    n_out: int
    output_types: list[InputType]


@dataclass(frozen=True, slots=True)
class NetworkPlan:
    """The wired network: one LayerPlan per layer, in order."""

    name: str | None
    input_type: InputType
    layers: list[LayerPlan]

    @property
    def output_types(self) -> list[InputType]:
        return self.layers[-1].output_types


class Propagator:
    """Sequential shape pass over a network's layers.

    Each layer is visited exactly once. The first error aborts the pass and
    propagates to the caller unchanged.
    """

    def __init__(self, *, verbose: bool = False) -> None:
        self.verbose = verbose

    def propagate(
        self, network: NetworkConfig, *, override_n_in: bool = False
    ) -> NetworkPlan:
        """Wire `network`, storing preprocessors and n_in on its layers."""
        current: list[InputType] = [network.input_type]
        plans: list[LayerPlan] = []
        total = len(network.layers)

        for i, layer in enumerate(network.layers):
            plan = self.propagate_layer(i, layer, current, override_n_in=override_n_in)
            if self.verbose:
                logger.step(
                    i + 1,
                    total,
                    f"{plan.layer_type} name={plan.name} "
                    f"{format_input_types(plan.input_types)} → "
                    f"{format_input_types(plan.output_types)}",
                )
            plans.append(plan)
            current = plan.output_types

        return NetworkPlan(name=network.name, input_type=network.input_type, layers=plans)

    def propagate_layer(
        self,
        index: int,
        layer: LayerConfig,
        input_types: list[InputType],
        *,
        override_n_in: bool = False,
    ) -> LayerPlan:
        """Resolve, infer and publish for a single layer.

        A preprocessor set explicitly on the layer (e.g. from the manifest)
        is kept. Otherwise the layer selects one for `input_types`, and
        selects again on later passes.
        """
        layer.adopt_preprocessor(input_types)

        layer.set_n_in(input_types, override_n_in, layer_index=index)
        output_types = layer.get_output_type(index, input_types)

        return LayerPlan(
            index=index,
            name=layer.name,
            layer_type=layer.type.value,
            input_types=list(input_types),
            preprocessor=layer.preprocessor,
            n_in=layer.n_in,
            n_out=layer.n_out,
            output_types=output_types,
        )
