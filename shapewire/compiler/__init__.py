"""Compiler: the shape pass that wires a layer stack together.

A manifest only declares the network input and each layer's width. The
compiler walks the layers in order and, for every layer:
1. Resolve: pick the preprocessor its input layout needs (if any)
2. Infer: fix n_in from the (preprocessed) upstream layout
3. Publish: hand the layer's output layout to the next layer

The result is a NetworkPlan that can be rendered for debugging.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from shapewire.compiler.plan import Planner
from shapewire.compiler.propagate import LayerPlan, NetworkPlan, Propagator

if TYPE_CHECKING:
    from shapewire.config.network import NetworkConfig

__all__ = ["Compiler", "LayerPlan", "NetworkPlan", "Planner", "Propagator"]


class Compiler:
    """Runs the shape pass and keeps the planner at hand for rendering."""

    propagator: Propagator
    planner: Planner

    def __init__(self, *, verbose: bool = False) -> None:
        self.propagator = Propagator(verbose=verbose)
        self.planner = Planner()

    def compile(
        self, network: "NetworkConfig", *, override_n_in: bool = False
    ) -> NetworkPlan:
        """Propagate shapes through `network`, mutating its layer configs.

        Raises:
            ValueError: on the first miswired layer (see shapewire.errors).
        """
        return self.propagator.propagate(network, override_n_in=override_n_in)
