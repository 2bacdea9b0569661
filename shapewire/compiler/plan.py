"""Plan printer: human-readable view of a wired network.

After propagation you may want to check what the shape pass decided. The
planner renders a NetworkPlan either as plain text (stable, easy to diff
and assert on) or as a rich table for the terminal.
"""
from __future__ import annotations

from typing import Iterable

from rich.table import Table

from shapewire.compiler.propagate import LayerPlan, NetworkPlan
from shapewire.config.preprocessor import PreprocessorConfig
from shapewire.console import logger


class Planner:
    """Renders human-readable plans from propagated networks."""

    def format(self, plan: NetworkPlan) -> str:
        """Render a plain-text plan."""
        out: list[str] = []
        out.append(f"network.name={plan.name}")
        out.append(f"network.input_type={plan.input_type}")
        out.append("network.layers:")
        for layer in plan.layers:
            out.extend(self.format_layer(layer, indent=2))
        out.append(f"network.output_type={plan.output_types[0]}")
        return "\n".join(out)

    def format_layer(self, layer: LayerPlan, *, indent: int) -> Iterable[str]:
        """Format a single layer entry."""
        pad = " " * indent
        yield (
            f"{pad}- layer={layer.layer_type} index={layer.index} name={layer.name} "
            f"n_in={layer.n_in} n_out={layer.n_out}"
        )
        if layer.preprocessor is not None:
            yield f"{pad}  preprocessor={self.format_preprocessor(layer.preprocessor)}"

    def format_preprocessor(self, preprocessor: PreprocessorConfig | None) -> str:
        """Format a preprocessor with its dims, or '-' when absent."""
        if preprocessor is None:
            return "-"
        dims = preprocessor.model_dump(exclude={"type"})
        if not dims:
            return preprocessor.type.value
        inner = ", ".join(f"{k}={v}" for k, v in dims.items())
        return f"{preprocessor.type.value}({inner})"

    def table(self, plan: NetworkPlan) -> Table:
        """Render the plan as a rich table (not printed)."""
        table = logger.table(
            f"Shape plan • {plan.name or 'network'}",
            ("#", "layer", "name", "input", "preprocessor", "n_in", "n_out", "output"),
        )
        for layer in plan.layers:
            table.add_row(
                str(layer.index),
                layer.layer_type,
                str(layer.name or "-"),
                ", ".join(str(t) for t in layer.input_types),
                self.format_preprocessor(layer.preprocessor),
                str(layer.n_in),
                str(layer.n_out),
                ", ".join(str(t) for t in layer.output_types),
            )
        return table
