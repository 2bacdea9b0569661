"""Typed CLI command payloads.

The CLI parses arguments into these typed objects, which are then
dispatched to the appropriate handler.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from shapewire.compiler import NetworkPlan


@dataclass(frozen=True, slots=True)
class CompileCommand:
    """Request to wire a manifest and report the result.

    Useful for validating a network before any weights are allocated.
    """

    manifest: Path
    plan: NetworkPlan
    print_plan: bool
    plain: bool = False


Command = CompileCommand
