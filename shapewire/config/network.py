"""Network manifest: a declared input layout plus an ordered layer stack.

The manifest is the only thing the shape pass needs: it starts from
`input_type` and walks `layers` in order. It's loaded from YAML or JSON
and supports variable substitution for reusable templates.
"""
from __future__ import annotations

import json
from pathlib import Path

import yaml
from pydantic import Field

from shapewire.config import Config
from shapewire.config.input_type import InputType
from shapewire.config.layer import LayerConfig
from shapewire.config.resolve import Resolver, normalize_type_names


class NetworkConfig(Config):
    """A feed-forward network: input layout and layers, first to last."""

    name: str | None = None
    input_type: InputType
    layers: list[LayerConfig] = Field(min_length=1)

    @classmethod
    def from_path(cls, path: Path) -> "NetworkConfig":
        """Load and validate a network manifest from a JSON or YAML file.

        Supports variable substitution via a `vars` section at the top level.
        Variables can be referenced as `${var_name}` throughout the config.
        """
        text = path.read_text(encoding="utf-8")
        match path.suffix.lower():
            case ".json":
                payload = json.loads(text)
            case ".yml" | ".yaml":
                payload = yaml.safe_load(text)
            case s:
                raise ValueError(f"Unsupported format '{s}'")
        return cls.from_payload(payload)

    @classmethod
    def from_payload(cls, payload: object) -> "NetworkConfig":
        """Validate an already-parsed manifest payload."""
        if payload is None:
            raise ValueError("Manifest payload is empty.")
        if not isinstance(payload, dict):
            raise ValueError(f"Manifest payload must be a dict, got {type(payload)!r}")

        payload = dict(payload)
        vars_payload = payload.pop("vars", None)
        if vars_payload is not None:
            if not isinstance(vars_payload, dict):
                raise ValueError(
                    f"Manifest vars must be a dict, got {type(vars_payload)!r}"
                )
            payload = Resolver(vars_payload).resolve(payload)

        # Normalize shorthand type names (e.g., 'dense' → 'DenseLayer')
        payload = normalize_type_names(payload)

        return cls.model_validate(payload)
