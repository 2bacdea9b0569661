"""Manifest preprocessing: `${var}` interpolation and shorthand type names.

Both run on the raw YAML/JSON payload before pydantic validates it, so a
manifest may write `type: dense` and `n_out: ${hidden}`.
"""
from __future__ import annotations

import re
from collections.abc import Mapping


# Shorthand accepted in manifests -> discriminator value of the config class
TYPE_ALIASES: dict[str, str] = {
    "dense": "DenseLayer",
    "output": "OutputLayer",
    "feed_forward": "FeedForward",
    "convolutional": "Convolutional",
    "convolutional_flat": "ConvolutionalFlat",
    "recurrent": "Recurrent",
    "rnn_to_ff": "RnnToFeedForward",
    "cnn_to_ff": "CnnToFeedForward",
}


def normalize_type_names(payload: object) -> object:
    """Rewrite every `type:` shorthand in `payload` to its canonical name.

    Names that are already canonical, or unknown, are left for pydantic to
    accept or reject.
    """
    if isinstance(payload, Mapping):
        return {
            k: TYPE_ALIASES.get(v, v)
            if k == "type" and isinstance(v, str)
            else normalize_type_names(v)
            for k, v in payload.items()
        }
    if isinstance(payload, list):
        return [normalize_type_names(v) for v in payload]
    return payload


_VAR = re.compile(r"\$\{(\w+)\}")


def _key(parent: str, key: object) -> str:
    return f"{parent}.{key}" if parent else str(key)


class Resolver:
    """Expands `${var}` references against a manifest's `vars` table.

    Errors name the manifest key holding the bad reference, such as
    `layers[1].n_out` or `vars.width`, so a typo is easy to find.
    """

    def __init__(self, vars: Mapping[str, object]) -> None:
        self.vars: dict[str, object] = dict(vars)
        self._resolved: dict[str, object] = {}
        self._active: list[str] = []

    def resolve(self, node: object, where: str = "") -> object:
        """Return `node` with every `${var}` replaced; `where` is its key path."""
        if isinstance(node, Mapping):
            return {k: self.resolve(v, _key(where, k)) for k, v in node.items()}
        if isinstance(node, list):
            return [self.resolve(v, f"{where}[{i}]") for i, v in enumerate(node)]
        if isinstance(node, str):
            return self._interpolate(node, where)
        return node

    def _interpolate(self, text: str, where: str) -> object:
        # A bare "${hidden}" keeps the variable's own type (e.g. int)
        whole = _VAR.fullmatch(text)
        if whole is not None:
            return self.lookup(whole.group(1), where)
        return _VAR.sub(lambda m: str(self.lookup(m.group(1), where)), text)

    def lookup(self, name: str, where: str = "") -> object:
        """Resolve one variable, following references between vars."""
        if name in self._resolved:
            return self._resolved[name]
        at = where or "<manifest>"
        if name in self._active:
            chain = " -> ".join(self._active[self._active.index(name):] + [name])
            raise ValueError(f"{at}: manifest vars form a cycle: {chain}")
        if name not in self.vars:
            known = ", ".join(sorted(self.vars)) or "none"
            raise ValueError(
                f"{at}: unknown manifest variable {name!r} (defined: {known})"
            )

        self._active.append(name)
        try:
            value = self.resolve(self.vars[name], f"vars.{name}")
        finally:
            self._active.pop()
        self._resolved[name] = value
        return value
