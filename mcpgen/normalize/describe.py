"""
mcpgen.normalize.describe
-------------------------

Deterministic, human-readable descriptions derived purely from resolved IR
state. Calling any of these twice on the same entity yields byte-identical
strings, so a stored description can always be regenerated and compared.
"""

from __future__ import annotations

from typing import List, Sequence

from ..ir.model import Event, Function, Parameter, ParameterType
from .types import array_suffix


def render_type_label(t: ParameterType) -> str:
    """``uint256``, ``address[]``, ``uint256[3]``, or ``tuple`` for struct types."""
    if t.is_array:
        return t.base_type + array_suffix(t)
    if t.components:
        return "tuple"
    return t.base_type


def _params(params: Sequence[Parameter], *, unnamed_prefix: str = "") -> List[str]:
    out: List[str] = []
    for i, p in enumerate(params):
        name = p.name
        if not name and unnamed_prefix:
            name = f"{unnamed_prefix}{i}"
        out.append(f"{name} ({render_type_label(p.type)})")
    return out


def describe_function(fn: Function) -> str:
    """
    ``transfer - Parameters: to (address), value (uint256) - Returns: output0 (bool)``

    Overloads are described under their declared name, not the disambiguated one.
    """
    text = fn.chain_data.original_name or fn.name
    if fn.inputs:
        text += " - Parameters: " + ", ".join(_params(fn.inputs))
    if fn.outputs:
        text += " - Returns: " + ", ".join(_params(fn.outputs, unnamed_prefix="output"))
    return text


def describe_event(ev: Event) -> str:
    text = f"{ev.name} event"
    if ev.parameters:
        parts = []
        for p in ev.parameters:
            part = f"{p.name} ({render_type_label(p.type)})"
            if p.indexed:
                part += " (indexed)"
            parts.append(part)
        text += " - Parameters: " + ", ".join(parts)
    return text


def describe_error(name: str) -> str:
    return f"{name} error"


__all__ = ["render_type_label", "describe_function", "describe_event", "describe_error"]
