from __future__ import annotations

"""
Type-string resolution
======================

Turns a declared ABI type string (plus its optional ``components`` list) into
an IR ``ParameterType``:

    "uint256"        → base uint256
    "address[]"      → base address, dynamic array (array_size 0)
    "uint256[3]"     → base uint256, fixed array (array_size 3)
    "uint256[][2]"   → base uint256[], fixed array of 2 (outermost dimension)
    "tuple" + comps  → base tuple, components resolved recursively
    "mapping(K => V)"→ is_map, map_key_type K, base V

Only the outermost array dimension is lifted into the descriptor; inner
dimensions stay in ``base_type`` verbatim so nothing is lost.
"""

import re
from typing import Any, Dict, List, Optional, Sequence

from ..errors import TypeResolutionError
from ..ir.model import Parameter, ParameterType, TypeChainData

_ARRAY_TAIL = re.compile(r"^(?P<base>.*)\[(?P<size>[^\[\]]*)\]$")
_DIGITS = re.compile(r"^\d+$")
_MAPPING = re.compile(r"^mapping\s*\((?P<body>.*)\)$", re.DOTALL)

TUPLE = "tuple"


def resolve_type(type_str: str, components: Optional[Sequence[Dict[str, Any]]] = None) -> ParameterType:
    """
    Resolve one declared type.

    Raises:
        TypeResolutionError: malformed array suffix or a non-numeric / negative
            fixed-array size token.
    """
    raw = (type_str or "").strip()

    if _MAPPING.match(raw):
        return _resolve_mapping(raw)

    pt = ParameterType(base_type=raw)
    if "[" in raw:
        m = _ARRAY_TAIL.match(raw)
        if not m or not m.group("base"):
            raise TypeResolutionError(raw, "malformed array suffix")
        size_tok = m.group("size").strip()
        pt.is_array = True
        pt.base_type = m.group("base")
        if size_tok == "":
            pt.array_size = 0
        elif _DIGITS.match(size_tok):
            pt.array_size = int(size_tok)
        else:
            raise TypeResolutionError(raw, f"invalid array size: {size_tok}")

    if _is_tuple_base(pt.base_type) and components is not None:
        pt.components = resolve_parameters(components)
        pt.chain_data.is_tuple = True
        pt.chain_data.type_description = tuple_description(pt.components)

    if pt.is_array:
        _record_array(pt.chain_data, pt.array_size)
    return pt


def resolve_parameters(params: Optional[Sequence[Dict[str, Any]]]) -> List[Parameter]:
    out: List[Parameter] = []
    for p in params or []:
        out.append(
            Parameter(
                name=str(p.get("name") or ""),
                type=resolve_type(str(p.get("type") or ""), p.get("components")),
            )
        )
    return out


def _is_tuple_base(base: str) -> bool:
    # "tuple[2][]" keeps inner dimensions in the base; it is still a struct element.
    return base == TUPLE or base.startswith(TUPLE + "[")


def _resolve_mapping(raw: str) -> ParameterType:
    """
    Split ``mapping(K => V)``. Native EVM ABIs never emit this form, so a body
    without ``=>`` is left for the validator to flag (empty key type) rather
    than aborting the whole normalization run.
    """
    body = _MAPPING.match(raw).group("body")  # type: ignore[union-attr]
    pt = ParameterType(base_type=raw, is_map=True)
    key, sep, value = body.partition("=>")
    if sep:
        pt.map_key_type = key.strip()
        pt.base_type = value.strip()
    return pt


def _record_array(cd: TypeChainData, size: int) -> None:
    cd.is_array = True
    if size > 0:
        cd.is_fixed_array = True
        cd.array_size = size
    else:
        cd.is_dynamic_array = True


def array_suffix(t: ParameterType) -> str:
    if not t.is_array:
        return ""
    return f"[{t.array_size}]" if t.array_size > 0 else "[]"


def tuple_description(components: Sequence[Parameter]) -> str:
    """``{name: string, tags: string[]}``: component names with their array-suffixed types."""
    parts = [f"{c.name}: {c.type.base_type}{array_suffix(c.type)}" for c in components]
    return "{" + ", ".join(parts) + "}"


__all__ = [
    "TUPLE",
    "resolve_type",
    "resolve_parameters",
    "array_suffix",
    "tuple_description",
]
