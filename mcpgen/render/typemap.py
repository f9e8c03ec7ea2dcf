"""
IR type → zod validator mapping.

Two lookup tables drive everything:

- ``categorize(base_type)`` picks a ``TypeCategory`` from the base type name.
- ``SCALAR_ZOD`` maps each scalar category to its zod expression.

Structure (arrays, tuples, maps) is layered on top by ``zod_for``, recursing
into element, component and value types. Unknown base types fall back to
``z.string()`` so a generated server still accepts the value verbatim.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, List

from ..ir.model import Parameter, ParameterType
from ..normalize.types import resolve_type


class TypeCategory(str, Enum):
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ADDRESS = "address"
    STRING = "string"
    BYTES = "bytes"
    TUPLE = "tuple"
    OTHER = "other"


_CATEGORY_PATTERNS = (
    (re.compile(r"^u?int\d*$"), TypeCategory.INTEGER),
    (re.compile(r"^bool$"), TypeCategory.BOOLEAN),
    (re.compile(r"^address(\s+payable)?$"), TypeCategory.ADDRESS),
    (re.compile(r"^string$"), TypeCategory.STRING),
    (re.compile(r"^bytes([1-9]|[12][0-9]|3[0-2])?$"), TypeCategory.BYTES),
    (re.compile(r"^tuple$"), TypeCategory.TUPLE),
)

SCALAR_ZOD: Dict[TypeCategory, str] = {
    TypeCategory.INTEGER: "z.number()",
    TypeCategory.BOOLEAN: "z.boolean()",
    TypeCategory.ADDRESS: "z.string()",
    TypeCategory.STRING: "z.string()",
    TypeCategory.BYTES: "z.string()",
    TypeCategory.TUPLE: "z.object({})",
    TypeCategory.OTHER: "z.string()",
}


def categorize(base_type: str) -> TypeCategory:
    bt = base_type.strip()
    for pattern, cat in _CATEGORY_PATTERNS:
        if pattern.match(bt):
            return cat
    return TypeCategory.OTHER


def zod_for(t: ParameterType) -> str:
    """zod expression validating a value of IR type ``t``."""
    if t.is_map:
        key = SCALAR_ZOD[categorize(t.map_key_type)]
        value = _element(t.base_type, t.components)
        return f"z.record({key}, {value})"
    if t.is_array:
        expr = f"z.array({_element(t.base_type, t.components)})"
        if t.array_size > 0:
            expr += f".length({t.array_size})"
        return expr
    return _element(t.base_type, t.components)


def _element(base_type: str, components: List[Parameter]) -> str:
    # inner dimensions of nested arrays are still in the base type
    if "[" in base_type:
        inner = resolve_type(base_type)
        inner.components = list(components)
        return zod_for(inner)
    if components:
        return zod_object(components)
    return SCALAR_ZOD[categorize(base_type)]


def zod_object(fields: List[Parameter]) -> str:
    inner = ", ".join(f"{field_name(p, i)}: {zod_for(p.type)}" for i, p in enumerate(fields))
    return "z.object({ " + inner + " })" if inner else "z.object({})"


def field_name(p: Parameter, index: int) -> str:
    return p.name or f"arg{index}"


__all__ = [
    "TypeCategory",
    "SCALAR_ZOD",
    "categorize",
    "zod_for",
    "zod_object",
    "field_name",
]
