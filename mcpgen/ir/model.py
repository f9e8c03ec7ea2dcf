from __future__ import annotations

"""
Chain-agnostic contract IR (Intermediate Representation)
=======================================================

These dataclasses model a normalized contract surface that every renderer
consumes. Instances are produced by the normalizers in ``mcpgen.normalize``
and are treated as read-only once a normalizer returns.

- ``ParameterType`` is a recursive descriptor: base type, array shape,
  optional map key, tuple components.
- Functions, events and errors carry the raw declared ``signature`` (no
  selector hashing happens here).
- Chain-specific attributes live in small typed records
  (``FunctionChainData``, ``EventChainData``, ``TypeChainData``) instead of an
  open map. Unknown keys found on load are kept verbatim in ``extra``.

Serialization (``to_dict`` / ``from_dict``) uses camelCase keys and omits empty
optional values, so ``from_dict(to_dict(x)) == x`` for every entity.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class StateMutability(str, Enum):
    PURE = "pure"
    VIEW = "view"
    NONPAYABLE = "nonpayable"
    PAYABLE = "payable"

    def __str__(self) -> str:
        return self.value


class Visibility(str, Enum):
    EXTERNAL = "external"
    PUBLIC = "public"
    INTERNAL = "internal"
    PRIVATE = "private"

    def __str__(self) -> str:
        return self.value


STATE_MUTABILITIES = tuple(m.value for m in StateMutability)
VISIBILITIES = tuple(v.value for v in Visibility)


def _put(out: Dict[str, Any], key: str, value: Any) -> None:
    """Set ``key`` only when ``value`` is non-empty (None, "", False, 0, {} and [] are skipped)."""
    if value is None or value is False or value == "" or value == {} or value == []:
        return
    if isinstance(value, int) and not isinstance(value, bool) and value == 0:
        return
    out[key] = value


def _str(v: Any) -> str:
    return "" if v is None else str(v)


# -----------------------------
# Chain-specific attribute records
# -----------------------------


@dataclass
class TypeChainData:
    """Structural facts about a type, recorded so consumers need not re-parse type strings."""
    is_array: bool = False
    is_fixed_array: bool = False
    is_dynamic_array: bool = False
    array_size: Optional[int] = None
    is_tuple: bool = False
    type_description: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    _KEYS = ("isArray", "isFixedArray", "isDynamicArray", "arraySize", "isTuple", "typeDescription")

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.extra)
        _put(out, "isArray", self.is_array)
        _put(out, "isFixedArray", self.is_fixed_array)
        _put(out, "isDynamicArray", self.is_dynamic_array)
        if self.array_size is not None:
            out["arraySize"] = self.array_size
        _put(out, "isTuple", self.is_tuple)
        _put(out, "typeDescription", self.type_description)
        return out

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "TypeChainData":
        d = dict(d or {})
        size = d.get("arraySize")
        return cls(
            is_array=bool(d.get("isArray", False)),
            is_fixed_array=bool(d.get("isFixedArray", False)),
            is_dynamic_array=bool(d.get("isDynamicArray", False)),
            array_size=int(size) if size is not None else None,
            is_tuple=bool(d.get("isTuple", False)),
            type_description=_str(d.get("typeDescription")),
            extra={k: v for k, v in d.items() if k not in cls._KEYS},
        )


@dataclass
class FunctionChainData:
    original_name: str = ""
    original_signature: str = ""
    constant: bool = False
    payable: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    _KEYS = ("originalName", "originalSignature", "constant", "payable")

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.extra)
        _put(out, "constant", self.constant)
        _put(out, "payable", self.payable)
        _put(out, "originalName", self.original_name)
        _put(out, "originalSignature", self.original_signature)
        return out

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "FunctionChainData":
        d = dict(d or {})
        return cls(
            original_name=_str(d.get("originalName")),
            original_signature=_str(d.get("originalSignature")),
            constant=bool(d.get("constant", False)),
            payable=bool(d.get("payable", False)),
            extra={k: v for k, v in d.items() if k not in cls._KEYS},
        )


@dataclass
class EventChainData:
    anonymous: bool = False
    indexed_count: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    _KEYS = ("anonymous", "indexedCount")

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.extra)
        _put(out, "anonymous", self.anonymous)
        if self.indexed_count is not None:
            out["indexedCount"] = self.indexed_count
        return out

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "EventChainData":
        d = dict(d or {})
        count = d.get("indexedCount")
        return cls(
            anonymous=bool(d.get("anonymous", False)),
            indexed_count=int(count) if count is not None else None,
            extra={k: v for k, v in d.items() if k not in cls._KEYS},
        )


# -----------------
# Core type system
# -----------------


@dataclass
class ParameterType:
    """
    Recursive type descriptor.

    ``array_size`` is only meaningful when ``is_array``: 0 means dynamic length,
    a positive value a fixed length. ``map_key_type`` is required when
    ``is_map``. ``components`` is populated only for tuple (struct) types.
    """
    base_type: str
    is_array: bool = False
    array_size: int = 0
    is_map: bool = False
    map_key_type: str = ""
    components: List["Parameter"] = field(default_factory=list)
    chain_data: TypeChainData = field(default_factory=TypeChainData)

    @property
    def is_tuple(self) -> bool:
        return bool(self.components)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"baseType": self.base_type}
        _put(out, "isArray", self.is_array)
        _put(out, "arraySize", self.array_size)
        _put(out, "isMap", self.is_map)
        _put(out, "mapKeyType", self.map_key_type)
        _put(out, "components", [c.to_dict() for c in self.components])
        _put(out, "chainData", self.chain_data.to_dict())
        return out

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ParameterType":
        return cls(
            base_type=_str(d.get("baseType")),
            is_array=bool(d.get("isArray", False)),
            array_size=int(d.get("arraySize") or 0),
            is_map=bool(d.get("isMap", False)),
            map_key_type=_str(d.get("mapKeyType")),
            components=[Parameter.from_dict(c) for c in d.get("components") or []],
            chain_data=TypeChainData.from_dict(d.get("chainData")),
        )


@dataclass
class Parameter:
    """Function input/output, error parameter or custom-type field. ``name`` may be empty."""
    name: str
    type: ParameterType
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name, "type": self.type.to_dict()}
        _put(out, "description", self.description)
        return out

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Parameter":
        return cls(
            name=_str(d.get("name")),
            type=ParameterType.from_dict(d.get("type") or {}),
            description=_str(d.get("description")),
        )


@dataclass
class EventParameter:
    name: str
    type: ParameterType
    indexed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type.to_dict(),
            "indexed": self.indexed,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "EventParameter":
        return cls(
            name=_str(d.get("name")),
            type=ParameterType.from_dict(d.get("type") or {}),
            indexed=bool(d.get("indexed", False)),
        )


# ---------------
# Contract surface
# ---------------


@dataclass
class Function:
    name: str
    state_mutability: str = ""  # StateMutability value; "" is representable and flagged by the validator
    description: str = ""
    signature: str = ""         # e.g., "transfer(address,uint256)"
    selector: str = ""          # left empty; selectors are not computed
    inputs: List[Parameter] = field(default_factory=list)
    outputs: List[Parameter] = field(default_factory=list)
    visibility: str = ""
    is_constructor: bool = False
    is_fallback: bool = False
    is_receive: bool = False
    chain_data: FunctionChainData = field(default_factory=FunctionChainData)

    @property
    def is_special(self) -> bool:
        return self.is_constructor or self.is_fallback or self.is_receive

    @property
    def is_read_only(self) -> bool:
        return str(self.state_mutability) in (StateMutability.PURE.value, StateMutability.VIEW.value)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name}
        _put(out, "description", self.description)
        _put(out, "signature", self.signature)
        _put(out, "selector", self.selector)
        out["inputs"] = [p.to_dict() for p in self.inputs]
        out["outputs"] = [p.to_dict() for p in self.outputs]
        out["stateMutability"] = str(self.state_mutability)
        _put(out, "visibility", str(self.visibility))
        _put(out, "isConstructor", self.is_constructor)
        _put(out, "isFallback", self.is_fallback)
        _put(out, "isReceive", self.is_receive)
        _put(out, "chainData", self.chain_data.to_dict())
        return out

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Function":
        return cls(
            name=_str(d.get("name")),
            description=_str(d.get("description")),
            signature=_str(d.get("signature")),
            selector=_str(d.get("selector")),
            inputs=[Parameter.from_dict(p) for p in d.get("inputs") or []],
            outputs=[Parameter.from_dict(p) for p in d.get("outputs") or []],
            state_mutability=_str(d.get("stateMutability")),
            visibility=_str(d.get("visibility")),
            is_constructor=bool(d.get("isConstructor", False)),
            is_fallback=bool(d.get("isFallback", False)),
            is_receive=bool(d.get("isReceive", False)),
            chain_data=FunctionChainData.from_dict(d.get("chainData")),
        )


@dataclass
class Event:
    name: str
    description: str = ""
    signature: str = ""
    parameters: List[EventParameter] = field(default_factory=list)
    chain_data: EventChainData = field(default_factory=EventChainData)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name}
        _put(out, "description", self.description)
        _put(out, "signature", self.signature)
        out["parameters"] = [p.to_dict() for p in self.parameters]
        _put(out, "chainData", self.chain_data.to_dict())
        return out

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Event":
        return cls(
            name=_str(d.get("name")),
            description=_str(d.get("description")),
            signature=_str(d.get("signature")),
            parameters=[EventParameter.from_dict(p) for p in d.get("parameters") or []],
            chain_data=EventChainData.from_dict(d.get("chainData")),
        )


@dataclass
class ContractError:
    name: str
    description: str = ""
    parameters: List[Parameter] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name}
        _put(out, "description", self.description)
        _put(out, "parameters", [p.to_dict() for p in self.parameters])
        return out

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ContractError":
        return cls(
            name=_str(d.get("name")),
            description=_str(d.get("description")),
            parameters=[Parameter.from_dict(p) for p in d.get("parameters") or []],
        )


@dataclass
class CustomType:
    name: str
    description: str = ""
    fields: List[Parameter] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name}
        _put(out, "description", self.description)
        out["fields"] = [p.to_dict() for p in self.fields]
        return out

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CustomType":
        return cls(
            name=_str(d.get("name")),
            description=_str(d.get("description")),
            fields=[Parameter.from_dict(p) for p in d.get("fields") or []],
        )


@dataclass
class SourceInfo:
    language: str
    compiler: str = ""
    source_url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"language": self.language}
        _put(out, "compiler", self.compiler)
        _put(out, "sourceUrl", self.source_url)
        return out

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SourceInfo":
        return cls(
            language=_str(d.get("language")),
            compiler=_str(d.get("compiler")),
            source_url=_str(d.get("sourceUrl")),
        )


@dataclass
class ContractMetadata:
    name: str
    chain: str
    description: str = ""
    address: str = ""
    chain_data: Dict[str, Any] = field(default_factory=dict)
    source: Optional[SourceInfo] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name}
        _put(out, "description", self.description)
        _put(out, "address", self.address)
        out["chain"] = self.chain
        _put(out, "chainData", dict(self.chain_data))
        if self.source is not None:
            out["source"] = self.source.to_dict()
        return out

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ContractMetadata":
        src = d.get("source")
        return cls(
            name=_str(d.get("name")),
            chain=_str(d.get("chain")),
            description=_str(d.get("description")),
            address=_str(d.get("address")),
            chain_data=dict(d.get("chainData") or {}),
            source=SourceInfo.from_dict(src) if isinstance(src, dict) else None,
        )


@dataclass
class ContractIR:
    metadata: ContractMetadata
    functions: List[Function] = field(default_factory=list)
    events: List[Event] = field(default_factory=list)
    errors: List[ContractError] = field(default_factory=list)
    types: List[CustomType] = field(default_factory=list)

    def validate(self) -> List[Any]:
        """Shortcut for ``mcpgen.ir.validate.validate_contract(self).findings``."""
        from .validate import validate_contract

        return validate_contract(self).findings

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "metadata": self.metadata.to_dict(),
            "functions": [f.to_dict() for f in self.functions],
            "events": [e.to_dict() for e in self.events],
        }
        _put(out, "errors", [e.to_dict() for e in self.errors])
        _put(out, "types", [t.to_dict() for t in self.types])
        return out

    def to_json(self, *, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ContractIR":
        return cls(
            metadata=ContractMetadata.from_dict(d.get("metadata") or {}),
            functions=[Function.from_dict(f) for f in d.get("functions") or []],
            events=[Event.from_dict(e) for e in d.get("events") or []],
            errors=[ContractError.from_dict(e) for e in d.get("errors") or []],
            types=[CustomType.from_dict(t) for t in d.get("types") or []],
        )

    @classmethod
    def from_json(cls, text: str) -> "ContractIR":
        return cls.from_dict(json.loads(text))


__all__ = [
    "StateMutability",
    "Visibility",
    "STATE_MUTABILITIES",
    "VISIBILITIES",
    "TypeChainData",
    "FunctionChainData",
    "EventChainData",
    "ParameterType",
    "Parameter",
    "EventParameter",
    "Function",
    "Event",
    "ContractError",
    "CustomType",
    "SourceInfo",
    "ContractMetadata",
    "ContractIR",
]
