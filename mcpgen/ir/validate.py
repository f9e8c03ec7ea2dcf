# -*- coding: utf-8 -*-
"""
mcpgen.ir.validate

Structural validation of a ``ContractIR``, independent of the artifact format
it came from.

- Findings accumulate: the walk never stops at the first problem, every
  violation in the object graph is reported in one pass.
- Each finding carries a dot/bracket field path rooted at the contract, e.g.
  ``Functions[2].Inputs[0].Type.BaseType``.
- The validator never raises. Callers decide whether to reject, warn or
  proceed (``ValidationReport.raise_for_findings`` is there for the first).

No findings means the IR is structurally sound, not that it is semantically
correct for any particular chain.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..errors import IRValidationError
from .model import (
    STATE_MUTABILITIES,
    VISIBILITIES,
    ContractError,
    ContractIR,
    ContractMetadata,
    CustomType,
    Event,
    EventParameter,
    Function,
    Parameter,
    ParameterType,
    SourceInfo,
)


# --------------------------------------------------------------------------- #
# Reporting
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class ValidationFinding:
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass
class ValidationReport:
    findings: List[ValidationFinding] = field(default_factory=list)

    def add(self, where: str, message: str) -> None:
        self.findings.append(ValidationFinding(field=where, message=message))

    def extend(self, prefix: str, findings: Iterable[ValidationFinding]) -> None:
        for f in findings:
            self.findings.append(ValidationFinding(field=f"{prefix}.{f.field}", message=f.message))

    @property
    def ok(self) -> bool:
        return not self.findings

    def __len__(self) -> int:
        return len(self.findings)

    def summarize(self) -> str:
        n = len(self.findings)
        return "no findings" if n == 0 else f"{n} finding{'s' if n != 1 else ''}"

    def raise_for_findings(self) -> None:
        if self.findings:
            raise IRValidationError(self.findings)


def _blank(s: Optional[str]) -> bool:
    return not (s or "").strip()


# --------------------------------------------------------------------------- #
# Per-entity rules
# --------------------------------------------------------------------------- #


def validate_contract(contract: ContractIR) -> ValidationReport:
    r = ValidationReport()
    r.findings.extend(_metadata(contract.metadata))
    for i, fn in enumerate(contract.functions):
        r.extend(f"Functions[{i}]", _function(fn))
    for i, ev in enumerate(contract.events):
        r.extend(f"Events[{i}]", _event(ev))
    for i, err in enumerate(contract.errors):
        r.extend(f"Errors[{i}]", _error(err))
    for i, ct in enumerate(contract.types):
        r.extend(f"Types[{i}]", _custom_type(ct))
    return r


def _metadata(m: ContractMetadata) -> List[ValidationFinding]:
    r = ValidationReport()
    if _blank(m.name):
        r.add("Name", "contract name is required")
    if _blank(m.chain):
        r.add("Chain", "chain identifier is required")
    if m.source is not None:
        r.extend("Source", _source(m.source))
    return r.findings


def _source(s: SourceInfo) -> List[ValidationFinding]:
    r = ValidationReport()
    if _blank(s.language):
        r.add("Language", "programming language is required")
    return r.findings


def _function(fn: Function) -> List[ValidationFinding]:
    r = ValidationReport()
    if _blank(fn.name):
        r.add("Name", "function name is required")
    for i, p in enumerate(fn.inputs):
        r.extend(f"Inputs[{i}]", _parameter(p))
    for i, p in enumerate(fn.outputs):
        r.extend(f"Outputs[{i}]", _parameter(p))

    mut = str(fn.state_mutability or "")
    if mut == "":
        r.add("StateMutability", "state mutability is required")
    elif mut not in STATE_MUTABILITIES:
        r.add("StateMutability", f"invalid state mutability: {mut}")

    vis = str(fn.visibility or "")
    if vis and vis not in VISIBILITIES:
        r.add("Visibility", f"invalid visibility: {vis}")
    return r.findings


def _event(ev: Event) -> List[ValidationFinding]:
    r = ValidationReport()
    if _blank(ev.name):
        r.add("Name", "event name is required")
    for i, p in enumerate(ev.parameters):
        r.extend(f"Parameters[{i}]", _event_parameter(p))
    return r.findings


def _event_parameter(p: EventParameter) -> List[ValidationFinding]:
    r = ValidationReport()
    if _blank(p.name):
        r.add("Name", "parameter name is required")
    r.extend("Type", _type(p.type))
    return r.findings


def _parameter(p: Parameter) -> List[ValidationFinding]:
    # Parameter names may be empty (unnamed returns); only the type is checked.
    r = ValidationReport()
    r.extend("Type", _type(p.type))
    return r.findings


def _type(t: ParameterType) -> List[ValidationFinding]:
    r = ValidationReport()
    if _blank(t.base_type):
        r.add("BaseType", "base type is required")
    if t.is_array and t.array_size < 0:
        r.add("ArraySize", "array size must be non-negative (0 for dynamic arrays)")
    if t.is_map and _blank(t.map_key_type):
        r.add("MapKeyType", "map key type is required for maps")
    for i, c in enumerate(t.components):
        r.extend(f"Components[{i}]", _parameter(c))
    return r.findings


def _error(err: ContractError) -> List[ValidationFinding]:
    r = ValidationReport()
    if _blank(err.name):
        r.add("Name", "error name is required")
    for i, p in enumerate(err.parameters):
        r.extend(f"Parameters[{i}]", _parameter(p))
    return r.findings


def _custom_type(ct: CustomType) -> List[ValidationFinding]:
    r = ValidationReport()
    if _blank(ct.name):
        r.add("Name", "type name is required")
    for i, p in enumerate(ct.fields):
        r.extend(f"Fields[{i}]", _parameter(p))
    return r.findings


__all__ = ["ValidationFinding", "ValidationReport", "validate_contract"]
