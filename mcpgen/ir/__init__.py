"""
mcpgen IR
=========

The chain-agnostic contract model every renderer consumes.

Public surface:
- IR dataclasses: ``ContractIR``, ``ContractMetadata``, ``SourceInfo``,
  ``Function``, ``Event``, ``EventParameter``, ``Parameter``,
  ``ParameterType``, ``ContractError``, ``CustomType``.
- Typed chain attributes: ``FunctionChainData``, ``EventChainData``,
  ``TypeChainData``.
- Enums: ``StateMutability``, ``Visibility``.
- Validation: ``validate_contract`` → ``ValidationReport``.
- Documents: ``load_ir`` (schema-checked JSON → ``ContractIR``).
"""

from .model import (
    STATE_MUTABILITIES,
    VISIBILITIES,
    ContractError,
    ContractIR,
    ContractMetadata,
    CustomType,
    Event,
    EventChainData,
    EventParameter,
    Function,
    FunctionChainData,
    Parameter,
    ParameterType,
    SourceInfo,
    StateMutability,
    TypeChainData,
    Visibility,
)
from .schema import load_ir
from .validate import ValidationFinding, ValidationReport, validate_contract

__all__ = [
    "STATE_MUTABILITIES",
    "VISIBILITIES",
    "ContractError",
    "ContractIR",
    "ContractMetadata",
    "CustomType",
    "Event",
    "EventChainData",
    "EventParameter",
    "Function",
    "FunctionChainData",
    "Parameter",
    "ParameterType",
    "SourceInfo",
    "StateMutability",
    "TypeChainData",
    "Visibility",
    "load_ir",
    "ValidationFinding",
    "ValidationReport",
    "validate_contract",
]
