from __future__ import annotations

"""
EVM ABI normalization
=====================

Transforms a Solidity-style ABI (a JSON array of entry objects) into a
``ContractIR``. The pass is deliberately literal:

- Entries are emitted in declaration order; nothing is sorted.
- Signatures are built from the *raw* declared type strings
  (``transfer(address,uint256)``); no selector hashing happens here.
- Overloads are disambiguated by a per-call ``OverloadCounter``: the first
  declaration keeps its name, repeats become ``name_1``, ``name_2``, ...
- Entry kinds this module does not know are skipped (logged at DEBUG) so newer
  compiler outputs keep working.

Only decode failures and unresolvable type strings abort a run.
"""

import json
import logging
from dataclasses import replace
from typing import IO, Any, Callable, Dict, List, Optional, Sequence, Union

from ..errors import ArtifactDecodeError, TypeResolutionError
from ..ir.model import (
    ContractError,
    ContractIR,
    ContractMetadata,
    Event,
    EventChainData,
    EventParameter,
    Function,
    FunctionChainData,
    StateMutability,
    Visibility,
)
from .describe import describe_error, describe_event, describe_function
from .types import resolve_parameters, resolve_type

log = logging.getLogger(__name__)

DEFAULT_CHAIN = "ethereum"

Artifact = Union[bytes, bytearray, str, IO[str], IO[bytes], List[Any]]


class OverloadCounter:
    """
    Tracks how often each declared function name has been seen in one run.

    Owned by exactly one ``normalize()`` call; never shared between contracts.
    """

    def __init__(self) -> None:
        self._seen: Dict[str, int] = {}

    def claim(self, name: str) -> str:
        """Return the unique IR name for the next declaration of ``name``."""
        count = self._seen.get(name, 0)
        self._seen[name] = count + 1
        if count == 0:
            return name
        return f"{name}_{count}"

    def __contains__(self, name: object) -> bool:
        return name in self._seen


# ------------------------
# Artifact decoding
# ------------------------


def decode_artifact(artifact: Artifact) -> List[Dict[str, Any]]:
    """
    Decode an artifact into a list of entry objects.

    Accepts raw bytes/str, a readable stream (text or binary) or an already
    decoded list.

    Raises:
        ArtifactDecodeError: malformed JSON, a non-array document, a
            non-object entry or a malformed parameter list.
    """
    if isinstance(artifact, list):
        raw: Any = artifact
    else:
        if hasattr(artifact, "read"):
            artifact = artifact.read()  # type: ignore[union-attr]
        if isinstance(artifact, (bytes, bytearray)):
            try:
                artifact = bytes(artifact).decode("utf-8-sig")
            except UnicodeDecodeError as e:
                raise ArtifactDecodeError(f"failed to decode ABI JSON: {e}") from e
        if not isinstance(artifact, str):
            raise ArtifactDecodeError(f"unsupported artifact input type: {type(artifact).__name__}")
        try:
            raw = json.loads(artifact)
        except json.JSONDecodeError as e:
            raise ArtifactDecodeError(f"failed to decode ABI JSON: {e}") from e

    if not isinstance(raw, list):
        raise ArtifactDecodeError(
            "failed to decode ABI JSON: top-level value must be an array",
            details={"got": type(raw).__name__},
        )
    for i, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ArtifactDecodeError(
                f"failed to decode ABI JSON: entry [{i}] must be an object",
                details={"index": i, "got": type(entry).__name__},
            )
        kind = str(entry.get("type") or "function")
        name = str(entry.get("name") or "")
        for key in ("inputs", "outputs"):
            _check_params(entry.get(key), key, kind=kind, name=name, index=i)
    return raw


def _check_params(params: Any, where: str, *, kind: str, name: str, index: int) -> None:
    """Parameter lists (and nested ``components``) must be arrays of objects; absent is fine."""
    if params is None:
        return
    if not isinstance(params, list):
        raise ArtifactDecodeError(
            f"failed to decode ABI JSON: entry [{index}] {where} must be an array",
            entry_kind=kind,
            entry_name=name,
            details={"index": index, "field": where, "got": type(params).__name__},
        )
    for j, p in enumerate(params):
        if not isinstance(p, dict):
            raise ArtifactDecodeError(
                f"failed to decode ABI JSON: entry [{index}] {where}[{j}] must be an object",
                entry_kind=kind,
                entry_name=name,
                details={"index": index, "field": f"{where}[{j}]", "got": type(p).__name__},
            )
        _check_params(p.get("components"), f"{where}[{j}].components", kind=kind, name=name, index=index)


# ------------------------
# Normalizer
# ------------------------


def build_signature(name: str, params: Optional[Sequence[Dict[str, Any]]]) -> str:
    """``name(t1,t2,...)`` from the raw declared types, in declaration order."""
    return f"{name}(" + ",".join(str(p.get("type") or "") for p in params or []) + ")"


def resolve_mutability(entry: Dict[str, Any], *, honor_constant: bool = True) -> str:
    """
    Declared ``stateMutability`` wins; otherwise legacy flags decide:
    ``constant`` → view, ``payable`` → payable, else nonpayable.
    """
    declared = entry.get("stateMutability")
    if declared:
        return str(declared)
    if honor_constant and entry.get("constant"):
        return StateMutability.VIEW.value
    if entry.get("payable"):
        return StateMutability.PAYABLE.value
    return StateMutability.NONPAYABLE.value


class EvmAbiNormalizer:
    """Normalizer for Ethereum-family ABI JSON."""

    chain = DEFAULT_CHAIN

    def normalize(self, artifact: Artifact, metadata: Optional[ContractMetadata] = None) -> ContractIR:
        """
        Build a ``ContractIR`` from ``artifact``.

        ``metadata`` is copied, never mutated; an empty chain becomes
        ``"ethereum"``.

        Raises:
            ArtifactDecodeError: the artifact is not a JSON array of objects.
            TypeResolutionError: a declared type string cannot be decomposed.
        """
        entries = decode_artifact(artifact)

        meta = replace(metadata) if metadata is not None else ContractMetadata(name="", chain="")
        meta.chain_data = dict(meta.chain_data)
        if not meta.chain.strip():
            meta.chain = DEFAULT_CHAIN

        contract = ContractIR(metadata=meta)
        overloads = OverloadCounter()
        handlers: Dict[str, Callable[[Dict[str, Any]], Any]] = {
            "function": lambda e: contract.functions.append(self._function(e, overloads)),
            "event": lambda e: contract.events.append(self._event(e)),
            "error": lambda e: contract.errors.append(self._error(e)),
            "constructor": lambda e: contract.functions.append(self._constructor(e)),
            "fallback": lambda e: contract.functions.append(self._fallback(e)),
            "receive": lambda e: contract.functions.append(self._receive(e)),
        }

        for index, entry in enumerate(entries):
            kind = str(entry.get("type") or "function")
            handler = handlers.get(kind)
            if handler is None:
                log.debug("skipping ABI entry [%d] of unknown kind %r", index, kind)
                continue
            try:
                handler(entry)
            except TypeResolutionError as e:
                e.details.setdefault("entry_kind", kind)
                e.details.setdefault("entry_name", str(entry.get("name") or ""))
                e.details.setdefault("index", index)
                raise

        log.debug(
            "normalized %s: %d functions, %d events, %d errors",
            meta.name or "<unnamed>",
            len(contract.functions),
            len(contract.events),
            len(contract.errors),
        )
        return contract

    # ---- entry kinds ----

    def _function(self, entry: Dict[str, Any], overloads: OverloadCounter) -> Function:
        declared = str(entry.get("name") or "")
        raw_inputs = entry.get("inputs") or []
        inputs = resolve_parameters(raw_inputs)
        outputs = resolve_parameters(entry.get("outputs"))
        signature = build_signature(declared, raw_inputs)

        name = overloads.claim(declared)
        chain_data = FunctionChainData(
            constant=bool(entry.get("constant", False)),
            payable=bool(entry.get("payable", False)),
        )
        if name != declared:
            log.debug("overload %s renamed to %s", signature, name)
            chain_data.original_name = declared
            chain_data.original_signature = signature

        fn = Function(
            name=name,
            signature=signature,
            inputs=inputs,
            outputs=outputs,
            state_mutability=resolve_mutability(entry),
            visibility=Visibility.PUBLIC.value,
            chain_data=chain_data,
        )
        fn.description = describe_function(fn)
        return fn

    def _event(self, entry: Dict[str, Any]) -> Event:
        raw_inputs = entry.get("inputs") or []
        params: List[EventParameter] = []
        for p in raw_inputs:
            params.append(
                EventParameter(
                    name=str(p.get("name") or ""),
                    type=resolve_type(str(p.get("type") or ""), p.get("components")),
                    indexed=bool(p.get("indexed", False)),
                )
            )
        ev = Event(
            name=str(entry.get("name") or ""),
            signature=build_signature(str(entry.get("name") or ""), raw_inputs),
            parameters=params,
            chain_data=EventChainData(
                anonymous=bool(entry.get("anonymous", False)),
                indexed_count=sum(1 for p in params if p.indexed),
            ),
        )
        ev.description = describe_event(ev)
        return ev

    def _error(self, entry: Dict[str, Any]) -> ContractError:
        name = str(entry.get("name") or "")
        return ContractError(
            name=name,
            description=describe_error(name),
            parameters=resolve_parameters(entry.get("inputs")),
        )

    def _constructor(self, entry: Dict[str, Any]) -> Function:
        return Function(
            name="constructor",
            description="Contract constructor",
            inputs=resolve_parameters(entry.get("inputs")),
            outputs=[],
            state_mutability=resolve_mutability(entry, honor_constant=False),
            is_constructor=True,
        )

    def _fallback(self, entry: Dict[str, Any]) -> Function:
        return Function(
            name="fallback",
            description="Fallback function",
            state_mutability=resolve_mutability(entry, honor_constant=False),
            is_fallback=True,
        )

    def _receive(self, entry: Dict[str, Any]) -> Function:
        # payable by construction, whatever the entry declares
        return Function(
            name="receive",
            description="Receive function",
            state_mutability=StateMutability.PAYABLE.value,
            is_receive=True,
        )


def normalize_evm_abi(artifact: Artifact, metadata: Optional[ContractMetadata] = None) -> ContractIR:
    """Convenience wrapper: a fresh ``EvmAbiNormalizer`` for one artifact."""
    return EvmAbiNormalizer().normalize(artifact, metadata)


__all__ = [
    "DEFAULT_CHAIN",
    "OverloadCounter",
    "EvmAbiNormalizer",
    "decode_artifact",
    "build_signature",
    "resolve_mutability",
    "normalize_evm_abi",
]
