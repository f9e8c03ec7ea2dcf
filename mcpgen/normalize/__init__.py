"""
mcpgen.normalize
================

Artifact → IR normalizers, looked up by chain identifier.

    >>> from mcpgen.normalize import get_normalizer
    >>> ir = get_normalizer("ethereum").normalize(abi_bytes, metadata)

Each lookup returns a *new* normalizer instance, so concurrent runs never share
overload-counter state. Additional importers are plugged in with
``register_normalizer``.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Protocol

from ..errors import UnsupportedChainError
from ..ir.model import ContractIR, ContractMetadata
from .describe import describe_error, describe_event, describe_function, render_type_label
from .evm import EvmAbiNormalizer, OverloadCounter, decode_artifact, normalize_evm_abi
from .types import resolve_parameters, resolve_type


class Normalizer(Protocol):
    def normalize(self, artifact: Any, metadata: Optional[ContractMetadata] = None) -> ContractIR:
        ...


_REGISTRY: Dict[str, Callable[[], Normalizer]] = {
    "ethereum": EvmAbiNormalizer,
    "evm": EvmAbiNormalizer,
}

# Recognized, but no importer ships yet.
_PLANNED = ("solana",)


def register_normalizer(name: str, factory: Callable[[], Normalizer], *, replace: bool = False) -> None:
    """Register a zero-arg factory for chain ``name`` (case-insensitive)."""
    key = name.strip().lower()
    if not key:
        raise ValueError("normalizer name must be non-empty")
    if key in _REGISTRY and not replace:
        raise ValueError(f"normalizer for chain {key!r} already registered")
    _REGISTRY[key] = factory


def get_normalizer(chain: str) -> Normalizer:
    """
    Return a fresh normalizer for ``chain``.

    Raises:
        UnsupportedChainError: unknown chain, or one whose importer is not
            implemented yet.
    """
    key = (chain or "").strip().lower()
    factory = _REGISTRY.get(key)
    if factory is not None:
        return factory()
    if key in _PLANNED:
        raise UnsupportedChainError(f"{key} parser not implemented yet", details={"chain": key})
    raise UnsupportedChainError(
        f"unsupported chain type: {chain}",
        details={"chain": chain, "supported": available_chains()},
    )


def available_chains() -> List[str]:
    return sorted(_REGISTRY)


__all__ = [
    "Normalizer",
    "EvmAbiNormalizer",
    "OverloadCounter",
    "register_normalizer",
    "get_normalizer",
    "available_chains",
    "decode_artifact",
    "normalize_evm_abi",
    "resolve_type",
    "resolve_parameters",
    "render_type_label",
    "describe_function",
    "describe_event",
    "describe_error",
]
