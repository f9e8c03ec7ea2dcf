from __future__ import annotations

import pytest

from mcpgen.errors import UnsupportedChainError
from mcpgen.normalize import EvmAbiNormalizer, available_chains, get_normalizer, register_normalizer
from mcpgen.normalize import _REGISTRY


def test_ethereum_and_evm_aliases() -> None:
    assert isinstance(get_normalizer("ethereum"), EvmAbiNormalizer)
    assert isinstance(get_normalizer(" EVM "), EvmAbiNormalizer)
    assert {"ethereum", "evm"} <= set(available_chains())


def test_each_lookup_is_a_fresh_instance() -> None:
    assert get_normalizer("ethereum") is not get_normalizer("ethereum")


def test_planned_and_unknown_chains() -> None:
    with pytest.raises(UnsupportedChainError, match="solana parser not implemented yet"):
        get_normalizer("solana")
    with pytest.raises(UnsupportedChainError, match="unsupported chain type: tron") as ei:
        get_normalizer("tron")
    assert "ethereum" in ei.value.details["supported"]


def test_register_normalizer(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("mcpgen.normalize._REGISTRY", dict(_REGISTRY))

    class Dummy(EvmAbiNormalizer):
        chain = "polygon"

    register_normalizer("Polygon", Dummy)
    assert isinstance(get_normalizer("polygon"), Dummy)
    with pytest.raises(ValueError, match="already registered"):
        register_normalizer("polygon", Dummy)
    register_normalizer("polygon", EvmAbiNormalizer, replace=True)
    assert type(get_normalizer("polygon")) is EvmAbiNormalizer
    with pytest.raises(ValueError, match="non-empty"):
        register_normalizer("  ", Dummy)
