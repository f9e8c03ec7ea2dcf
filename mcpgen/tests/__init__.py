"""
mcpgen.tests
============

Shared fixtures data for the generator tests. Kept import-light so test
modules can pull ABIs from here without going through conftest.

- ERC20_ABI: a representative token ABI (views, mutators, events, error)
- OVERLOADED_ABI: two ``balanceOf`` declarations plus a legacy-flag entry
- abi_bytes(): UTF-8 JSON bytes for any ABI list
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

TESTS_DIR: Path = Path(__file__).resolve().parent


def _p(name: str, typ: str, **extra: Any) -> Dict[str, Any]:
    d: Dict[str, Any] = {"name": name, "type": typ}
    d.update(extra)
    return d


ERC20_ABI: List[Dict[str, Any]] = [
    {
        "type": "constructor",
        "inputs": [_p("name_", "string"), _p("symbol_", "string")],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "name",
        "inputs": [],
        "outputs": [_p("", "string")],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "totalSupply",
        "inputs": [],
        "outputs": [_p("", "uint256")],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "balanceOf",
        "inputs": [_p("account", "address")],
        "outputs": [_p("", "uint256")],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "transfer",
        "inputs": [_p("to", "address"), _p("value", "uint256")],
        "outputs": [_p("", "bool")],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "allowance",
        "inputs": [_p("owner", "address"), _p("spender", "address")],
        "outputs": [_p("", "uint256")],
        "stateMutability": "view",
    },
    {
        "type": "event",
        "name": "Transfer",
        "anonymous": False,
        "inputs": [
            _p("from", "address", indexed=True),
            _p("to", "address", indexed=True),
            _p("value", "uint256", indexed=False),
        ],
    },
    {
        "type": "error",
        "name": "InsufficientBalance",
        "inputs": [_p("available", "uint256"), _p("required", "uint256")],
    },
]

OVERLOADED_ABI: List[Dict[str, Any]] = [
    {
        "type": "function",
        "name": "balanceOf",
        "inputs": [_p("account", "address")],
        "outputs": [_p("", "uint256")],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "balanceOf",
        "inputs": [_p("account", "address"), _p("id", "uint256")],
        "outputs": [_p("", "uint256")],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "balanceOf",
        "inputs": [_p("account", "address"), _p("id", "uint256"), _p("at", "uint64")],
        "outputs": [_p("", "uint256")],
        "stateMutability": "view",
    },
]


def abi_bytes(abi: List[Dict[str, Any]]) -> bytes:
    return json.dumps(abi).encode("utf-8")


__all__ = ["TESTS_DIR", "ERC20_ABI", "OVERLOADED_ABI", "abi_bytes"]
