from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import pytest

from mcpgen import logging as mlog
from mcpgen.ir import ContractIR, ContractMetadata
from mcpgen.normalize import EvmAbiNormalizer
from mcpgen.tests import ERC20_ABI


@pytest.fixture(autouse=True)
def _reset_logging(monkeypatch: pytest.MonkeyPatch):
    """Each test starts without mcpgen handlers, log context or MCPGEN_* env vars."""
    for key in list(os.environ):
        if key.startswith("MCPGEN_"):
            monkeypatch.delenv(key, raising=False)
    mlog.clear_context()
    yield
    root = logging.getLogger("mcpgen")
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(logging.NOTSET)
    mlog.clear_context()


@pytest.fixture()
def erc20_ir() -> ContractIR:
    return EvmAbiNormalizer().normalize(
        ERC20_ABI, ContractMetadata(name="ERC20", chain="", address="0x" + "11" * 20)
    )


@pytest.fixture()
def erc20_file(tmp_path: Path) -> Path:
    p = tmp_path / "ERC20.json"
    p.write_text(json.dumps(ERC20_ABI), encoding="utf-8")
    return p
