"""
mcpgen
======

Contract ABI → chain-agnostic IR → generated MCP (Model Context Protocol)
server project.

    >>> from mcpgen import ContractMetadata, get_normalizer, render_project
    >>> ir = get_normalizer("ethereum").normalize(abi_json, ContractMetadata(name="ERC20", chain=""))
    >>> files = render_project(ir, lang="ts")          # {"package.json": b"...", ...}

The pipeline is a set of pure transforms; only :mod:`mcpgen.writer` and the
CLI touch the filesystem.
"""

from .errors import McpGenError
from .ir import ContractIR, ContractMetadata, load_ir, validate_contract
from .normalize import get_normalizer, register_normalizer
from .render import TypeScriptRenderer, render_project
from .version import __version__

__all__ = [
    "__version__",
    "McpGenError",
    "ContractIR",
    "ContractMetadata",
    "load_ir",
    "validate_contract",
    "get_normalizer",
    "register_normalizer",
    "TypeScriptRenderer",
    "render_project",
]
