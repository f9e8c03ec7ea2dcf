"""
TypeScript MCP server renderer
==============================

Turns a ``ContractIR`` into the file map of a runnable TypeScript MCP server:

    package.json
    tsconfig.json
    src/<entry>.ts
    README.md
    tests/e2e/<entry>.spec.ts      (include_tests)
    playwright.config.ts           (include_tests)

Only read-only functions (pure/view, not constructor/fallback/receive) become
tools. Everything else still appears in the embedded ABI so the generated
client bindings stay complete.

All repeated fragments are built here, in IR order, and passed to the
templates as strings. ``render()`` either returns every file or raises.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Set, Union

from ..errors import RenderError, UnsupportedLanguageError
from ..ir.model import ContractIR, Event, Function, Parameter, ParameterType
from ..normalize.describe import render_type_label
from ..normalize.types import array_suffix
from ..version import RENDERER_VERSION
from .engine import TemplateLoader, slugify
from .typemap import field_name, zod_for

log = logging.getLogger(__name__)

GENERATED_PACKAGE_VERSION = "1.0.0"


@dataclass(frozen=True)
class OutputFile:
    template: str
    path: Callable[[str], str]
    tests_only: bool = False


# output order is part of the contract
OUTPUTS = (
    OutputFile("package.json", lambda entry: "package.json"),
    OutputFile("tsconfig.json", lambda entry: "tsconfig.json"),
    OutputFile("server.ts", lambda entry: f"src/{entry}.ts"),
    OutputFile("README.md", lambda entry: "README.md"),
    OutputFile("spec.ts", lambda entry: f"tests/e2e/{entry}.spec.ts", tests_only=True),
    OutputFile("playwright.config.ts", lambda entry: "playwright.config.ts", tests_only=True),
)


def is_exposed(fn: Function) -> bool:
    """True when ``fn`` is registered as a callable tool."""
    return fn.is_read_only and not fn.is_special


def pascal(name: str) -> str:
    return name[:1].upper() + name[1:]


def enum_member(name: str) -> str:
    return name.upper()


class TypeScriptRenderer:
    """
    Render a ``ContractIR`` into a TypeScript MCP server project.

    Args:
        template_dir: optional directory of ``<template>.tmpl`` overrides
            (``package.json.tmpl``, ``server.ts.tmpl``, ...).
        include_tests: also emit the Playwright end-to-end harness.
        entry: base name of the server entry file (``src/<entry>.ts``).
    """

    language = "ts"

    def __init__(
        self,
        template_dir: Optional[Union[str, os.PathLike[str]]] = None,
        include_tests: bool = False,
        entry: str = "server",
    ) -> None:
        entry = (entry or "").strip()
        if not entry or "/" in entry or "\\" in entry or entry.startswith("."):
            raise RenderError("server.ts", f"invalid entry name {entry!r}")
        self.template_dir = template_dir
        self.include_tests = include_tests
        self.entry = entry

    def outputs(self) -> List[OutputFile]:
        return [o for o in OUTPUTS if self.include_tests or not o.tests_only]

    def render(self, ir: ContractIR) -> Dict[str, bytes]:
        loader = TemplateLoader(self.template_dir)
        context = self.build_context(ir)
        files: Dict[str, bytes] = {}
        for out in self.outputs():
            path = out.path(self.entry)
            log.debug("rendering %s from template %s", path, out.template)
            files[path] = loader.render(out.template, context).encode("utf-8")
        log.info(
            "rendered %d files for %s (%d tools)",
            len(files),
            ir.metadata.name,
            context["tools"]["count"],
        )
        return files

    # ---- context ----

    def build_context(self, ir: ContractIR) -> Dict[str, Any]:
        meta = ir.metadata
        exposed = [fn for fn in ir.functions if is_exposed(fn)]
        overloaded = overloaded_names(ir.functions)
        package_name = (slugify(meta.name) or "contract") + "-mcp-server"

        return {
            "ir": ir.to_dict(),
            "contract": {
                "name": meta.name,
                "chain": meta.chain,
                "address": meta.address,
                "description": meta.description,
            },
            "project": {
                "package_name": package_name,
                "server_name": package_name,
                "version": GENERATED_PACKAGE_VERSION,
                "entry": self.entry,
                "description": f"MCP server for {meta.name} smart contract",
                "scripts": _indent(json.dumps(self._scripts(), indent=2), 2),
                "dev_dependencies": _indent(json.dumps(self._dev_dependencies(), indent=2), 2),
            },
            "generator": {
                "name": "mcpgen",
                "renderer_version": RENDERER_VERSION,
            },
            "tools": {
                "names": [fn.name for fn in exposed],
                "count": len(exposed),
            },
            "fragments": {
                "tool_enum": "".join(f'  {enum_member(fn.name)} = {json.dumps(fn.name)},\n' for fn in exposed),
                "schemas": "\n".join(schema_block(fn) for fn in exposed),
                "tools_list": "".join(tool_entry(fn) for fn in exposed),
                "dispatch_cases": "".join(dispatch_case(fn, fn.name in overloaded) for fn in exposed),
                "contract_abi": json.dumps(contract_abi(ir), indent=2, ensure_ascii=False),
                "readme_tools": readme_tools(exposed),
            },
        }

    def _scripts(self) -> Dict[str, str]:
        scripts = {
            "build": "tsc",
            "start": f"node dist/{self.entry}.js",
            "dev": "tsc -w",
        }
        if self.include_tests:
            scripts["test:e2e"] = "playwright test"
        return scripts

    def _dev_dependencies(self) -> Dict[str, str]:
        deps = {
            "@types/node": "^20.11.0",
            "typescript": "^5.4.0",
        }
        if self.include_tests:
            deps["@playwright/test"] = "^1.44.0"
            deps["@modelcontextprotocol/inspector"] = "^0.14.0"
        return deps


# ---- fragments ----


def overloaded_names(functions: List[Function]) -> Set[str]:
    """IR names of every function whose declared name is overloaded."""
    declared = {fn.chain_data.original_name for fn in functions if fn.chain_data.original_name}
    return {fn.name for fn in functions if (fn.chain_data.original_name or fn.name) in declared}


def param_description(p: Parameter, index: int) -> str:
    return p.description or f"{field_name(p, index)} ({render_type_label(p.type)})"


def schema_block(fn: Function) -> str:
    lines = [f"const {pascal(fn.name)}Schema = z.object({{"]
    for i, p in enumerate(fn.inputs):
        lines.append(
            f"  {field_name(p, i)}: {zod_for(p.type)}.describe({json.dumps(param_description(p, i), ensure_ascii=False)}),"
        )
    lines.append("});")
    return "\n".join(lines) + "\n"


def tool_entry(fn: Function) -> str:
    return (
        "      {\n"
        f"        name: ToolName.{enum_member(fn.name)},\n"
        f"        description: {json.dumps(fn.description or fn.name, ensure_ascii=False)},\n"
        f'        inputSchema: zodToJsonSchema({pascal(fn.name)}Schema) as Tool["inputSchema"],\n'
        "      },\n"
    )


def dispatch_case(fn: Function, overloaded: bool) -> str:
    # ethers needs the full signature to pick one member of an overload set
    target = (fn.chain_data.original_signature or fn.signature) if overloaded else fn.name
    args = ", ".join(f"parsed.{field_name(p, i)}" for i, p in enumerate(fn.inputs))
    return (
        f"      case ToolName.{enum_member(fn.name)}: {{\n"
        f"        const parsed = {pascal(fn.name)}Schema.parse(args ?? {{}});\n"
        f"        const result = await contract.getFunction({json.dumps(target)})({args});\n"
        "        return formatResult(result);\n"
        "      }\n"
    )


def readme_tools(exposed: List[Function]) -> str:
    if not exposed:
        return "_This contract has no read-only functions to expose._"
    return "\n".join(f"- **{fn.name}**: {fn.description or fn.name}" for fn in exposed)


# ---- embedded ABI ----


def abi_type(t: ParameterType) -> str:
    if t.is_map:
        return f"mapping({t.map_key_type} => {t.base_type})"
    return t.base_type + array_suffix(t)


def abi_param(p: Parameter, *, indexed: Optional[bool] = None) -> Dict[str, Any]:
    out: Dict[str, Any] = {"name": p.name, "type": abi_type(p.type)}
    if p.type.components:
        out["components"] = [abi_param(c) for c in p.type.components]
    if indexed is not None:
        out["indexed"] = indexed
    return out


def abi_function(fn: Function) -> Dict[str, Any]:
    if fn.is_constructor:
        return {
            "type": "constructor",
            "inputs": [abi_param(p) for p in fn.inputs],
            "stateMutability": str(fn.state_mutability),
        }
    if fn.is_fallback or fn.is_receive:
        return {
            "type": "receive" if fn.is_receive else "fallback",
            "stateMutability": str(fn.state_mutability),
        }
    return {
        "type": "function",
        "name": fn.chain_data.original_name or fn.name,
        "inputs": [abi_param(p) for p in fn.inputs],
        "outputs": [abi_param(p) for p in fn.outputs],
        "stateMutability": str(fn.state_mutability),
    }


def abi_event(ev: Event) -> Dict[str, Any]:
    return {
        "type": "event",
        "name": ev.name,
        "inputs": [
            abi_param(Parameter(name=p.name, type=p.type), indexed=p.indexed) for p in ev.parameters
        ],
        "anonymous": ev.chain_data.anonymous,
    }


def contract_abi(ir: ContractIR) -> List[Dict[str, Any]]:
    """Every function, event and error, in IR order, under its declared name."""
    abi = [abi_function(fn) for fn in ir.functions]
    abi += [abi_event(ev) for ev in ir.events]
    abi += [
        {"type": "error", "name": er.name, "inputs": [abi_param(p) for p in er.parameters]}
        for er in ir.errors
    ]
    return abi


def _indent(text: str, spaces: int) -> str:
    """Indent every line but the first (the first follows the template's own indentation)."""
    pad = " " * spaces
    return text.replace("\n", "\n" + pad)


# ---- language dispatch ----


_RENDERERS: Dict[str, Callable[..., TypeScriptRenderer]] = {
    "ts": TypeScriptRenderer,
    "typescript": TypeScriptRenderer,
}

_PLANNED = {"python": "Python", "py": "Python"}


def get_renderer(lang: str = "ts", **options: Any) -> TypeScriptRenderer:
    key = (lang or "").strip().lower()
    factory = _RENDERERS.get(key)
    if factory is not None:
        return factory(**options)
    if key in _PLANNED:
        raise UnsupportedLanguageError(
            f"{_PLANNED[key]} generator not implemented yet", details={"lang": key}
        )
    raise UnsupportedLanguageError(
        f"unsupported language: {lang}", details={"lang": lang, "supported": sorted(_RENDERERS)}
    )


def render_project(ir: ContractIR, lang: str = "ts", **options: Any) -> Dict[str, bytes]:
    """Render ``ir`` with the renderer registered for ``lang``."""
    return get_renderer(lang, **options).render(ir)


__all__ = [
    "OUTPUTS",
    "OutputFile",
    "TypeScriptRenderer",
    "is_exposed",
    "contract_abi",
    "get_renderer",
    "render_project",
]
