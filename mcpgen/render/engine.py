# -*- coding: utf-8 -*-
"""
mcpgen.render.engine

Strict placeholder engine for the generated-project templates.

Syntax
------
- ``{{ path.to.value }}``          : dotted lookup into the render context
- ``{{ value | lower | json }}``   : left-to-right filter chain

Filters: ``lower``, ``upper``, ``title``, ``slug``, ``json``, ``trim``.

Unlike a scaffolding substitution pass, nothing is ever left intact: an
unterminated tag, a malformed expression or an unknown filter fails at parse
time, and an unknown path or a non-scalar value without ``json`` fails at
execution time. Both raise ``RenderError`` naming the template and the tag.

There is no loop or conditional syntax. Repeated fragments (enum members,
switch branches, schema fields) are computed in Python and handed to the
template as ready strings, so templates stay readable TypeScript/JSON.

Template lookup
---------------
``TemplateLoader(template_dir)`` resolves ``<name>.tmpl`` in the custom
directory first and falls back to the packaged default under
``mcpgen/render/templates/``.
"""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from ..errors import RenderError

log = logging.getLogger(__name__)

DEFAULT_TEMPLATES = Path(__file__).resolve().parent / "templates"
TEMPLATE_SUFFIX = ".tmpl"

OPEN, CLOSE = "{{", "}}"
RE_PATH = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z0-9_]+)*$")
RE_SLUG_JUNK = re.compile(r"[^a-z0-9]+")


# ---------- Filters ----------------------------------------------------------


def _scalar(v: Any) -> str:
    if isinstance(v, bool):
        return "true" if v else "false"
    if v is None:
        return ""
    return str(v)


def slugify(v: Any) -> str:
    return RE_SLUG_JUNK.sub("-", _scalar(v).lower()).strip("-")


def _title(v: Any) -> str:
    return " ".join(w[:1].upper() + w[1:] for w in _scalar(v).split(" "))


FILTERS: Dict[str, Callable[[Any], Any]] = {
    "lower": lambda v: _scalar(v).lower(),
    "upper": lambda v: _scalar(v).upper(),
    "title": _title,
    "slug": slugify,
    "json": lambda v: json.dumps(v, ensure_ascii=False),
    "trim": lambda v: _scalar(v).strip(),
}


# ---------- Parsed template --------------------------------------------------


@dataclass(frozen=True)
class Tag:
    raw: str
    path: Tuple[str, ...]
    filters: Tuple[str, ...]


Node = Union[str, Tag]


@dataclass(frozen=True)
class Template:
    name: str
    nodes: Tuple[Node, ...]

    def render(self, context: Mapping[str, Any]) -> str:
        out: List[str] = []
        for node in self.nodes:
            if isinstance(node, str):
                out.append(node)
            else:
                out.append(self._execute(node, context))
        return "".join(out)

    def placeholders(self) -> List[str]:
        """Dotted paths referenced by this template, in order of first use."""
        seen: Dict[str, None] = {}
        for node in self.nodes:
            if isinstance(node, Tag):
                seen.setdefault(".".join(node.path), None)
        return list(seen)

    def _execute(self, tag: Tag, context: Mapping[str, Any]) -> str:
        value: Any = context
        for i, part in enumerate(tag.path):
            if isinstance(value, Mapping) and part in value:
                value = value[part]
            elif isinstance(value, (list, tuple)) and part.isdigit() and int(part) < len(value):
                value = value[int(part)]
            else:
                where = ".".join(tag.path[: i + 1])
                raise RenderError(self.name, f"unknown path {where!r}", tag=tag.raw)
        if isinstance(value, (Mapping, list, tuple)) and "json" not in tag.filters:
            raise RenderError(
                self.name,
                f"value of type {type(value).__name__} needs the json filter",
                tag=tag.raw,
            )
        for f in tag.filters:
            if f != "json" and isinstance(value, (Mapping, list, tuple)):
                raise RenderError(
                    self.name,
                    f"filter {f!r} cannot apply to a value of type {type(value).__name__}; apply json first",
                    tag=tag.raw,
                )
            value = FILTERS[f](value)
        if isinstance(value, (Mapping, list, tuple)):
            raise RenderError(
                self.name,
                f"value of type {type(value).__name__} needs the json filter",
                tag=tag.raw,
            )
        return _scalar(value)


def parse(source: str, name: str = "<string>") -> Template:
    """
    Parse ``source`` into a ``Template``.

    Raises:
        RenderError: unterminated tag, malformed expression or unknown filter.
    """
    nodes: List[Node] = []
    pos = 0
    while True:
        start = source.find(OPEN, pos)
        if start < 0:
            if pos < len(source):
                nodes.append(source[pos:])
            break
        if start > pos:
            nodes.append(source[pos:start])
        end = source.find(CLOSE, start + len(OPEN))
        if end < 0:
            line = source.count("\n", 0, start) + 1
            snippet = source[start : start + 40].split("\n", 1)[0]
            raise RenderError(name, f"unterminated tag at line {line}", tag=snippet[2:].strip())
        nodes.append(_parse_tag(source[start + len(OPEN) : end], name))
        pos = end + len(CLOSE)
    return Template(name=name, nodes=tuple(nodes))


def _parse_tag(body: str, name: str) -> Tag:
    raw = body.strip()
    parts = [p.strip() for p in raw.split("|")]
    path = parts[0]
    if not RE_PATH.match(path):
        raise RenderError(name, f"malformed expression {path!r}", tag=raw)
    filters = parts[1:]
    for f in filters:
        if f not in FILTERS:
            raise RenderError(name, f"unknown filter {f!r}", tag=raw)
    return Tag(raw=raw, path=tuple(path.split(".")), filters=tuple(filters))


# ---------- Loader -----------------------------------------------------------


class TemplateLoader:
    """
    Resolve and parse templates by output name (``package.json``, ``server.ts``, ...).

    Custom directories are read-only and only consulted per file; anything they
    do not provide comes from the packaged defaults.
    """

    def __init__(self, template_dir: Optional[Union[str, os.PathLike[str]]] = None) -> None:
        self.template_dir = Path(template_dir).expanduser().resolve() if template_dir else None
        if self.template_dir is not None and not self.template_dir.is_dir():
            raise RenderError(str(self.template_dir), "custom template directory does not exist")

    def source_path(self, name: str) -> Path:
        fname = name + TEMPLATE_SUFFIX
        if self.template_dir is not None:
            custom = self.template_dir / fname
            if custom.is_file():
                return custom
        default = DEFAULT_TEMPLATES / fname
        if not default.is_file():
            raise RenderError(name, "no such template")
        return default

    def load(self, name: str) -> Template:
        path = self.source_path(name)
        log.debug("template %s -> %s", name, path)
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise RenderError(name, f"cannot read template {path}: {e}") from e
        return parse(source, name)

    def render(self, name: str, context: Mapping[str, Any]) -> str:
        return self.load(name).render(context)


__all__ = [
    "DEFAULT_TEMPLATES",
    "FILTERS",
    "Tag",
    "Template",
    "TemplateLoader",
    "parse",
    "slugify",
]
