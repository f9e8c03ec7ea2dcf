"""
mcpgen.render
=============

IR → generated project files.

    >>> from mcpgen.render import render_project
    >>> files = render_project(ir, lang="ts", include_tests=True)
    >>> sorted(files)[:2]
    ['README.md', 'package.json']
"""

from .engine import FILTERS, Template, TemplateLoader, parse
from .typemap import TypeCategory, categorize, zod_for
from .typescript import OUTPUTS, TypeScriptRenderer, contract_abi, get_renderer, is_exposed, render_project

__all__ = [
    "FILTERS",
    "Template",
    "TemplateLoader",
    "parse",
    "TypeCategory",
    "categorize",
    "zod_for",
    "OUTPUTS",
    "TypeScriptRenderer",
    "contract_abi",
    "get_renderer",
    "is_exposed",
    "render_project",
]
