"""
mcpgen.ir.schema
----------------

Load serialized IR documents (the JSON produced by ``ContractIR.to_json``)
back into dataclasses, validating their shape against the packaged
``ir.schema.json`` first so a hand-edited or foreign document fails with a
JSON path instead of a stray ``KeyError`` deep inside ``from_dict``.

Shape checks here are about the *document*; structural rules about the
*contract* (empty names, bad mutability values, ...) belong to
``mcpgen.ir.validate`` and are reported as findings, not raised.
"""

from __future__ import annotations

import functools
import json
from pathlib import Path
from typing import Any, Dict, Union

import jsonschema

from ..errors import IRDecodeError
from .model import ContractIR

SCHEMA_PATH = Path(__file__).resolve().parent / "ir.schema.json"


@functools.lru_cache(maxsize=1)
def ir_schema() -> Dict[str, Any]:
    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        return json.load(f)


def check_document(doc: Any) -> None:
    """Raise ``IRDecodeError`` for the first schema violation (ordered by JSON path)."""
    validator = jsonschema.Draft7Validator(ir_schema())
    errors = sorted(validator.iter_errors(doc), key=lambda e: [str(p) for p in e.absolute_path])
    if errors:
        first = errors[0]
        raise IRDecodeError(
            f"IR document invalid at {first.json_path}: {first.message}",
            details={"path": first.json_path, "violations": len(errors)},
        )


def load_ir(source: Union[str, bytes, Dict[str, Any]]) -> ContractIR:
    """
    Parse an IR document (JSON text, bytes or an already-decoded dict).

    Raises:
        IRDecodeError: malformed JSON or a document that does not match the schema.
    """
    if isinstance(source, (bytes, bytearray)):
        try:
            source = bytes(source).decode("utf-8")
        except UnicodeDecodeError as e:
            raise IRDecodeError(f"IR document is not UTF-8: {e}") from e
    if isinstance(source, str):
        try:
            doc = json.loads(source)
        except json.JSONDecodeError as e:
            raise IRDecodeError(f"IR JSON parse error: {e}") from e
    else:
        doc = source

    check_document(doc)
    return ContractIR.from_dict(doc)


__all__ = ["SCHEMA_PATH", "ir_schema", "check_document", "load_ir"]
