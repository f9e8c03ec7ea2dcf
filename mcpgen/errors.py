"""
mcpgen.errors
-------------

Exception hierarchy for the ABI → IR → MCP server pipeline.

Every failure the pipeline can surface derives from :class:`McpGenError` so the
CLI boundary can catch a single type, print a one-line diagnostic and exit
non-zero. Validation findings are *not* exceptions (see ``mcpgen.ir.validate``);
:class:`IRValidationError` only exists for callers that opt into rejecting an IR
with findings.

Design goals
~~~~~~~~~~~~
- Stable codes: upper-snake ASCII identifiers suitable for logs and tooling.
- Enough context (entry name, type string, template name) to locate the cause.
- Deterministic payloads: ``details`` never include timestamps or host data.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence


def _truncate(data: Any, max_len: int = 256) -> Any:
    """
    Truncate large strings for safe inclusion in diagnostics.
    Containers (list/tuple/dict) are shallowly summarized.
    """
    if isinstance(data, str):
        if len(data) <= max_len:
            return data
        return data[:max_len] + "..."
    if isinstance(data, (list, tuple)):
        return [_truncate(x, max_len) for x in data[:16]] + (
            ["..."] if len(data) > 16 else []
        )
    if isinstance(data, dict):
        out: Dict[str, Any] = {}
        for i, (k, v) in enumerate(data.items()):
            if i >= 16:
                out["..."] = "truncated"
                break
            out[str(k)] = _truncate(v, max_len)
        return out
    return data


class McpGenError(Exception):
    """
    Base class for pipeline errors.

    Attributes
    ----------
    code : str
        Stable, upper-snake ASCII identifier (e.g., 'TYPE_RESOLUTION').
    message : str
        Human-friendly explanation (single line preferred).
    details : dict
        Optional structured context (entry name, template name, ...).
    """

    code: str = "MCPGEN_ERROR"

    def __init__(
        self,
        message: str = "mcpgen error",
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = _truncate({k: v for k, v in (details or {}).items() if v is not None})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


class ArtifactDecodeError(McpGenError):
    """Raised when the artifact is not a well-formed JSON array of entry objects."""

    code = "ARTIFACT_DECODE"

    def __init__(
        self,
        message: str,
        *,
        entry_kind: Optional[str] = None,
        entry_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        dd = {"entry_kind": entry_kind, "entry_name": entry_name}
        if details:
            dd.update(details)
        super().__init__(message, details=dd)


class TypeResolutionError(McpGenError):
    """Raised when a declared type string cannot be decomposed."""

    code = "TYPE_RESOLUTION"

    def __init__(
        self,
        type_str: str,
        reason: str,
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        dd = {"type": type_str, "reason": reason}
        if details:
            dd.update(details)
        super().__init__(f"cannot resolve type {type_str!r}: {reason}", details=dd)
        self.type_str = type_str
        self.reason = reason


class IRDecodeError(McpGenError):
    """Raised by ``load_ir`` when a serialized IR document is malformed."""

    code = "IR_DECODE"


class IRValidationError(McpGenError):
    """Raised on request when an IR carries structural findings."""

    code = "IR_VALIDATION"

    def __init__(self, findings: Sequence[Any]) -> None:
        self.findings: List[Any] = list(findings)
        lines = [str(f) for f in self.findings]
        msg = f"IR has {len(lines)} validation finding(s)"
        if lines:
            msg += ": " + "; ".join(lines[:5])
            if len(lines) > 5:
                msg += f"; ... ({len(lines) - 5} more)"
        super().__init__(msg, details={"findings": lines})


class RenderError(McpGenError):
    """Raised when a template fails to parse or to execute against the IR."""

    code = "RENDER"

    def __init__(
        self,
        template: str,
        reason: str,
        *,
        tag: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        dd = {"template": template, "tag": tag}
        if details:
            dd.update(details)
        where = f"{template}: " + (f"{{{{{tag}}}}}: " if tag else "")
        super().__init__(f"failed to render {where}{reason}", details=dd)
        self.template = template
        self.reason = reason
        self.tag = tag


class UnsupportedChainError(McpGenError):
    code = "UNSUPPORTED_CHAIN"


class UnsupportedLanguageError(McpGenError):
    code = "UNSUPPORTED_LANGUAGE"


class ConfigError(McpGenError):
    code = "CONFIG"


class OutputExistsError(McpGenError):
    """Raised by the writer when a target file exists and overwrite is off."""

    code = "OUTPUT_EXISTS"


class UnsafeOutputPathError(McpGenError):
    """Raised by the writer for a relative path that would land outside the output directory."""

    code = "UNSAFE_OUTPUT_PATH"


__all__ = [
    "McpGenError",
    "ArtifactDecodeError",
    "TypeResolutionError",
    "IRDecodeError",
    "IRValidationError",
    "RenderError",
    "UnsupportedChainError",
    "UnsupportedLanguageError",
    "ConfigError",
    "OutputExistsError",
    "UnsafeOutputPathError",
]
