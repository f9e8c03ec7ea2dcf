"""
mcpgen.config
-------------

Generator settings with layered sources:

    defaults ← config file (JSON or YAML) ← environment ← CLI flags

The CLI applies its flags last through ``Config.merged(...)``; everything
before that happens in :func:`load_config`.

Environment variables (prefix: MCPGEN_*)
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
MCPGEN_CONFIG=/path/to/mcpgen.yaml     # optional config file
MCPGEN_OUTPUT_DIR=./mcp-server
MCPGEN_LANG=ts                         # ts | typescript
MCPGEN_CHAIN=ethereum
MCPGEN_TEMPLATE_DIR=/path/to/templates
MCPGEN_INCLUDE_TESTS=true|false
MCPGEN_ENTRY=server
MCPGEN_LOG_LEVEL=INFO
MCPGEN_LOG_FORMAT=json|text

Config file keys are the field names below (``output_dir``, ``lang``, ...).
Unlike environment values, file values keep their JSON/YAML types.
"""

from __future__ import annotations

import dataclasses
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigError

ENV_PREFIX = "MCPGEN_"
ENV_CONFIG = "MCPGEN_CONFIG"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
_TRUE = {"1", "true", "t", "yes", "y", "on"}
_FALSE = {"0", "false", "f", "no", "n", "off"}


@dataclass(frozen=True)
class Config:
    output_dir: str = "./mcp-server"
    lang: str = "ts"
    chain: str = "ethereum"
    template_dir: Optional[str] = None
    include_tests: bool = False
    entry: str = "server"
    log_level: str = "INFO"
    log_json: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    def merged(self, **overrides: Any) -> "Config":
        """Return a copy with every non-None override applied and re-validated."""
        d = self.to_dict()
        d.update({k: v for k, v in overrides.items() if v is not None})
        return _build(d, source="overrides")


_FIELDS = {f.name: f for f in dataclasses.fields(Config)}
_BOOL_FIELDS = {"include_tests", "log_json"}


# -----------------------------
# Helpers: parsing & validation
# -----------------------------


def _parse_bool(v: Any, *, key: str, source: str) -> bool:
    if isinstance(v, bool):
        return v
    vv = str(v).strip().lower()
    if vv in _TRUE:
        return True
    if vv in _FALSE:
        return False
    raise ConfigError(f"{source}: {key} must be a boolean, got {v!r}", details={"key": key})


def _load_file_config(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        raise ConfigError(f"config file not found: {path}", details={"path": str(path)})
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"cannot parse config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")
    unknown = sorted(set(map(str, data)) - set(_FIELDS))
    if unknown:
        raise ConfigError(f"{path}: unknown config keys: {', '.join(unknown)}", details={"keys": unknown})
    return dict(data)


def _env_values(env: Mapping[str, str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for name in _FIELDS:
        v = env.get(ENV_PREFIX + name.upper())
        if v is not None and v != "":
            out[name] = v
    fmt = env.get("MCPGEN_LOG_FORMAT", "").strip().lower()
    if fmt:
        if fmt not in ("json", "text"):
            raise ConfigError(f"MCPGEN_LOG_FORMAT must be json or text, got {fmt!r}")
        out["log_json"] = fmt == "json"
    return out


def _build(d: Dict[str, Any], *, source: str) -> Config:
    values: Dict[str, Any] = {}
    for key, value in d.items():
        if key in _BOOL_FIELDS:
            values[key] = _parse_bool(value, key=key, source=source)
        elif value is None:
            values[key] = None
        else:
            values[key] = str(value).strip()

    level = values.get("log_level")
    if level is not None:
        level = level.upper()
        if level not in _LOG_LEVELS:
            raise ConfigError(
                f"{source}: log_level must be one of {', '.join(_LOG_LEVELS)}, got {d['log_level']!r}",
                details={"key": "log_level"},
            )
        values["log_level"] = level
    for key in ("output_dir", "lang", "chain", "entry"):
        if key in values and not values[key]:
            raise ConfigError(f"{source}: {key} must be non-empty", details={"key": key})
    if values.get("template_dir") == "":
        values["template_dir"] = None
    return Config(**values)


# -----------------------------
# Loader
# -----------------------------


def load_config(
    path: Optional[os.PathLike[str] | str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Config:
    """
    Build a Config from (defaults) ← file (JSON/YAML) ← environment.

    ``path`` wins over ``MCPGEN_CONFIG``. An explicitly named file that does not
    exist is an error.

    Raises:
        ConfigError: unreadable/unparseable file, unknown keys or invalid values.
    """
    env = os.environ if env is None else env
    d: Dict[str, Any] = Config().to_dict()

    p = path or env.get(ENV_CONFIG) or None
    if p:
        file_path = Path(p).expanduser()
        d.update(_load_file_config(file_path))
        cfg = _build(d, source=str(file_path))
        d = cfg.to_dict()

    d.update(_env_values(env))
    return _build(d, source="environment")


__all__ = ["Config", "ENV_CONFIG", "ENV_PREFIX", "load_config"]
