"""
mcpgen.version
--------------

- __version__: the installed distribution's version (``importlib.metadata``),
  or ``_SEMVER_BASE`` when running from a source tree that was never installed.
- RENDERER_VERSION: bumped whenever generated output changes for identical IR.
  Generated files embed this value, never the package version, so output is
  byte-stable across patch releases that leave the templates alone.
"""

from __future__ import annotations

import functools
from importlib import metadata

DISTRIBUTION = "mcpgen"

_SEMVER_BASE = "0.3.0"

RENDERER_VERSION = "1.0.0"


@functools.lru_cache(maxsize=1)
def version() -> str:
    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return _SEMVER_BASE


__version__ = version()

__all__ = ["__version__", "version", "RENDERER_VERSION"]
