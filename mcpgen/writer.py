"""
mcpgen.writer

Persist a rendered file map (relative path → bytes) beneath an output
directory. Planning and writing are separate steps so the CLI can refuse the
whole set up front: with ``overwrite=False`` an existing target aborts before
anything is written.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Dict, List, Mapping, Tuple

from .errors import OutputExistsError, UnsafeOutputPathError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class WriteAction:
    rel: str
    dst: Path
    size: int
    reason: str  # "create" | "overwrite"


@dataclass(frozen=True)
class WritePlan:
    out_dir: Path
    actions: Tuple[WriteAction, ...]

    @property
    def paths(self) -> List[str]:
        return [a.rel for a in self.actions]


def _safe_rel(rel: str) -> PurePosixPath:
    p = PurePosixPath(rel)
    if p.is_absolute() or not p.parts or ".." in p.parts:
        raise UnsafeOutputPathError(
            f"refusing to write outside the output directory: {rel!r}", details={"path": rel}
        )
    return p


def plan_write(files: Mapping[str, bytes], out_dir: str | os.PathLike[str], *, overwrite: bool = False) -> WritePlan:
    """
    Compute what ``write_files`` would do.

    Raises:
        OutputExistsError: a target exists and ``overwrite`` is False.
    """
    out = Path(out_dir).expanduser().resolve()
    actions: List[WriteAction] = []
    existing: List[str] = []
    for rel, content in files.items():
        dst = out.joinpath(*_safe_rel(rel).parts)
        if dst.exists():
            existing.append(rel)
            reason = "overwrite"
        else:
            reason = "create"
        actions.append(WriteAction(rel=rel, dst=dst, size=len(content), reason=reason))
    if existing and not overwrite:
        raise OutputExistsError(
            f"{len(existing)} file(s) already exist in {out} (use --overwrite): {', '.join(existing)}",
            details={"out_dir": str(out), "existing": existing},
        )
    return WritePlan(out_dir=out, actions=tuple(actions))


def write_files(
    files: Mapping[str, bytes], out_dir: str | os.PathLike[str], *, overwrite: bool = False
) -> WritePlan:
    """Write every file, creating parent directories as needed. Returns the executed plan."""
    plan = plan_write(files, out_dir, overwrite=overwrite)
    for act in plan.actions:
        act.dst.parent.mkdir(parents=True, exist_ok=True)
        act.dst.write_bytes(files[act.rel])
        log.debug("wrote %s (%s, %d bytes)", act.dst, act.reason, act.size)
    return plan


def read_tree(out_dir: str | os.PathLike[str]) -> Dict[str, bytes]:
    """Inverse of ``write_files``: relative POSIX path → bytes for every file under ``out_dir``."""
    root = Path(out_dir)
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"), key=lambda x: str(x))
        if p.is_file()
    }


__all__ = ["WriteAction", "WritePlan", "plan_write", "write_files", "read_tree"]
