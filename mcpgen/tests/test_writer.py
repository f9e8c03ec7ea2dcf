from __future__ import annotations

from pathlib import Path

import pytest

from mcpgen.errors import McpGenError, OutputExistsError, UnsafeOutputPathError
from mcpgen.writer import plan_write, read_tree, write_files

FILES = {
    "package.json": b"{}\n",
    "src/server.ts": b"// server\n",
}


def test_write_creates_directories(tmp_path: Path) -> None:
    out = tmp_path / "out"
    plan = write_files(FILES, out)
    assert plan.paths == ["package.json", "src/server.ts"]
    assert [a.reason for a in plan.actions] == ["create", "create"]
    assert read_tree(out) == FILES


def test_existing_files_abort_before_any_write(tmp_path: Path) -> None:
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "server.ts").write_bytes(b"keep me")
    with pytest.raises(OutputExistsError) as ei:
        write_files(FILES, tmp_path)
    assert ei.value.details["existing"] == ["src/server.ts"]
    assert not (tmp_path / "package.json").exists()
    assert (tmp_path / "src" / "server.ts").read_bytes() == b"keep me"


def test_overwrite(tmp_path: Path) -> None:
    write_files(FILES, tmp_path)
    plan = write_files({"package.json": b"new"}, tmp_path, overwrite=True)
    assert [a.reason for a in plan.actions] == ["overwrite"]
    assert (tmp_path / "package.json").read_bytes() == b"new"


@pytest.mark.parametrize("rel", ["../escape.txt", "/abs.txt", "a/../../b"])
def test_paths_must_stay_inside(tmp_path: Path, rel: str) -> None:
    with pytest.raises(UnsafeOutputPathError, match="outside the output directory") as ei:
        plan_write({rel: b"x"}, tmp_path)
    assert isinstance(ei.value, McpGenError)
    assert ei.value.code == "UNSAFE_OUTPUT_PATH"
    assert ei.value.details["path"] == rel
