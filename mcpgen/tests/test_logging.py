from __future__ import annotations

import io
import json
import logging

from mcpgen import logging as mlog


def test_text_format_includes_context() -> None:
    buf = io.StringIO()
    mlog.configure(json=False, level="DEBUG", stream=buf)
    log = mlog.get_logger("mcpgen.test")
    with mlog.scope(contract="ERC20", chain="ethereum"):
        log.debug("normalized")
    log.info("outside")
    lines = buf.getvalue().splitlines()
    assert "| DEBUG | mcpgen.test | contract=ERC20 chain=ethereum | normalized" in lines[0]
    assert lines[1].endswith("| INFO  | mcpgen.test | outside")


def test_json_format_and_extras() -> None:
    buf = io.StringIO()
    mlog.configure(json=True, level="INFO", stream=buf)
    mlog.bind(command="generate")
    mlog.get_logger("mcpgen.x").info("wrote %d files", 3, extra={"out": b"\x01"})
    payload = json.loads(buf.getvalue())
    assert payload["msg"] == "wrote 3 files"
    assert payload["level"] == "INFO"
    assert payload["command"] == "generate"
    assert payload["out"] == "01"


def test_level_filters_and_env_defaults(monkeypatch) -> None:
    monkeypatch.setenv(mlog.ENV_LEVEL, "warning")
    monkeypatch.setenv(mlog.ENV_FORMAT, "json")
    buf = io.StringIO()
    mlog.configure(stream=buf)
    log = mlog.get_logger("mcpgen.y")
    log.info("hidden")
    log.warning("shown")
    out = buf.getvalue().strip().splitlines()
    assert len(out) == 1
    assert json.loads(out[0])["msg"] == "shown"


def test_configure_replaces_handlers() -> None:
    mlog.configure(stream=io.StringIO())
    mlog.configure(stream=io.StringIO())
    assert len(logging.getLogger("mcpgen").handlers) == 1


def test_scope_restores_previous_context() -> None:
    mlog.bind(command="ir")
    with mlog.scope(contract="A"):
        assert mlog.context() == {"command": "ir", "contract": "A"}
    assert mlog.context() == {"command": "ir"}
    mlog.unbind("command")
    assert mlog.context() == {}
