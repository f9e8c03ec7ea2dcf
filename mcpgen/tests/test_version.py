from __future__ import annotations

from importlib import metadata

import pytest

from mcpgen import version as v


@pytest.fixture(autouse=True)
def _fresh_cache():
    v.version.cache_clear()
    yield
    v.version.cache_clear()


def test_reads_installed_distribution(monkeypatch: pytest.MonkeyPatch) -> None:
    seen = []

    def fake(name: str) -> str:
        seen.append(name)
        return "9.8.7"

    monkeypatch.setattr(metadata, "version", fake)
    assert v.version() == "9.8.7"
    assert seen == ["mcpgen"]


def test_falls_back_to_base_when_not_installed(monkeypatch: pytest.MonkeyPatch) -> None:
    def missing(name: str) -> str:
        raise metadata.PackageNotFoundError(name)

    monkeypatch.setattr(metadata, "version", missing)
    assert v.version() == v._SEMVER_BASE


def test_version_has_no_vcs_suffix() -> None:
    assert "+" not in v.version()
