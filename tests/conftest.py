# tests/conftest.py
from __future__ import annotations

import pytest

from ntalgo import runtime


@pytest.fixture(autouse=True)
def _isolated_runtime(tmp_path, monkeypatch):
    """Each test starts from the built-in defaults and a private workspace."""
    monkeypatch.setenv("NTALGO_HOME", str(tmp_path / "ws"))
    runtime.reset()
    yield
    runtime.reset()
