"""Unit test configuration.

Keeps unit tests away from the real ``security`` and ``openssl`` tools and from
any KCTRUST_* variables set in the developer's environment.
"""

from typing import Any

import pytest

from .test_utils import FakeRun


@pytest.fixture(autouse=True)
def isolate_tools(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear kctrust environment overrides and block real tool execution.

    Tests that exercise the executor install their own ``FakeRun`` through the
    ``fake_run`` fixture.
    """
    for var in ("KCTRUST_SECURITY_BIN", "KCTRUST_OPENSSL_BIN", "KCTRUST_DEBUG"):
        monkeypatch.delenv(var, raising=False)

    def refuse(*args: Any, **kwargs: Any) -> None:
        raise AssertionError(f"unexpected external command: {args!r}")

    monkeypatch.setattr("kctrust.security.subprocess.run", refuse)


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch) -> FakeRun:
    """Install an empty ``FakeRun``; tests append results before calling."""
    fake = FakeRun()
    monkeypatch.setattr("kctrust.security.subprocess.run", fake)
    return fake
