import pytest


@pytest.fixture
def fast_settle(monkeypatch):
    """Skip the fixed settle delays in input commands."""
    monkeypatch.setattr("antigravity_remote.input.FOCUS_SETTLE_S", 0)
    monkeypatch.setattr("antigravity_remote.input.SUBMIT_SETTLE_S", 0)
