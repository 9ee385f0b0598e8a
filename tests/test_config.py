"""
Unit tests for configuration helpers.
"""
import pytest

from pdindex import config


def test_env_int_unset(monkeypatch):
    monkeypatch.delenv("PDI_TEST_SEED", raising=False)
    assert config._env_int("PDI_TEST_SEED") is None


def test_env_int_parses(monkeypatch):
    monkeypatch.setenv("PDI_TEST_SEED", " 42 ")
    assert config._env_int("PDI_TEST_SEED") == 42


def test_env_int_rejects_garbage(monkeypatch):
    monkeypatch.setenv("PDI_TEST_SEED", "forty-two")
    with pytest.raises(RuntimeError):
        config._env_int("PDI_TEST_SEED")


def test_defaults():
    assert config.ROLLING_CONFIG["window_size"] == 90
    assert config.SAMPLING_CONFIG["trials_per_size"] > 0
    assert config.RETURNS_CONFIG["date_column"] == "Date"
