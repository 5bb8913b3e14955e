"""
Unit tests for environment-driven configuration.
"""

from __future__ import annotations

import importlib

import pytest

import app.config


@pytest.fixture()
def reload_config(monkeypatch):
    """Reload app.config under patched env vars, restoring the defaults after."""
    def _reload(**env):
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        return importlib.reload(app.config)
    yield _reload
    monkeypatch.undo()
    importlib.reload(app.config)


class TestLongHashtagThreshold:

    def test_default(self, reload_config):
        assert reload_config().LONG_HASHTAG_THRESHOLD == 8

    @pytest.mark.parametrize("raw", ["1", "0", "-3"])
    def test_values_below_two_are_clamped(self, reload_config, raw):
        assert reload_config(LONG_HASHTAG_THRESHOLD=raw).LONG_HASHTAG_THRESHOLD == 2

    def test_unparseable_value_falls_back(self, reload_config):
        assert reload_config(LONG_HASHTAG_THRESHOLD="eight").LONG_HASHTAG_THRESHOLD == 8
