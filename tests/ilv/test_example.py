"""
Tests for the puzzle driver (python -m zkp.ilv.example).

SUPPORTED_DIM is patched down so the driver runs on a small key.
"""

import logging

import pytest

from zkp.ilv import example
from zkp.ilv.encoding import save_key


@pytest.fixture
def small_dim(monkeypatch, dim):
    monkeypatch.setattr(example, "SUPPORTED_DIM", dim)
    return dim


class TestMain:
    """example.main 테스트."""

    def test_generated_key(self, small_dim, capsys):
        assert example.main([]) == 0
        out = capsys.readouterr().out
        assert "ILV Inner-Product Commitment Puzzle" in out
        assert f"β^{small_dim + 1}·g" in out

    def test_leaked_key_file(self, small_dim, leaked_key, tmp_path):
        path = tmp_path / "ck.srs"
        save_key(leaked_key, path)
        assert example.main([str(path)]) == 0

    def test_honest_key_file(self, small_dim, honest_key, tmp_path, capsys):
        path = tmp_path / "ck.srs"
        save_key(honest_key, path)
        assert example.main([str(path)]) == 1
        assert "[3]" not in capsys.readouterr().out

    def test_description(self):
        assert "Bob" in example.PUZZLE_DESCRIPTION


class TestSetupLogging:
    """LOG_LEVEL 처리 테스트."""

    def test_valid_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert example.setup_logging() == logging.DEBUG

    def test_invalid_level_falls_back(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        assert example.setup_logging() == logging.WARNING

    def test_unset_level(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert example.setup_logging() == logging.WARNING

    def test_main_with_invalid_level(self, small_dim, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        assert example.main([]) == 0
