"""Tests for the arena command line entry point."""

import sys

import pytest

from indigo.engine import arena_cli


def test_runs_random_match(monkeypatch, capsys):
    monkeypatch.setattr(
        sys, "argv",
        ["indigo-arena", "--p1", "random", "--p2", "random", "--games", "1", "--seed", "3"],
    )
    arena_cli.main()
    out = capsys.readouterr().out
    assert "random_1 vs random_2" in out
    assert "Indigo arena: 1 games" in out


def test_unknown_strategy_exits(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["indigo-arena", "--p1", "minimax", "--games", "1"])
    with pytest.raises(SystemExit) as exc:
        arena_cli.main()
    assert exc.value.code == 1
    assert "Unknown strategy: minimax" in capsys.readouterr().err
