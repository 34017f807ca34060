"""
Tests for the command-line interface.
"""

import argparse

import pytest

from .. import cli
from ..bots import SequenceEntropy
from ..cli import cmd_play, main


def play_args(**overrides) -> argparse.Namespace:
    values = {"difficulty": "hard", "pebbles": 10, "max_per_turn": 3, "seed": 5}
    values.update(overrides)
    return argparse.Namespace(**values)


def scripted(*answers: str):
    """input() replacement that replays answers, then gives up."""
    queue = list(answers)

    def _input(prompt: str = "") -> str:
        return queue.pop(0) if queue else "q"
    return _input


class TestPlayCommand:
    """Tests for `pebbles play`."""

    def test_give_up_immediately(self, capsys):
        cmd_play(play_args(), input_fn=scripted("q"))

        out = capsys.readouterr().out
        assert "Pile: 10 pebbles, take 1-3 per turn." in out
        assert "The opponent wins." in out

    def test_plays_to_the_end(self, capsys):
        cmd_play(play_args(), input_fn=scripted(*["1"] * 10))

        out = capsys.readouterr().out
        assert "win" in out

    def test_bad_input_is_reported(self, capsys):
        cmd_play(play_args(pebbles=40), input_fn=scripted("abc", "9"))

        out = capsys.readouterr().out
        assert "Enter a number." in out
        assert "Invalid move" in out

    def test_rejects_empty_pile(self, capsys):
        with pytest.raises(SystemExit):
            cmd_play(play_args(pebbles=0), input_fn=scripted())
        assert "Error" in capsys.readouterr().out

    def test_entropy_failure_mid_game_exits(self, capsys, monkeypatch):
        """Human goes first, the Easy reply finds the entropy exhausted."""
        monkeypatch.setattr(cli, "SeededEntropy", lambda seed: SequenceEntropy([0]))

        with pytest.raises(SystemExit) as exc_info:
            cmd_play(play_args(difficulty="easy"), input_fn=scripted("1"))

        assert exc_info.value.code == 1
        out = capsys.readouterr().out
        assert "Error: entropy sequence exhausted" in out
        assert "wins" not in out


class TestMain:
    def test_no_command_prints_help(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1
        assert "pebbles" in capsys.readouterr().out

    def test_serve_passes_log_level_to_uvicorn(self, monkeypatch):
        calls = []
        monkeypatch.setattr("uvicorn.run", lambda app, **kwargs: calls.append((app, kwargs)))

        main(["--log-level", "DEBUG", "serve", "--port", "9001"])

        assert calls == [(
            "pebbles.api.app:app",
            {"host": "127.0.0.1", "port": 9001, "log_level": "debug"},
        )]
