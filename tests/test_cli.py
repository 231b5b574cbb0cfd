"""Tests for the grid-snake CLI."""

import json

from grid_snake.cli import _build_parser, main
from grid_snake.config import GameConfig


class TestCLIParser:
    def test_no_command_returns_1(self):
        assert main([]) == 1

    def test_simulate_defaults(self):
        args = _build_parser().parse_args(["simulate"])
        assert args.command == "simulate"
        assert args.moves == ""
        assert args.frames == 10_000
        assert args.seed is None

    def test_benchmark_defaults(self):
        args = _build_parser().parse_args(["benchmark"])
        assert args.games == 100
        assert args.max_ticks == 500


class TestCLICommands:
    def test_simulate(self, capsys):
        assert main(["simulate", "--moves", "R", "--seed", "3"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["outcome"] == "lost"
        assert out["ticks"] == 9
        assert out["head"] == [180.0, 0.0]

    def test_simulate_with_config_file(self, tmp_path, capsys):
        path = tmp_path / "cfg.json"
        GameConfig(grid_width=5, grid_height=5).save(path)
        assert main(["simulate", "--config", str(path), "--seed", "1"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["ticks"] == 3

    def test_benchmark(self, capsys):
        assert main(["benchmark", "--games", "2", "--max-ticks", "20"]) == 0
        assert "Benchmark:" in capsys.readouterr().out

    def test_config_to_stdout(self, capsys):
        assert main(["config"]) == 0
        assert json.loads(capsys.readouterr().out)["grid_width"] == 17

    def test_config_to_file(self, tmp_path):
        path = tmp_path / "out.json"
        assert main(["config", "--output", str(path)]) == 0
        assert GameConfig.load(path) == GameConfig()
