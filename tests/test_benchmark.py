"""Tests for headless scripted runs and throughput benchmarking."""

import pytest

from grid_snake.benchmark import (
    BenchmarkResult,
    benchmark_throughput,
    parse_moves,
    run_script,
)
from grid_snake.config import GameConfig
from grid_snake.events import WALL_REASON
from grid_snake.snake import Direction


class TestParseMoves:
    def test_parse(self):
        assert parse_moves("U.d R") == [Direction.UP, None, Direction.DOWN, Direction.RIGHT]

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_moves("UX")


class TestRunScript:
    def test_straight_into_wall(self):
        run = run_script(GameConfig(seed=1), "")
        assert run.outcome == "lost"
        assert run.reason == WALL_REASON
        assert run.ticks == 9
        assert run.head == (0.0, 180.0)
        assert run.body_length == run.score

    def test_turns_follow_script(self):
        run = run_script(GameConfig(seed=2), "RUL")
        assert run.outcome == "lost"
        assert run.ticks == 12
        assert run.head == (-180.0, 20.0)

    def test_frame_limit(self):
        run = run_script(GameConfig(seed=0), "", max_frames=5)
        assert run.outcome == "running"
        assert run.reason is None
        assert run.frames == 5

    def test_invalid_fps(self):
        with pytest.raises(ValueError):
            run_script(GameConfig(), "", fps=0)


class TestBenchmark:
    def test_summary_format(self):
        result = BenchmarkResult(
            total_games=10,
            total_ticks=500,
            wall_time_seconds=1.5,
            games_per_second=6.67,
            ticks_per_second=333.3,
            mean_score=1.25,
        )
        summary = result.summary()
        assert "10 games" in summary
        assert "ticks/s" in summary
        assert "mean score 1.25" in summary

    def test_basic_benchmark(self):
        result = benchmark_throughput(
            num_games=3, max_ticks=50, grid_width=7, grid_height=7,
        )
        assert result.total_games == 3
        assert 0 < result.total_ticks <= 150
        assert result.ticks_per_second > 0

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            benchmark_throughput(num_games=0)
