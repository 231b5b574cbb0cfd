"""Tests for the SimulationContext module."""

import json

from grid_snake.apple import Apple
from grid_snake.config import GameConfig
from grid_snake.engine import Scoreboard, SimulationContext
from grid_snake.events import TAIL_REASON, WALL_REASON, AudioCue, GameEventKind
from grid_snake.snake import Direction, Segment

FAR_APPLE = (-160.0, -160.0)


def _context(**overrides):
    overrides.setdefault("seed", 0)
    ctx = SimulationContext(GameConfig(**overrides))
    ctx.apple = Apple(FAR_APPLE)
    return ctx


class TestScoreboard:
    def test_increment_and_reset(self):
        board = Scoreboard()
        assert board.increment() == 1
        assert board.value == 1
        board.reset()
        assert board.value == 0


class TestContextInit:
    def test_default_init(self):
        ctx = SimulationContext(GameConfig(seed=0))
        assert ctx.scoreboard.value == 0
        assert ctx.ticks == 0
        assert not ctx.finished
        assert ctx.snake.head.position == (0.0, 0.0)
        assert ctx.snake.heading == Direction.UP
        assert ctx.snake.body == []

    def test_first_apple_off_center(self):
        for seed in range(50):
            ctx = SimulationContext(GameConfig(grid_width=3, grid_height=3, seed=seed))
            assert ctx.apple.position != (0.0, 0.0)
            assert ctx.grid.is_aligned(ctx.apple.position)


class TestClockGating:
    def test_ticks_only_when_clock_fires(self):
        ctx = _context(refresh_rate=4.0)
        assert ctx.update(0.125) is None
        assert ctx.snake.head.position == (0.0, 0.0)
        result = ctx.update(0.125)
        assert result is not None
        assert result.tick == 1
        assert ctx.snake.head.position == (0.0, 20.0)

    def test_long_frame_runs_single_tick(self):
        ctx = _context(refresh_rate=4.0)
        ctx.update(1.0)
        assert ctx.ticks == 1
        assert ctx.snake.head.position == (0.0, 20.0)

    def test_paused_clock_freezes(self):
        ctx = _context(refresh_rate=4.0)
        ctx.pause()
        assert ctx.update(5.0) is None
        assert ctx.ticks == 0
        ctx.resume()
        assert ctx.update(0.25) is not None


class TestInputResolution:
    def test_newest_valid_input_applied(self):
        ctx = _context(initial_direction=Direction.RIGHT)
        ctx.push_input(Direction.LEFT)
        ctx.push_input(Direction.UP)
        ctx.tick()
        assert ctx.snake.heading == Direction.UP
        assert ctx.snake.head.position == (0.0, 20.0)
        assert len(ctx.input_buffer) == 0

    def test_reversal_rejected(self):
        ctx = _context(initial_direction=Direction.RIGHT)
        ctx.push_input(Direction.LEFT)
        ctx.tick()
        assert ctx.snake.heading == Direction.RIGHT
        assert ctx.snake.head.position == (20.0, 0.0)


class TestAppleConsumption:
    def test_apple_one_tile_ahead(self):
        ctx = _context()
        ctx.apple = Apple((0.0, 20.0))
        result = ctx.tick()
        assert ctx.snake.head.position == (0.0, 20.0)
        assert result.ate_apple
        assert result.cues == [AudioCue.APPLE]
        assert result.event is None
        assert ctx.scoreboard.value == 1
        assert [seg.position for seg in ctx.snake.body] == [(0.0, 0.0)]
        assert ctx.apple.position not in {(0.0, 20.0), (0.0, 0.0)}

    def test_growth_fills_vacated_tail_tile(self):
        ctx = _context()
        ctx.snake.body = [Segment((0.0, -20.0), Direction.UP)]
        ctx.apple = Apple((0.0, 20.0))
        ctx.tick()
        assert [seg.position for seg in ctx.snake.body] == [(0.0, 0.0), (0.0, -20.0)]
        assert ctx.snake.body[-1].direction == Direction.UP

    def test_score_and_length_unchanged_without_apple(self):
        ctx = _context()
        result = ctx.tick()
        assert not result.ate_apple
        assert result.cues == []
        assert ctx.scoreboard.value == 0
        assert ctx.snake.length == 0

    def test_new_apple_never_on_snake(self):
        ctx = _context(grid_width=5, grid_height=5, initial_direction=Direction.RIGHT)
        ctx.snake.body = [
            Segment((-20.0, 0.0), Direction.RIGHT),
            Segment((-40.0, 0.0), Direction.RIGHT),
        ]
        ctx.apple = Apple((20.0, 0.0))
        ctx.tick()
        assert ctx.scoreboard.value == 1
        assert ctx.apple.position not in ctx.snake.positions()


class TestTerminalOutcomes:
    def test_wall_collision(self):
        ctx = _context()
        for _ in range(8):
            assert ctx.tick().event is None
        assert ctx.snake.head.position == (0.0, 160.0)
        result = ctx.tick()
        assert result.event.kind is GameEventKind.GAME_OVER
        assert result.event.reason == WALL_REASON
        assert result.cues == [AudioCue.WALL]
        assert ctx.finished

    def test_finished_context_stops(self):
        ctx = _context(grid_width=3, grid_height=3)
        ctx.apple = Apple((-20.0, -20.0))
        ctx.tick()
        ctx.tick()
        assert ctx.finished
        ticks = ctx.ticks
        assert ctx.tick().event is None
        assert ctx.update(10.0) is None
        assert ctx.ticks == ticks

    def test_small_tile_reaches_outermost_cell(self):
        ctx = _context(grid_width=5, grid_height=5, tile_size=(4.0, 4.0))
        assert ctx.tick().event is None
        assert ctx.tick().event is None
        assert ctx.snake.head.position == (0.0, 8.0)
        assert ctx.grid.in_bounds(ctx.snake.head.position)
        result = ctx.tick()
        assert result.event.reason == WALL_REASON
        assert ctx.snake.head.position == (0.0, 12.0)

    def test_tile_size_alone_configures_a_game(self):
        ctx = _context(tile_size=(10.0, 10.0))
        assert ctx.tick().event is None
        assert ctx.snake.head.position == (0.0, 10.0)

    def test_tail_collision(self):
        ctx = _context()
        ctx.snake.body = [
            Segment(pos, Direction.UP)
            for pos in [(20.0, 0.0), (20.0, 20.0), (0.0, 20.0), (-20.0, 20.0)]
        ]
        result = ctx.tick()
        assert result.event.reason == TAIL_REASON
        assert result.cues == [AudioCue.WALL]

    def test_win_on_full_board(self):
        ctx = _context(grid_width=3, grid_height=3)
        ctx.snake.head = Segment((20.0, 0.0), Direction.UP)
        ctx.snake.body = [
            Segment(pos, Direction.UP)
            for pos in [
                (20.0, -20.0), (0.0, -20.0), (-20.0, -20.0), (-20.0, 0.0),
                (0.0, 0.0), (0.0, 20.0), (-20.0, 20.0),
            ]
        ]
        ctx.apple = Apple((20.0, 20.0))
        result = ctx.tick()
        assert result.event.kind is GameEventKind.GAME_WON
        assert ctx.snake.length == ctx.config.win_length
        assert ctx.scoreboard.value == 1
        assert ctx.apple is None
        assert ctx.tick().event is None


class TestDeterminism:
    def test_same_seed_same_outcome(self):
        moves = [Direction.RIGHT, Direction.DOWN, Direction.LEFT, Direction.DOWN]
        assert self._run(5, moves) == self._run(5, moves)

    @staticmethod
    def _run(seed, moves):
        ctx = SimulationContext(GameConfig(seed=seed))
        for move in moves:
            ctx.push_input(move)
            ctx.tick()
        return ctx.get_state()


class TestSerialization:
    def test_state_is_json_serializable(self):
        ctx = _context()
        ctx.tick()
        state = ctx.get_state()
        assert isinstance(json.dumps(state), str)
        assert state["tick"] == 1
        assert state["apple"] == {"position": list(FAR_APPLE)}
        assert state["outcome"] is None
