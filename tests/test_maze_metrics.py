from labyrinth.maze import MazeConfig
from labyrinth.maze.metrics import calculate_actual_complexity, calculate_maze_complexity, count_dead_ends
from tests.maze_test_utils import gen, open_maze


def test_configured_complexity_formula():
    cfg = MazeConfig(width=20, height=10, layers=2, obstacle_count=3, collectible_count=4, seed=1)
    # 20 + 20 + 15 + 8
    assert calculate_maze_complexity(cfg) == 63


def test_difficulty_scales_and_rounds_half_up():
    cfg = MazeConfig(width=5, height=5, layers=1, difficulty=1.5, seed=1)
    # (2.5 + 10) * 1.5 = 18.75
    assert calculate_maze_complexity(cfg) == 19
    cfg = MazeConfig(width=5, height=1, layers=1, difficulty=1.0, seed=1)
    # 0.5 + 10 = 10.5
    assert calculate_maze_complexity(cfg) == 11


def test_actual_complexity_uses_placed_counts():
    m = gen(3, 10, 10)
    assert calculate_actual_complexity(m) == 20
    assert calculate_actual_complexity(m, obstacles=1, collectibles=2) == 29


def test_generation_metrics_populated():
    m = gen(3, 9, 7)
    assert m.metrics["cells"] == 63
    assert m.metrics["passages_carved"] == 62
    assert m.metrics["dead_ends"] == count_dead_ends(m)
    assert m.metrics["dead_ends"] >= 2
    assert m.metrics["runtime_ms"] >= 0


def test_open_maze_has_no_dead_ends():
    assert count_dead_ends(open_maze(4, 4)) == 0
