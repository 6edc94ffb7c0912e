from labyrinth.maze import MemoryMaze
from tests.maze_test_utils import gen


def _memory(fade=2000):
    return MemoryMaze(gen(31, 10, 10), fade_delay_ms=fade)


def test_cell_fades_after_delay_but_stays_revealed():
    m = _memory(2000)
    m.update((0, 0), 0)
    m.update((9, 9), 1999)
    assert m.current_time == 1999
    assert m.get_cell((0, 0)).is_visible is True
    assert m.get_cell((0, 0)).is_revealed is True
    m.update((9, 9), 2)
    assert m.current_time == 2001
    assert m.get_cell((0, 0)).is_visible is False
    assert m.get_cell((0, 0)).is_revealed is True


def test_exactly_at_delay_is_still_visible():
    m = _memory(500)
    m.update((0, 0), 0)
    m.update((9, 9), 500)
    assert m.get_cell((0, 0)).is_visible


def test_neighbours_are_stamped_and_lit():
    m = _memory()
    m.update((4, 4), 10)
    for pos in [(4, 4), (4, 3), (4, 5), (3, 4), (5, 4)]:
        cell = m.get_cell(pos)
        assert cell.is_visible and cell.is_revealed, pos
    assert not m.get_cell((5, 5)).is_visible
    assert set(m.visited_positions()) == {(4, 4), (4, 3), (4, 5), (3, 4), (5, 4)}


def test_corner_only_tracks_in_bounds_neighbours():
    m = _memory()
    m.update((0, 0), 0)
    assert set(m.visited_positions()) == {(0, 0), (1, 0), (0, 1)}


def test_revisit_refreshes_timestamp():
    m = _memory(1000)
    m.update((2, 2), 0)
    m.update((2, 2), 900)
    m.update((9, 9), 900)
    assert m.get_cell((2, 2)).is_visible
    m.update((9, 9), 200)
    assert not m.get_cell((2, 2)).is_visible


def test_untracked_cells_start_hidden_and_are_not_touched():
    m = _memory()
    assert not any(c.is_visible for c in m.maze.cells())
    m.update((0, 0), 5000)
    assert len(m.visited_positions()) == 3


def test_invalid_positions_only_advance_the_clock():
    m = _memory(100)
    m.update((0, 0), 0)
    m.update((50, 50), 60)
    m.update(None, 60)
    assert m.current_time == 120
    assert len(m.visited_positions()) == 3
    assert not m.get_cell((0, 0)).is_visible


def test_negative_elapsed_treated_as_zero():
    m = _memory(100)
    m.update((0, 0), 50)
    m.update((0, 0), -500)
    assert m.current_time == 50


def test_tick_without_position_fades():
    m = _memory(100)
    m.tick((3, 3), 0)
    m.tick(None, 150)
    assert not m.get_cell((3, 3)).is_visible
    assert m.state()["tracked"] == 5


def test_non_finite_elapsed_does_not_stop_fading():
    m = _memory(10)
    m.update((0, 0), 0)
    m.update((9, 9), float("inf"))
    m.update((9, 9), float("nan"))
    assert m.current_time == 0
    m.update((9, 9), 100)
    assert m.current_time == 100
    assert not m.get_cell((0, 0)).is_visible
    assert m.get_cell((0, 0)).is_revealed
