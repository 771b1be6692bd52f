from qix.config import GameConfig
from qix.entities import GameState, Qix, SessionPhase, build_border


def test_initial_state():
    config = GameConfig()
    state = GameState.initial(config)

    assert state.player.position == (50, 550)
    assert state.player.on_border and not state.player.drawing
    assert state.qix.position == (400, 300)
    assert (state.qix.vx, state.qix.vy) == (2.0, 1.5)
    assert state.lives == 3
    assert state.score == 0
    assert state.territory_percentage == 0
    assert state.phase == SessionPhase.STOPPED
    assert state.current_line == [] and state.drawn_lines == [] and state.territory == []


def test_initial_sparks_patrol_top_and_bottom():
    state = GameState.initial(GameConfig())
    top, bottom = state.sparks
    assert (top.x, top.y, top.direction, top.speed) == (100, 50, 1, 1.0)
    assert (bottom.x, bottom.y, bottom.direction, bottom.speed) == (700, 550, -1, 1.2)


def test_qix_trail_is_bounded_fifo():
    qix = Qix(0, 0, 1, 1, trail_length=20)
    for i in range(25):
        qix.trail.append((i, i))
    assert len(qix.trail) == 20
    assert qix.trail[0] == (5, 5)
    assert qix.trail[-1] == (24, 24)


def test_border_points():
    config = GameConfig()
    border = build_border(config)
    # Two full-width rows plus two columns between the rows
    assert len(border) == 2 * (800 // 5) + 2 * (500 // 5)
    assert (0.0, 50) in border
    assert (795.0, 550) in border
    assert (50, 50.0) in border
    assert (750, 545.0) in border
    assert all(x in (50, 750) or y in (50, 550) for x, y in border)
