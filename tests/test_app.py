import pytest

pytest.importorskip("pygame")

import pygame  # noqa: E402

from qix.app import HudScoreboard, QixApp, build_parser, main  # noqa: E402
from qix.config import GameConfig  # noqa: E402
from qix.entities import SessionPhase  # noqa: E402


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert (args.width, args.height, args.fps) == (800, 600, 60)
    assert args.seed is None
    assert not args.touch
    assert args.log_level == "WARNING"


def test_too_small_canvas_is_a_usage_error():
    with pytest.raises(SystemExit) as exc:
        main(["--width", "120"])
    assert exc.value.code == 2


def test_hud_scoreboard_tracks_game_over():
    board = HudScoreboard()
    board.show_counters(120, 1, 12)
    board.show_game_over(120, 12)
    board.show_counters(120, 0, 12)
    assert board.final == (120, 12)

    board.show_counters(0, 3, 0)
    assert board.final is None
    assert (board.score, board.lives, board.territory) == (0, 3, 0)


# ============================================================================
# INPUT ROUTING
# ============================================================================


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    qix_app = QixApp(GameConfig(), seed=1, touch_controls=True)
    yield qix_app
    pygame.quit()


def post_key(key, kind=pygame.KEYDOWN):
    pygame.event.post(pygame.event.Event(kind, key=key, mod=0, unicode='', scancode=0))


def test_arrow_keys_hold_directions_until_released(app):
    post_key(pygame.K_LEFT)
    post_key(pygame.K_UP)
    app.handle_input()
    intent = app.inputs.consume()
    assert intent.left and intent.up

    post_key(pygame.K_LEFT, pygame.KEYUP)
    app.handle_input()
    intent = app.inputs.consume()
    assert intent.up and not intent.left


def test_session_keys(app):
    post_key(pygame.K_RETURN)
    app.handle_input()
    assert app.engine.phase == SessionPhase.RUNNING

    post_key(pygame.K_p)
    app.handle_input()
    assert app.engine.phase == SessionPhase.PAUSED

    post_key(pygame.K_r)
    app.handle_input()
    assert app.engine.phase == SessionPhase.STOPPED


def test_space_latches_one_draw_toggle(app):
    post_key(pygame.K_SPACE)
    app.handle_input()
    assert app.inputs.consume().draw_toggle
    assert not app.inputs.consume().draw_toggle


def test_escape_quits(app):
    post_key(pygame.K_ESCAPE)
    app.handle_input()
    assert not app.running


def test_hud_button_click(app):
    pos = app.buttons['start'].center
    pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=pos, button=1, touch=False))
    app.handle_input()
    assert app.engine.phase == SessionPhase.RUNNING


def test_dpad_drag_switches_direction_and_lift_releases(app):
    app._handle_pointer(pygame.MOUSEBUTTONDOWN, 'mouse', app.dpad['up'].center)
    assert app.inputs.is_held('up')

    app._handle_pointer(pygame.MOUSEMOTION, 'mouse', app.dpad['right'].center)
    assert app.inputs.is_held('right')
    assert not app.inputs.is_held('up')

    app._handle_pointer(pygame.MOUSEBUTTONUP, 'mouse', app.dpad['right'].center)
    assert not any(app.inputs.is_held(d) for d in ('up', 'down', 'left', 'right'))


def test_dragging_off_the_dpad_releases(app):
    app._handle_pointer(pygame.MOUSEBUTTONDOWN, 'mouse', app.dpad['left'].center)
    app._handle_pointer(pygame.MOUSEMOTION, 'mouse', (400, 300))
    assert not app.inputs.is_held('left')


def test_two_fingers_hold_independently(app):
    app._handle_pointer(pygame.MOUSEBUTTONDOWN, ('finger', 1), app.dpad['up'].center)
    app._handle_pointer(pygame.MOUSEBUTTONDOWN, ('finger', 2), app.dpad['left'].center)
    app._handle_pointer(pygame.MOUSEBUTTONUP, ('finger', 1), app.dpad['up'].center)
    assert app.inputs.is_held('left')
    assert not app.inputs.is_held('up')


def test_draw_button_and_reset_button(app):
    app._handle_pointer(pygame.MOUSEBUTTONDOWN, 'mouse', app.buttons['draw'].center)
    assert app.inputs.consume().draw_toggle

    app.engine.start()
    app._handle_pointer(pygame.MOUSEBUTTONDOWN, 'mouse', app.buttons['reset'].center)
    assert app.engine.phase == SessionPhase.STOPPED
