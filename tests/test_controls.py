import pytest

from qix.controls import InputBuffer, InputIntent


def test_sources_are_ored():
    buffer = InputBuffer()
    buffer.press('keyboard', 'left')
    buffer.press('touch', 'up')
    intent = buffer.consume()
    assert intent.left and intent.up
    assert not intent.right and not intent.down


def test_release_from_one_source_keeps_the_other():
    buffer = InputBuffer()
    buffer.press('keyboard', 'right')
    buffer.press('touch', 'right')
    buffer.release('keyboard', 'right')
    assert buffer.consume().right
    buffer.release_all('touch')
    assert not buffer.consume().right


def test_release_all_sources():
    buffer = InputBuffer()
    buffer.press('keyboard', 'down')
    buffer.press('touch', 'left')
    buffer.release_all()
    assert buffer.consume() == InputIntent()


def test_held_directions_persist_between_ticks():
    buffer = InputBuffer()
    buffer.press('keyboard', 'up')
    assert buffer.consume().up
    assert buffer.consume().up


def test_draw_toggle_is_delivered_once():
    buffer = InputBuffer()
    buffer.press_draw()
    assert buffer.consume().draw_toggle
    assert not buffer.consume().draw_toggle


def test_unknown_direction():
    with pytest.raises(ValueError):
        InputBuffer().press('keyboard', 'sideways')


def test_intent_axes():
    assert InputIntent(right=True, down=True).dx == 1
    assert InputIntent(right=True, down=True).dy == 1
    assert InputIntent(left=True, right=True).dx == 0
    assert InputIntent(up=True).dy == -1
