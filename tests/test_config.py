import pytest

from qix.config import GameConfig


def test_default_playfield():
    config = GameConfig()
    assert (config.left, config.top) == (50, 50)
    assert (config.right, config.bottom) == (750, 550)
    assert config.playfield_area == 700 * 500
    assert config.start_position == (50, 550)
    assert config.screen_height == config.HEIGHT + config.HUD_HEIGHT


@pytest.mark.parametrize("overrides", [
    {"WIDTH": 150},
    {"HEIGHT": 100},
    {"HEIGHT": 150, "MARGIN": 80},
    {"FPS": 0},
    {"PLAYER_SPEED": 0},
    {"TRAIL_LENGTH": 0},
])
def test_invalid_config_is_rejected(overrides):
    with pytest.raises(ValueError):
        GameConfig(**overrides)
