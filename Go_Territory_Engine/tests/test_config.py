"""Settings loading and validation."""

import pytest

from Go_Territory_Engine.Gogame import Gogame
from Go_Territory_Engine.engine.errors import ConfigurationError
from Go_Territory_Engine.utils import config


def test_bundled_settings_load():
    settings = config.load_settings("config/settings.yaml")
    assert settings["board_size"] == 19
    assert settings["komi"] == 6.5
    assert settings["show_territory"] is False


def test_missing_file_yields_defaults(tmp_path):
    settings = config.load_settings(tmp_path / "absent.yaml")
    assert settings == config.validate_settings({})


def test_yaml_values_override_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("board_size: 9\nkomi: 7\nshow_territory: true\n", encoding="utf-8")
    settings = config.load_settings(path)
    assert settings["board_size"] == 9
    assert settings["komi"] == 7.0
    game = Gogame.from_settings(settings, logger=lambda *_: None)
    assert game.board.size == 9
    assert game.show_territory
    assert game.white_score == 7.0


@pytest.mark.parametrize(
    "text",
    [
        "board_size: 15\n",
        "komi: -1\n",
        "influence_radius: 0\n",
        "colour: red\n",
        "- 1\n- 2\n",
        "board_size: [9\n",
    ],
)
def test_bad_settings_rejected(tmp_path, text):
    path = tmp_path / "settings.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        config.load_settings(path)
