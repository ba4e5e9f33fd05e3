import json

import pytest

from swisspairing.config import EngineConfig, load_config
from swisspairing.exceptions import (
    InvalidConfigurationException,
    MissingConfigurationException,
)
from swisspairing.type_hints import BLACK, WHITE


def test_defaults():
    config = EngineConfig()
    assert config.bye_score == 1.0
    assert config.initial_color == WHITE
    assert not config.alternate_first_round_colors


def test_load_config_from_json(tmp_path):
    path = tmp_path / "engine.json"
    path.write_text(
        json.dumps(
            {
                "bye_score": 0.5,
                "initial_color": "black",
                "alternate_first_round_colors": True,
            }
        ),
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.bye_score == 0.5
    assert config.initial_color == BLACK
    assert config.alternate_first_round_colors


def test_missing_config_file(tmp_path):
    with pytest.raises(MissingConfigurationException):
        load_config(tmp_path / "nope.json")


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[1, 2, 3]",
        '{"bye_points": 1.0}',
        '{"bye_score": 0.7}',
        '{"initial_color": "green"}',
        '{"max_backtrack_steps": 0}',
    ],
)
def test_invalid_config_files(tmp_path, content):
    path = tmp_path / "engine.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(InvalidConfigurationException):
        load_config(path)


def test_config_dict_form():
    config = EngineConfig(bye_score=0.0, max_floater_options=8)
    assert EngineConfig.from_dict(config.to_dict()) == config
