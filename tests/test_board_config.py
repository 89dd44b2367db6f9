import json
import logging

import pytest

from tileblast.components.board_config import BoardConfig, load_board_config
from tileblast.components.palette import ColorSet, palette_from_entries
from tileblast.constants import DEFAULT_CLUSTER_CHANCE, DEFAULT_THRESHOLDS
from tileblast.errors import InvalidConfiguration


def test_defaults_validate():
    config = BoardConfig().validate()
    assert config.cluster_chance == DEFAULT_CLUSTER_CHANCE
    assert config.thresholds == list(DEFAULT_THRESHOLDS)
    assert config.active_color_count <= config.palette_size
    assert config.tier_range == len(DEFAULT_THRESHOLDS) + 1


@pytest.mark.parametrize(
    "kwargs",
    [
        {"colors": []},
        {"active_color_count": 0},
        {"active_color_count": 7},
        {"rows": 0},
        {"cols": -2},
        {"thresholds": [4, 4]},
        {"thresholds": [7, 4]},
        {"thresholds": [2.5]},
        {"thresholds": [True]},
        {"cluster_chance": 1.5},
        {"cluster_chance": -0.1},
        {"rows": 2.5},
        {"cols": "4"},
        {"rows": True},
        {"active_color_count": 2.5},
        {"active_color_count": True},
        {"cluster_chance": "0.5"},
        {"cluster_chance": None},
    ],
)
def test_invalid_configurations_rejected(kwargs):
    with pytest.raises(InvalidConfiguration):
        BoardConfig(**kwargs).validate()


def test_invalid_configuration_is_value_error():
    with pytest.raises(ValueError):
        BoardConfig(colors=[]).validate()


def test_empty_thresholds_allowed():
    config = BoardConfig(thresholds=[]).validate()
    assert config.tier_range == 1


def test_from_dict_accepts_mixed_palette_entries():
    config = BoardConfig.from_dict(
        {
            "rows": 5,
            "cols": 4,
            "colors": ["red", {"name": "blue", "tiers": 3}],
            "thresholds": [2, 5],
            "active_color_count": 2,
            "cluster_chance": 0.25,
        }
    )
    assert (config.rows, config.cols) == (5, 4)
    assert [c.name for c in config.colors] == ["red", "blue"]
    assert config.colors[1].tier_count == 3
    assert config.color_name(1) == "blue"
    assert config.active_colors() == [0, 1]


def test_from_dict_wraps_malformed_data():
    with pytest.raises(InvalidConfiguration):
        BoardConfig.from_dict({"rows": "many"})
    with pytest.raises(InvalidConfiguration):
        BoardConfig.from_dict({"colors": [42]})
    with pytest.raises(InvalidConfiguration):
        BoardConfig.from_dict({"colors": [{"tiers": 2}]})


def test_load_board_config_reads_json(tmp_path):
    path = tmp_path / "theme.json"
    path.write_text(json.dumps({"colors": ["a", "b", "c"], "active_color_count": 3, "thresholds": [3]}))
    config = load_board_config(path)
    assert config.palette_size == 3
    assert config.thresholds == [3]


def test_short_tier_count_only_warns(caplog):
    with caplog.at_level(logging.WARNING):
        BoardConfig(colors=[ColorSet("a", tier_count=2)], active_color_count=1, thresholds=[3, 6]).validate()
    assert "declares 2 tiers" in caplog.text


def test_clamp_tier_falls_back_to_default():
    color = ColorSet("a", tier_count=2)
    assert color.clamp_tier(1) == 1
    assert color.clamp_tier(5) == 0
    assert ColorSet("b").clamp_tier(5) == 5


def test_palette_from_entries_rejects_unknown_types():
    with pytest.raises(TypeError):
        palette_from_entries([3.5])


def test_from_dict_rejects_non_mapping_roots():
    with pytest.raises(InvalidConfiguration):
        BoardConfig.from_dict([{"rows": 2}])
    with pytest.raises(InvalidConfiguration):
        BoardConfig.from_dict("rows")


@pytest.mark.parametrize("text", ['[{"rows": 2}]', "{rows: 3", '"just a string"'])
def test_load_board_config_rejects_bad_files(tmp_path, text):
    path = tmp_path / "broken.json"
    path.write_text(text)
    with pytest.raises(InvalidConfiguration):
        load_board_config(path)
