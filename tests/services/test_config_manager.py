import json
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

# Import the module to patch, not just the function
import vizsteps.infrastructure.config_manager as config_manager_module
from vizsteps.errors import ConfigurationError
from vizsteps.schemas import VizConfig, VizState


@pytest.fixture
def mock_config_dir():
    """Create a temporary directory for configs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        tmp_path = Path(tmpdir)

        config_data = {
            "name": "Validation Test",
            "type": "tree_map",
            "id": "country",
            "nesting": ["region", "country"],
            "depth": 1,
            "color": "growth",
            "time": {"key": "year", "solo": [2020]},
            "sources": {"data": "trade.csv", "attrs": "https://example.org/attrs.json"},
        }

        with open(tmp_path / "EXAMPLE_trade.json", "w") as f:
            json.dump(config_data, f)

        with open(tmp_path / "EXAMPLE_network.json", "w") as f:
            json.dump({**config_data, "type": "network", "id": "airport"}, f)

        with patch.object(config_manager_module, "CONFIG_DIR", tmp_path):
            yield tmp_path


def test_manager(mock_config_dir):
    configs = config_manager_module.list_configs()
    assert configs == ["EXAMPLE_network.json", "EXAMPLE_trade.json"]

    config = config_manager_module.load_config("EXAMPLE_trade.json")
    assert config.name == "Validation Test"
    assert config.time.solo == [2020]
    assert config.time.fixed is True

    config_manager_module.save_config(config, "test_save.json")

    assert (mock_config_dir / "test_save.json").exists()
    assert config_manager_module.load_config("test_save.json") == config


def test_load_missing_config(mock_config_dir):
    with pytest.raises(FileNotFoundError):
        config_manager_module.load_config("nope.json")


def test_list_configs_without_directory(tmp_path):
    with patch.object(config_manager_module, "CONFIG_DIR", tmp_path / "missing"):
        assert config_manager_module.list_configs() == []


def test_apply_config_raises_changed_flags(mock_config_dir):
    config = config_manager_module.load_config("EXAMPLE_trade.json")
    state = VizState()

    config_manager_module.apply_config(state, config)

    assert state.id.value == "country"
    assert state.id.nesting == ["region", "country"]
    assert state.time.value == "year"
    assert state.time.solo.value == [2020] and state.time.solo.changed
    assert state.color.changed
    assert state.data.url == str(mock_config_dir / "trade.csv")
    assert state.attrs.url == "https://example.org/attrs.json"
    assert not state.data.loaded
    assert state.edges.url is None


def test_apply_config_sets_locale():
    state = VizState()
    config_manager_module.apply_config(state, VizConfig(locale="es_ES"))
    assert state.locale.code == "es_ES"


def test_apply_config_rejects_unknown_locale():
    with pytest.raises(ConfigurationError) as excinfo:
        config_manager_module.apply_config(VizState(), VizConfig(locale="xx_XX"))
    assert excinfo.value.code == "CONFIG_ERROR"
