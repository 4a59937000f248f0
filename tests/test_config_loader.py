import json
from pathlib import Path

import pytest

from config.config_loader import DEFAULT_CONFIG, load_config, save_config, validate_config


def write_config(tmp_path, **overrides):
    config = {"output_directory": str(tmp_path / "logs")}
    config.update(overrides)
    path = tmp_path / "runtime_config.json"
    path.write_text(json.dumps(config), encoding="utf-8")
    return str(path)


class TestLoadConfig:

    def test_defaults_merged(self, tmp_path):
        config = load_config(write_config(tmp_path, window=7))
        assert config["window"] == 7
        assert config["codec"] == DEFAULT_CONFIG["codec"]
        assert (tmp_path / "logs").is_dir()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "absent.json"))

    def test_wrong_type(self, tmp_path):
        with pytest.raises(TypeError):
            load_config(write_config(tmp_path, window="15"))

    def test_bool_is_not_an_int(self, tmp_path):
        with pytest.raises(TypeError):
            load_config(write_config(tmp_path, max_steps=True))

    @pytest.mark.parametrize("key,value", [
        ("codec", "morse"),
        ("window", 0),
        ("step_delay_ms", -1),
        ("max_steps", -5),
        ("decimal_input", "sometimes"),
        ("blank_glyph", "__"),
    ])
    def test_bad_values(self, tmp_path, key, value):
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, **{key: value}))

    def test_verbose_summary(self, tmp_path, capsys):
        load_config(write_config(tmp_path), verbose=True)
        assert "Loaded config" in capsys.readouterr().out

    def test_shipped_config_is_valid(self):
        path = Path(__file__).resolve().parent.parent / "config" / "runtime_config.json"
        with open(path, "r", encoding="utf-8") as f:
            validate_config(json.load(f))


class TestSaveConfig:

    def test_round_trip(self, tmp_path):
        path = tmp_path / "saved.json"
        config = dict(DEFAULT_CONFIG, output_directory=str(tmp_path / "out"), codec="tquad")
        save_config(config, str(path))
        assert load_config(str(path))["codec"] == "tquad"

    def test_missing_key(self, tmp_path):
        config = dict(DEFAULT_CONFIG)
        del config["window"]
        with pytest.raises(ValueError):
            save_config(config, str(tmp_path / "saved.json"))
