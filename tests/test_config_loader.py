"""
Tests for YAML configuration loading.
"""

import pytest

from shotsub.config_loader import ConfigLoader, DEFAULT_CONFIG
from shotsub.exceptions import ConfigurationError


@pytest.fixture
def loader():
    return ConfigLoader()


class TestLoadConfig:

    def test_defaults_without_file(self, loader):
        config = loader.load_config(None)
        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG

    def test_file_overrides_defaults(self, loader, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("max_workers: 4\nlog_file: run.log\nimage_extensions: [png]\n", encoding="utf-8")
        config = loader.load_config(str(path))
        assert config["max_workers"] == 4
        assert config["log_file"] == "run.log"
        assert config["image_extensions"] == ["png"]
        assert config["upscale_min_height"] == DEFAULT_CONFIG["upscale_min_height"]

    def test_unknown_keys_are_ignored(self, loader, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("output_format: vtt\n", encoding="utf-8")
        assert "output_format" not in loader.load_config(str(path))

    def test_empty_file(self, loader, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert loader.load_config(str(path)) == DEFAULT_CONFIG

    def test_missing_file(self, loader, tmp_path):
        with pytest.raises(FileNotFoundError):
            loader.load_config(str(tmp_path / "missing.yaml"))

    def test_directory_is_rejected(self, loader, tmp_path):
        with pytest.raises(ConfigurationError):
            loader.load_config(str(tmp_path))

    def test_invalid_yaml(self, loader, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("max_workers: [1, 2\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            loader.load_config(str(path))

    def test_root_must_be_mapping(self, loader, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            loader.load_config(str(path))

    @pytest.mark.parametrize("value", ["0", "-2", "many"])
    def test_invalid_max_workers(self, loader, tmp_path, value):
        path = tmp_path / "config.yaml"
        path.write_text(f"max_workers: {value}\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            loader.load_config(str(path))

    @pytest.mark.parametrize("value", ["'64'", "-1", "1.5", "true", "null"])
    def test_invalid_upscale_min_height(self, loader, tmp_path, value):
        path = tmp_path / "config.yaml"
        path.write_text(f"upscale_min_height: {value}\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="upscale_min_height"):
            loader.load_config(str(path))

    def test_zero_upscale_min_height_is_allowed(self, loader, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("upscale_min_height: 0\n", encoding="utf-8")
        assert loader.load_config(str(path))["upscale_min_height"] == 0

    @pytest.mark.parametrize("value", ["png", "null", "[]", "[png, 3]", "{png: 1}"])
    def test_invalid_image_extensions(self, loader, tmp_path, value):
        path = tmp_path / "config.yaml"
        path.write_text(f"image_extensions: {value}\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="image_extensions"):
            loader.load_config(str(path))
