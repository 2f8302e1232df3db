"""Tests for the config module."""

import json
from pathlib import Path

import pytest

from render_proxy.config import (
    DEFAULT_HEIGHT,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_WIDTH,
    Config,
    ConfigError,
    load_config,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host environment variables out of config tests."""
    for name in (
        "RENDER_PROXY_CONFIG",
        "RENDER_PROXY_WIDTH",
        "RENDER_PROXY_HEIGHT",
        "RENDER_PROXY_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


def _write(tmp_path: Path, data: object) -> Path:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self) -> None:
        """Test defaults apply with no file or environment."""
        config = load_config()
        assert config == Config()
        assert (config.width, config.height, config.timeout) == (
            DEFAULT_WIDTH,
            DEFAULT_HEIGHT,
            DEFAULT_TIMEOUT_MS,
        )

    def test_file_overrides_defaults(self, tmp_path: Path) -> None:
        """Test known keys are read from a JSON file."""
        path = _write(
            tmp_path,
            {"width": 1280, "timeout": 20000, "browser_args": ["--no-sandbox"], "port": 3000},
        )

        config = load_config(path)

        assert config.width == 1280
        assert config.height == DEFAULT_HEIGHT
        assert config.timeout == 20000
        assert config.browser_args == ("--no-sandbox",)

    def test_file_from_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test RENDER_PROXY_CONFIG names the file."""
        monkeypatch.setenv("RENDER_PROXY_CONFIG", str(_write(tmp_path, {"height": 720})))

        assert load_config().height == 720

    def test_environment_overrides_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test environment variables win over the file."""
        path = _write(tmp_path, {"width": 1280})
        monkeypatch.setenv("RENDER_PROXY_WIDTH", "375")

        assert load_config(path).width == 375

    def test_non_integer_environment_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RENDER_PROXY_TIMEOUT", "soon")

        with pytest.raises(ConfigError) as exc_info:
            load_config()
        assert exc_info.value.source == "RENDER_PROXY_TIMEOUT"

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigError, match="invalid JSON"):
            load_config(path)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="cannot read"):
            load_config(tmp_path / "missing.json")

    def test_non_object_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="JSON object"):
            load_config(_write(tmp_path, [1, 2, 3]))

    def test_invalid_dimension_raises(self, tmp_path: Path) -> None:
        """Test out-of-range dimensions are rejected."""
        with pytest.raises(ConfigError) as exc_info:
            load_config(_write(tmp_path, {"width": 0}))
        assert exc_info.value.source == "width"

    def test_invalid_timeout_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="positive"):
            load_config(_write(tmp_path, {"timeout": -5}))

    def test_string_browser_args_raises(self, tmp_path: Path) -> None:
        """Test a bare string is not split into single-character switches."""
        with pytest.raises(ConfigError) as exc_info:
            load_config(_write(tmp_path, {"browser_args": "--no-sandbox"}))
        assert exc_info.value.source == "browser_args"

    def test_non_string_browser_arg_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(_write(tmp_path, {"browser_args": ["--no-sandbox", 3]}))
        assert exc_info.value.source == "browser_args"

    def test_string_headless_raises(self, tmp_path: Path) -> None:
        """Test "false" as a string is rejected instead of read as true."""
        with pytest.raises(ConfigError) as exc_info:
            load_config(_write(tmp_path, {"headless": "false"}))
        assert exc_info.value.source == "headless"

    def test_headless_bool_accepted(self, tmp_path: Path) -> None:
        assert load_config(_write(tmp_path, {"headless": False})).headless is False
