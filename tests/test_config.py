from __future__ import annotations

from pathlib import Path

import pytest

from signgrid.config import Config, ConfigError, load_config


def _write_config(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "config.toml"
    path.write_text(content, encoding="utf-8")
    return path


def test_defaults_without_file(tmp_path: Path) -> None:
    assert load_config() == Config()
    assert load_config(tmp_path / "missing.toml") == Config()


def test_load_config_overrides(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
log_level = "debug"

[server]
port = 8100

[render]
device_pixel_ratio = 2
dark = false

[source]
kind = "json"
path = "state.json"
refresh_ms = 1500
""".strip(),
    )

    config = load_config(path)
    assert config.log_level == "DEBUG"
    assert config.server.port == 8100
    assert config.server.host == "127.0.0.1"
    assert config.render.device_pixel_ratio == pytest.approx(2.0)
    assert config.render.dark is False
    assert config.source.kind == "json"
    assert config.source.path == Path("state.json")
    assert config.source.refresh_ms == 1500


@pytest.mark.parametrize(
    ("content", "field"),
    [
        ("[server]\nport = 0", "port"),
        ("[render]\ndevice_pixel_ratio = 0", "device_pixel_ratio"),
        ("[source]\nrefresh_ms = -5", "refresh_ms"),
        ('[source]\nkind = "rpc"', "kind"),
        ('[source]\nkind = "json"', "path"),
        ("server = 3", "server"),
        ('[server]\nport = "abc"', "server.port"),
        ("[server]\nport = 80.5", "server.port"),
        ("[server]\ndebug = \"false\"", "server.debug"),
        ("[render]\ndark = 0", "render.dark"),
        ("[render]\ndevice_pixel_ratio = \"2\"", "render.device_pixel_ratio"),
        ("[render]\ndevice_pixel_ratio = inf", "render.device_pixel_ratio"),
        ("[source]\nrefresh_ms = [1]", "source.refresh_ms"),
        ("[source]\nmock_blocks = true", "source.mock_blocks"),
        ("[source]\npath = 3", "source.path"),
        ("log_level = 10", "log_level"),
    ],
)
def test_load_config_rejects_invalid_values(tmp_path: Path, content: str, field: str) -> None:
    with pytest.raises(ConfigError, match=field):
        load_config(_write_config(tmp_path, content))


def test_load_config_reports_toml_errors(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(_write_config(tmp_path, "[server\nport = 1"))
