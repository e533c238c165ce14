from __future__ import annotations

import json
from pathlib import Path

import pytest
from PIL import Image

from signgrid.cli import build_source, main, parse_args
from signgrid.config import Config, ConfigError
from signgrid.source.source_json import JsonStateSource
from signgrid.source.source_mock import MockSource


def _state(tmp_path: Path) -> Path:
    path = tmp_path / "state.json"
    path.write_text(
        json.dumps({"Status": [{"name": "val-A", "blocks": [4, 3, 3, 0, 9]}, {"name": "val-B", "blocks": [3]}]}),
        encoding="utf-8",
    )
    return path


def test_render_writes_grid_and_legend(tmp_path: Path) -> None:
    out = tmp_path / "out"
    assert main(["render", "--json", str(_state(tmp_path)), "--out", str(out), "--dpr", "2"]) == 0

    with Image.open(out / "grid.png") as grid:
        assert grid.size == (2 * (120 + 9 * 5 + 5), 2 * (round(1.2 * 24 * 2) + 30))
    with Image.open(out / "legend.png") as legend:
        assert legend.size[1] == 2 * 29


def test_render_reports_bad_state_file(tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text("[]", encoding="utf-8")
    assert main(["render", "--json", str(bad), "--out", str(tmp_path)]) == 1


def test_render_reports_undecodable_state_file(tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_bytes(b"\xff\xfe")
    assert main(["render", "--json", str(bad), "--out", str(tmp_path)]) == 1


def test_config_errors_exit_with_2(tmp_path: Path) -> None:
    config = tmp_path / "config.toml"
    config.write_text("[server]\nport = 70000\n", encoding="utf-8")
    assert main(["--config", str(config), "render", "--json", str(_state(tmp_path))]) == 2


def test_mistyped_config_values_exit_with_2(tmp_path: Path) -> None:
    config = tmp_path / "config.toml"
    config.write_text('[server]\nport = "abc"\n', encoding="utf-8")
    assert main(["--config", str(config), "render", "--json", str(_state(tmp_path))]) == 2


def test_command_is_required() -> None:
    with pytest.raises(SystemExit):
        parse_args([])


def test_build_source_follows_config(tmp_path: Path) -> None:
    config = Config()
    assert isinstance(build_source(config), MockSource)
    config.source.kind = "json"
    config.source.path = _state(tmp_path)
    assert isinstance(build_source(config), JsonStateSource)


def test_build_source_requires_json_path() -> None:
    config = Config()
    config.source.kind = "json"
    with pytest.raises(ConfigError, match="source.path"):
        build_source(config)
