"""Configuration loading for signgrid."""
import math
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

SOURCE_KINDS = ("mock", "json")


class ConfigError(ValueError):
    pass


@dataclass(slots=True)
class ServerConfig:
    """Dash server binding."""

    host: str = "127.0.0.1"
    port: int = 8050
    debug: bool = False


@dataclass(slots=True)
class RenderConfig:
    device_pixel_ratio: float = 1.0
    dark: bool = True


@dataclass(slots=True)
class SourceConfig:
    """Where validator status rows come from and how often they are re-read."""

    kind: str = "mock"
    path: Path | None = None
    refresh_ms: int = 5000
    mock_validators: int = 8
    mock_blocks: int = 120


@dataclass(slots=True)
class Config:
    server: ServerConfig = field(default_factory=ServerConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    source: SourceConfig = field(default_factory=SourceConfig)
    log_level: str = "INFO"


def _load_toml(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        return {}
    with path.open("rb") as fh:
        try:
            return tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"{path}: {exc}") from exc


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, Mapping):
        raise ConfigError(f"[{name}] must be a table")
    return section


def _typed(section: Mapping[str, Any], name: str, key: str, default: Any, kinds: tuple[type, ...], expected: str) -> Any:
    value = section.get(key, default)
    # bool is an int subclass, TOML keeps them apart
    if not isinstance(value, kinds) or (isinstance(value, bool) and bool not in kinds):
        field_name = f"{name}.{key}" if name else key
        raise ConfigError(f"{field_name} must be {expected}, got {value!r}")
    return value


def _int(section: Mapping[str, Any], name: str, key: str, default: int) -> int:
    return _typed(section, name, key, default, (int,), "an integer")


def _float(section: Mapping[str, Any], name: str, key: str, default: float) -> float:
    return float(_typed(section, name, key, default, (int, float), "a number"))


def _bool(section: Mapping[str, Any], name: str, key: str, default: bool) -> bool:
    return _typed(section, name, key, default, (bool,), "true or false")


def _str(section: Mapping[str, Any], name: str, key: str, default: str) -> str:
    return _typed(section, name, key, default, (str,), "a string")


def load_config(path: str | Path | None = None) -> Config:
    """Load configuration from ``path``, falling back to defaults.

    A missing file yields the default configuration. Invalid values raise
    ``ConfigError`` naming the offending field.
    """
    data: Mapping[str, Any] = _load_toml(Path(path)) if path is not None else {}
    config = Config()

    server = _section(data, "server")
    config.server.host = _str(server, "server", "host", config.server.host)
    config.server.port = _int(server, "server", "port", config.server.port)
    config.server.debug = _bool(server, "server", "debug", config.server.debug)

    render = _section(data, "render")
    config.render.device_pixel_ratio = _float(
        render, "render", "device_pixel_ratio", config.render.device_pixel_ratio
    )
    config.render.dark = _bool(render, "render", "dark", config.render.dark)

    source = _section(data, "source")
    config.source.kind = _str(source, "source", "kind", config.source.kind)
    if "path" in source:
        config.source.path = Path(_str(source, "source", "path", ""))
    config.source.refresh_ms = _int(source, "source", "refresh_ms", config.source.refresh_ms)
    config.source.mock_validators = _int(source, "source", "mock_validators", config.source.mock_validators)
    config.source.mock_blocks = _int(source, "source", "mock_blocks", config.source.mock_blocks)

    config.log_level = _str(data, "", "log_level", config.log_level).upper()

    validate_config(config)
    return config


def validate_config(config: Config) -> None:
    if not 1 <= config.server.port <= 65535:
        raise ConfigError(f"server.port must be within 1..65535, got {config.server.port}")
    if not math.isfinite(config.render.device_pixel_ratio) or config.render.device_pixel_ratio <= 0:
        raise ConfigError("render.device_pixel_ratio must be a positive finite number")
    if config.source.refresh_ms <= 0:
        raise ConfigError("source.refresh_ms must be positive")
    if config.source.kind not in SOURCE_KINDS:
        raise ConfigError(f"source.kind must be one of {', '.join(SOURCE_KINDS)}")
    if config.source.kind == "json" and config.source.path is None:
        raise ConfigError("source.path is required when source.kind is 'json'")
    if config.source.mock_validators < 0 or config.source.mock_blocks < 0:
        raise ConfigError("source.mock_validators and source.mock_blocks must not be negative")
