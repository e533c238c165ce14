import argparse
import logging
import pathlib
import sys

from signgrid.config import Config, ConfigError, load_config
from signgrid.source.source_base import SourceError, StatusSource
from signgrid.source.source_json import JsonStateSource
from signgrid.source.source_mock import MockSource
from signgrid.visualizer import DashApp
from signgrid.visualizer.app import render_page
from signgrid.visualizer.theme import display_state

logger = logging.getLogger("signgrid")


def build_source(config: Config) -> StatusSource:
    if config.source.kind == "json":
        if config.source.path is None:
            raise ConfigError("source.path is required when source.kind is 'json'")
        return JsonStateSource(config.source.path)
    return MockSource(
        n_validators=config.source.mock_validators,
        n_blocks=config.source.mock_blocks,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="signgrid", description="Validator signing-status grid")
    parser.add_argument("--config", type=pathlib.Path, default=None, help="TOML configuration file")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="run the Dash dashboard")
    group = serve.add_mutually_exclusive_group()
    group.add_argument("--json", type=pathlib.Path, help="state file with validator status rows")
    group.add_argument("--mock", action="store_true", help="serve generated data")

    render = sub.add_parser("render", help="write grid.png and legend.png")
    render.add_argument("--json", type=pathlib.Path, required=True, help="state file with validator status rows")
    render.add_argument("--out", type=pathlib.Path, default=pathlib.Path("."), help="output directory")
    render.add_argument("--dpr", type=float, default=None, help="device pixel ratio")
    render.add_argument("--light", action="store_true", help="render with the light theme")
    return parser.parse_args(argv)


def render(args: argparse.Namespace, config: Config) -> None:
    multi = JsonStateSource(args.json).fetch()
    ratio = args.dpr if args.dpr is not None else config.render.device_pixel_ratio
    state = display_state(not args.light and config.render.dark)
    rendered = render_page(multi, state, ratio)

    args.out.mkdir(parents=True, exist_ok=True)
    for surface, filename in ((rendered.grid, "grid.png"), (rendered.legend, "legend.png")):
        (args.out / filename).write_bytes(surface.to_png())
        logger.info("wrote %s", args.out / filename)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(args.config)
    except ConfigError as exc:
        print(f"config error: {exc}", file=sys.stderr)
        return 2
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "render":
        try:
            render(args, config)
        except (SourceError, OSError) as exc:
            logger.error("render failed: %s", exc)
            return 1
        return 0

    if args.json is not None:
        config.source.kind = "json"
        config.source.path = args.json
    elif args.mock:
        config.source.kind = "mock"
    try:
        source = build_source(config)
    except ConfigError as exc:
        print(f"config error: {exc}", file=sys.stderr)
        return 2
    app = DashApp(source, config)
    app.run(host=config.server.host, port=config.server.port, debug=config.server.debug)
    return 0
