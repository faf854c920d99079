"""Engine configuration from command-line arguments or a web query string."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional, Sequence

DEFAULT_LOG_LEVEL = (
    "info,wgpu=error,bevy_fluent=warn,symphonia_core=warn,"
    "symphonia_format_ogg=warn,symphonia_bundle_mp3=warn"
)
DEFAULT_GAME_ASSET = "default.game.yaml"


def parse_url_query_string(query: str, search_key: str) -> Optional[str]:
    """Return the value of ``search_key`` in a ``?key=value&...`` query string."""
    if not query.startswith("?"):
        return None
    for pair in query[1:].split("&"):
        key, _, value = pair.partition("=")
        if key == search_key:
            return value
    return None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="Punchy", description="A 2.5D side-scroller beatemup."
    )
    parser.add_argument(
        "-R", "--hot-reload", action="store_true", help="Hot reload assets"
    )
    parser.add_argument(
        "-a", "--asset-dir", default=None, help="The directory to load assets from"
    )
    parser.add_argument(
        "game_asset",
        nargs="?",
        default=DEFAULT_GAME_ASSET,
        help="The .game.yaml asset to load at startup",
    )
    parser.add_argument(
        "-s",
        "--auto-start",
        action="store_true",
        help="Skip the menu and automatically start the game",
    )
    parser.add_argument(
        "-l",
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        help="Set the log level; may list module=level items separated by commas",
    )
    return parser


@dataclass
class EngineConfig:
    """Settings that control how the engine starts."""

    hot_reload: bool = False
    asset_dir: Optional[str] = None
    game_asset: str = DEFAULT_GAME_ASSET
    auto_start: bool = False
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_args(cls, argv: Optional[Sequence[str]] = None) -> "EngineConfig":
        """Parse command-line arguments; exits with usage on invalid input."""
        ns = _build_parser().parse_args(argv)
        return cls(
            hot_reload=ns.hot_reload,
            asset_dir=ns.asset_dir,
            game_asset=ns.game_asset,
            auto_start=ns.auto_start,
            log_level=ns.log_level,
        )

    @classmethod
    def from_web_params(cls, query: Optional[str]) -> "EngineConfig":
        """Build a configuration from a page's ``?key=value`` query string."""
        config = cls()
        if query is None:
            return config

        asset_dir = parse_url_query_string(query, "asset_url")
        if asset_dir is not None:
            config.asset_dir = asset_dir

        game_asset = parse_url_query_string(query, "game_asset")
        if game_asset is not None:
            config.game_asset = game_asset

        auto_start = parse_url_query_string(query, "auto_start")
        if auto_start in ("true", "false"):
            config.auto_start = auto_start == "true"

        log_level = parse_url_query_string(query, "log_level")
        if log_level is not None:
            config.log_level = log_level

        return config