from __future__ import annotations

import argparse
import logging
import os
import textwrap
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

from themes import CurrentWord, CursorStyle, ThemeName
from words import SourceName


logger = logging.getLogger(__name__)

APP_NAME = "tigertype"
ENV_PREFIX = "TIGERTYPE_"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    time: int = 30
    theme: ThemeName = ThemeName.DRACULA
    target_wpm: int = 0
    cursor: CursorStyle = CursorStyle.UNDERLINE
    current_word: CurrentWord = CurrentWord.HIGHLIGHT
    source: SourceName = SourceName.ENGLISH
    seed: int | None = None
    debug: bool = False


def default_config_path(environ: Mapping[str, str] | None = None) -> Path:
    environ = os.environ if environ is None else environ
    xdg = environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / APP_NAME / "config.toml"


def _to_int(value: Any, minimum: int) -> int:
    if isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    if isinstance(value, str):
        value = int(value.strip())
    if not isinstance(value, int):
        raise ValueError(f"expected an integer, got {value!r}")
    if value < minimum:
        raise ValueError(f"must be at least {minimum}, got {value}")
    return value


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("1", "true", "yes", "on"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"expected a boolean, got {value!r}")


def _to_seed(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return _to_int(value, minimum=-(2**63))


_COERCE = {
    "time": lambda v: _to_int(v, minimum=1),
    "theme": ThemeName,
    "target_wpm": lambda v: _to_int(v, minimum=0),
    "cursor": CursorStyle,
    "current_word": CurrentWord,
    "source": SourceName,
    "seed": _to_seed,
    "debug": _to_bool,
}


def build_parser(environ: Mapping[str, str] | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Terminal typing speed trainer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent(
            f"""
            Settings are read from {default_config_path(environ)} and from
            {ENV_PREFIX}* environment variables (e.g. {ENV_PREFIX}TIME=60);
            command-line flags take precedence over both.

            Keys: tab restarts, ctrl+t cycles the theme, esc quits.
            """
        ).strip(),
    )
    parser.add_argument("-t", "--time", type=int, metavar="SECS", help="Session length in seconds.")
    parser.add_argument(
        "--theme",
        choices=[t.value for t in ThemeName],
        metavar="THEME_NAME",
        help="Color theme: %(choices)s.",
    )
    parser.add_argument(
        "--target-wpm",
        type=int,
        help="Speed of the pace cursor in words per minute (0 disables it).",
    )
    parser.add_argument(
        "-c",
        "--cursor",
        choices=[c.value for c in CursorStyle],
        metavar="STYLE",
        help="Cursor style: %(choices)s.",
    )
    parser.add_argument(
        "--current-word",
        choices=[c.value for c in CurrentWord],
        metavar="FOCUS_STYLE",
        help="How the current word is emphasised: %(choices)s.",
    )
    parser.add_argument(
        "--source",
        choices=[s.value for s in SourceName],
        help="Where target words come from.",
    )
    parser.add_argument("--seed", type=int, help="Random seed for repeatable word order.")
    parser.add_argument("--config", type=Path, help="Path to a TOML config file.")
    parser.add_argument("--debug", action="store_true", default=None, help="Verbose logging.")
    return parser


def read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        logger.debug("No config file at %s", path)
        return {}
    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: invalid TOML: {exc}") from exc
    logger.info("Loaded config from %s", path)
    return {key.replace("-", "_"): value for key, value in data.items()}


def read_environment(environ: Mapping[str, str]) -> dict[str, Any]:
    values = {}
    for field in fields(Settings):
        key = ENV_PREFIX + field.name.upper()
        if key in environ:
            values[field.name] = environ[key]
    return values


def resolve_settings(layers: list[tuple[str, Mapping[str, Any]]]) -> Settings:
    """Merge ``(origin, values)`` layers, later layers overriding earlier ones."""
    known = {f.name for f in fields(Settings)}
    merged: dict[str, Any] = {}
    for origin, values in layers:
        for name, raw in values.items():
            if name not in known:
                raise ConfigError(f"{origin}: unknown setting '{name}'")
            try:
                merged[name] = _COERCE[name](raw)
            except ValueError as exc:
                raise ConfigError(f"{origin}: invalid value for '{name}': {exc}") from exc
    return Settings(**merged)


def load_settings(
    argv: list[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    environ = os.environ if environ is None else environ
    args = build_parser(environ).parse_args(argv)

    if args.config is not None and not args.config.exists():
        raise ConfigError(f"config file not found: {args.config}")
    config_path = args.config or default_config_path(environ)
    cli_values = {
        name: value
        for name, value in vars(args).items()
        if name != "config" and value is not None
    }

    settings = resolve_settings(
        [
            (str(config_path), read_config_file(config_path)),
            ("environment", read_environment(environ)),
            ("command line", cli_values),
        ]
    )
    logger.info("Resolved settings: %s", settings)
    return settings
