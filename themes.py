from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ThemeName(str, Enum):
    TERMINAL_YELLOW = "terminal-yellow"
    TERMINAL_CYAN = "terminal-cyan"
    NORD = "nord"
    CATPPUCCIN_MOCHA = "catppuccin-mocha"
    DRACULA = "dracula"
    GRUVBOX = "gruvbox"
    SOLARIZED_DARK = "solarized-dark"
    TOKYO_NIGHT = "tokyo-night"
    MONOKAI = "monokai"
    GALAXY = "galaxy"


class CursorStyle(str, Enum):
    BLOCK = "block"
    UNDERLINE = "underline"
    NONE = "none"


class CurrentWord(str, Enum):
    HIGHLIGHT = "highlight"
    BOLD = "bold"
    UNDERLINE = "underline"
    NONE = "none"


@dataclass(frozen=True)
class Palette:
    fg: str
    bg: str
    primary: str
    secondary: str
    error: str
    success: str
    supports_alpha: bool = True


# Colors are Rich color strings; "default" leaves the terminal's own color in place.
PALETTES: dict[ThemeName, Palette] = {
    ThemeName.TERMINAL_YELLOW: Palette(
        fg="default",
        bg="default",
        primary="yellow",
        secondary="yellow",
        error="red",
        success="green",
        supports_alpha=False,
    ),
    ThemeName.TERMINAL_CYAN: Palette(
        fg="white",
        bg="blue",
        primary="cyan",
        secondary="cyan",
        error="yellow",
        success="green",
        supports_alpha=False,
    ),
    ThemeName.NORD: Palette(
        fg="#D8DEE9",  # nord4
        bg="#2E3440",  # nord0
        primary="#88C0D0",  # nord8
        secondary="#B48EAD",  # nord15
        error="#BF616A",  # nord11
        success="#A3BE8C",  # nord14
    ),
    ThemeName.CATPPUCCIN_MOCHA: Palette(
        fg="#CDD6F4",  # text
        bg="#1E1E2E",  # base
        primary="#89B4FA",  # blue
        secondary="#CBA6F7",  # mauve
        error="#F38BA8",  # red
        success="#A6E3A1",  # green
    ),
    ThemeName.DRACULA: Palette(
        fg="#F8F8F2",
        bg="#282A36",
        primary="#BD93F9",  # purple
        secondary="#8BE9FD",  # cyan
        error="#FF5555",
        success="#50FA7B",
    ),
    ThemeName.GRUVBOX: Palette(
        fg="#EBDBB2",  # fg1
        bg="#282828",  # bg0
        primary="#FABD2F",  # yellow
        secondary="#8EC07C",  # aqua
        error="#FB4934",
        success="#B8BB26",
    ),
    ThemeName.SOLARIZED_DARK: Palette(
        fg="#839496",  # base0
        bg="#002B36",  # base03
        primary="#268BD2",  # blue
        secondary="#2AA198",  # cyan
        error="#DC322F",
        success="#859900",
    ),
    ThemeName.TOKYO_NIGHT: Palette(
        fg="#C0CAF5",
        bg="#1A1B26",
        primary="#7AA2F7",  # blue
        secondary="#FF9E64",  # orange
        error="#F7768E",
        success="#9ECE6A",
    ),
    ThemeName.MONOKAI: Palette(
        fg="#F8F8F2",
        bg="#272822",
        primary="#F92672",  # pink
        secondary="#A6E22E",  # green
        error="#F92672",
        success="#A6E22E",
    ),
    ThemeName.GALAXY: Palette(
        fg="#C0CAF5",
        bg="#0F0F1F",
        primary="#C45AFF",
        secondary="#A684E8",
        error="#FF4500",
        success="#00FA9A",
    ),
}


def get_palette(theme: ThemeName) -> Palette:
    return PALETTES[theme]


def next_theme(theme: ThemeName) -> ThemeName:
    """Return the theme after ``theme``, wrapping around to the first."""
    names = list(ThemeName)
    return names[(names.index(theme) + 1) % len(names)]
