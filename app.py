from __future__ import annotations

import logging
import sys
import time
from typing import Callable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.events import Key
from textual.logging import TextualHandler
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from config import ConfigError, Settings, load_settings
from metrics import Metrics, compute_metrics
from session import Cursor, Session, SessionSnapshot, new_session
from themes import CurrentWord, CursorStyle, Palette, get_palette, next_theme
from words import WordSource, load_word_source


logger = logging.getLogger(__name__)

FRAME_INTERVAL_S = 1 / 30
WORDS_PER_PAGE = 30
CLEAR_WORD_KEYS = ("ctrl+w", "ctrl+backspace", "alt+backspace")


def configure_logging(debug: bool = False) -> None:
    """Route log records to the Textual devtools console."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[TextualHandler()],
    )


def render_words(
    snapshot: SessionSnapshot,
    source: WordSource,
    palette: Palette,
    cursor_style: CursorStyle = CursorStyle.UNDERLINE,
    current_word: CurrentWord = CurrentWord.HIGHLIGHT,
    pace: Cursor | None = None,
) -> Text:
    """Render two pages of words around the cursor as styled text."""
    word_index, char_index = snapshot.cursor
    first = (word_index // WORDS_PER_PAGE) * WORDS_PER_PAGE
    cursor_mark = {CursorStyle.BLOCK: "reverse", CursorStyle.UNDERLINE: "underline"}.get(cursor_style)
    focus_mark = {
        CurrentWord.HIGHLIGHT: palette.primary,
        CurrentWord.BOLD: "bold",
        CurrentWord.UNDERLINE: "underline",
    }.get(current_word)

    text = Text()
    for i in range(first, first + 2 * WORDS_PER_PAGE):
        target = source.word_at(i)
        typed = snapshot.typed_history[i] if i < len(snapshot.typed_history) else ""
        is_current = i == word_index

        # Target letters, then any extra letters typed past the end, then the separator.
        cells: list[tuple[str, str]] = []
        for j, ch in enumerate(target):
            if j >= len(typed):
                cells.append((ch, f"{palette.fg} dim"))
            elif typed[j] == ch:
                cells.append((ch, palette.fg))
            else:
                cells.append((ch, palette.error))
        for ch in typed[len(target):]:
            cells.append((ch, f"{palette.error} strike"))
        cells.append((" ", ""))
        pace_cell = None
        if pace is not None and pace.word_index == i:
            pace_cell = pace.char_index if pace.char_index < len(target) else len(cells) - 1

        for j, (ch, style) in enumerate(cells):
            is_separator = j == len(cells) - 1
            if is_current and focus_mark and not is_separator:
                if current_word is CurrentWord.HIGHLIGHT and j >= len(typed):
                    style = palette.primary
                elif current_word is not CurrentWord.HIGHLIGHT:
                    style = f"{style} {focus_mark}"
            if pace_cell is not None and j == pace_cell:
                style = f"{style} on {palette.secondary}"
            if is_current and cursor_mark and j == char_index:
                style = f"{style} {cursor_mark}"
            text.append(ch, style=style.strip() or None)
    return text


def render_status(snapshot: SessionSnapshot, metrics: Metrics, remaining: float) -> str:
    prompt = "type to start" if snapshot.start_time is None else f"{remaining:.0f}s"
    return (
        f"{prompt}   WPM: {metrics.wpm:.1f}   "
        f"Accuracy: {metrics.accuracy_pct:.1f}%   Streak: {snapshot.current_char_streak}"
    )


class GameScreen(Screen):
    def __init__(self, session: Session) -> None:
        super().__init__()
        self.session = session
        self._done = False

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="game"):
            yield Static("", id="status")
            yield Static("", id="words")
        yield Footer()

    def on_mount(self) -> None:
        self._frame_timer = self.set_interval(FRAME_INTERVAL_S, self.refresh_frame)
        self.refresh_frame()

    def on_key(self, event: Key) -> None:
        now = self.app.session_clock()
        if event.key == "backspace":
            self.session.submit_backspace(now)
        elif event.key in CLEAR_WORD_KEYS:
            self.session.clear_word(now)
        elif event.is_printable and event.character:
            self.session.submit_character(event.character, now)
        else:
            return
        event.stop()
        self.refresh_frame()

    def refresh_frame(self) -> None:
        if self._done:
            return
        now = self.app.session_clock()
        session = self.session
        session.tick(now)
        snapshot = session.snapshot()
        metrics = compute_metrics(snapshot, session.elapsed(now))
        if session.is_finished:
            self._done = True
            self._frame_timer.stop()
            self.app.show_results(metrics)
            return

        settings = self.app.settings
        self.query_one("#status", Static).update(
            render_status(snapshot, metrics, session.remaining(now))
        )
        self.query_one("#words", Static).update(
            render_words(
                snapshot,
                session.source,
                self.app.palette,
                cursor_style=settings.cursor,
                current_word=settings.current_word,
                pace=session.pace_position(now),
            )
        )


class ResultsScreen(Screen):
    BINDINGS = [("enter", "app.restart", "Again")]

    def __init__(self, metrics: Metrics) -> None:
        super().__init__()
        self.metrics = metrics

    def compose(self) -> ComposeResult:
        m = self.metrics
        yield Header()
        with Vertical(id="results"):
            yield Static("Results", id="results-title")
            if m.perfect:
                yield Static("Perfect!", id="results-perfect")
            yield Static(f"WPM: {m.wpm:.1f}", id="results-wpm")
            yield Static(f"Accuracy: {m.accuracy_pct:.1f}%", id="results-accuracy")
            yield Static(f"Correct words: {m.correct_words} ({m.correct_wpm:.1f}/min)")
            yield Static(f"Characters: {m.character_matches}/{m.characters_typed} ({m.cpm:.0f}/min)")
            yield Static(f"Best streak: {m.best_streak}")
        yield Footer()

    def on_mount(self) -> None:
        if self.metrics.perfect:
            self.query_one("#results-perfect", Static).styles.color = self.app.palette.success


class TigerTypeApp(App):
    CSS = """
    #game, #results {
        padding: 1 8;
    }

    #status {
        height: auto;
        margin-bottom: 1;
    }

    #words {
        height: auto;
    }

    #results-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #results-perfect {
        text-style: bold;
    }
    """

    TITLE = "tigertype"
    BINDINGS = [
        Binding("escape", "quit", "Quit", priority=True),
        Binding("tab", "restart", "Restart", priority=True),
        Binding("ctrl+t", "next_theme", "Theme", priority=True),
    ]

    def __init__(
        self,
        settings: Settings,
        source_factory: Callable[[], WordSource] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__()
        self.settings = settings
        self.theme_name = settings.theme
        self.session_clock = clock
        self._source_factory = source_factory or (
            lambda: load_word_source(settings.source, settings.seed)
        )
        self.session = self._new_session()

    @property
    def palette(self) -> Palette:
        return get_palette(self.theme_name)

    def _new_session(self) -> Session:
        return new_session(self.settings, self._source_factory(), clock=self.session_clock)

    def on_mount(self) -> None:
        self.push_screen(GameScreen(self.session))
        self.call_after_refresh(self._apply_palette)

    def _apply_palette(self) -> None:
        palette = self.palette
        self.sub_title = self.theme_name.value
        # "default" clears the inline style so the terminal colour shows through.
        self.screen.styles.background = None if palette.bg == "default" else palette.bg
        self.screen.styles.color = None if palette.fg == "default" else palette.fg

    def show_results(self, metrics: Metrics) -> None:
        logger.info(
            "Results: %.1f wpm, %.1f%% accuracy, perfect=%s",
            metrics.wpm,
            metrics.accuracy_pct,
            metrics.perfect,
        )
        self.switch_screen(ResultsScreen(metrics))
        self.call_after_refresh(self._apply_palette)

    def action_restart(self) -> None:
        logger.debug("Restarting session")
        self.session = self._new_session()
        self.switch_screen(GameScreen(self.session))
        self.call_after_refresh(self._apply_palette)

    def action_next_theme(self) -> None:
        self.theme_name = next_theme(self.theme_name)
        logger.debug("Theme changed to %s", self.theme_name.value)
        self._apply_palette()
        if isinstance(self.screen, GameScreen):
            self.screen.refresh_frame()


def main(argv: list[str] | None = None) -> int:
    try:
        settings = load_settings(argv)
    except ConfigError as exc:
        print(f"tigertype: {exc}", file=sys.stderr)
        return 2

    configure_logging(settings.debug)
    logger.info("Starting with %s", settings)
    TigerTypeApp(settings).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
