from __future__ import annotations

import logging
from pathlib import Path

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container, VerticalScroll
from textual.events import Resize
from textual.reactive import reactive
from textual.timer import Timer
from textual.widget import Widget
from textual.widgets import Footer, Header, Markdown, Static
from textual.worker import Worker, WorkerState

from portfolio_site.animation.canvas import CELL_HEIGHT, CELL_WIDTH, rasterize
from portfolio_site.animation.engine import AnimationEngine
from portfolio_site.models.content import DEFAULT_LOCALE, SUPPORTED_LOCALES, Locale
from portfolio_site.services.content_store import ContentStore
from portfolio_site.services.cv_export import CvVariant, export_cv, get_export_dir
from portfolio_site.tui_rendering import (
    ALL_CATEGORIES,
    project_categories,
    render_loading,
    render_page,
)

logger = logging.getLogger(__name__)

FRAME_RATE = 60
# Content rows of #walker: its CSS height minus the bottom border.
WALKER_ROWS = 18
_CONTENT_WORKER = "content-load"


class WalkerCanvas(Widget):
    """Background strip where the skeleton walks.

    The engine ticks from a 60 fps interval timer started on mount and
    stopped on unmount. Terminal cells are mapped to a pixel viewport so the
    engine keeps working in pixels.
    """

    dark_mode: reactive[bool] = reactive(False)

    def __init__(self, *, dark_mode: bool = False, id: str | None = None) -> None:
        super().__init__(id=id)
        self.engine = AnimationEngine(0, 0, dark_mode=dark_mode)
        self._timer: Timer | None = None
        self._frame = Text()
        self.set_reactive(WalkerCanvas.dark_mode, dark_mode)

    def on_mount(self) -> None:
        self._resize_engine()
        self._timer = self.set_interval(1 / FRAME_RATE, self._advance_frame)

    def on_unmount(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

    def on_resize(self, event: Resize) -> None:
        self._resize_engine()

    def watch_dark_mode(self, dark_mode: bool) -> None:
        self.engine.set_dark_mode(dark_mode)

    def _resize_engine(self) -> None:
        self.engine.resize(self.size.width * CELL_WIDTH, self.size.height * CELL_HEIGHT)

    def _advance_frame(self) -> None:
        commands = self.engine.tick()
        self._frame = rasterize(commands, self.size.width, self.size.height)
        self.refresh()

    def render(self) -> Text:
        return self._frame


class PortfolioApp(App[None]):
    """Terminal rendition of the portfolio site."""

    TITLE = "Portfolio"

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("l", "toggle_locale", "Language"),
        ("t", "toggle_theme", "Theme"),
        ("f", "cycle_filter", "Filter projects"),
        ("s", "export_short", "CV (short)"),
        ("x", "export_long", "CV (long)"),
    ]

    CSS = """
Screen {
    layout: vertical;
    background: $background;
}

#walker {
    height: 19;
    border-bottom: heavy $primary;
}

#main {
    height: 1fr;
    background: $surface;
    padding: 0 2;
}

#statusbar {
    height: auto;
    padding: 0 1;
    background: $panel;
    color: $text;
}
"""

    def __init__(
        self,
        store: ContentStore | None = None,
        *,
        export_dir: Path | None = None,
        dark_mode: bool = False,
    ) -> None:
        super().__init__()
        self._store = store or ContentStore()
        self._export_dir = export_dir
        self._locale: Locale = DEFAULT_LOCALE
        self._dark_mode = dark_mode
        self._category = ALL_CATEGORIES

    def compose(self) -> ComposeResult:
        yield Header()
        yield WalkerCanvas(dark_mode=self._dark_mode, id="walker")
        yield Container(
            VerticalScroll(Markdown(render_loading(), id="content")),
            id="main",
        )
        yield Static(self._status_text(), id="statusbar")
        yield Footer()

    def on_mount(self) -> None:
        self._apply_theme()
        self.run_worker(self._store.load, thread=True, name=_CONTENT_WORKER, exclusive=True)

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        if event.worker.name != _CONTENT_WORKER:
            return
        if event.state is WorkerState.SUCCESS and self._store.is_loaded:
            self._refresh_view()
        elif event.state in (WorkerState.SUCCESS, WorkerState.ERROR):
            # Stay on the loading screen; the store already logged the cause.
            self._set_status("Content unavailable, see log for details")

    # ------------------------------------------------------------------
    # View state

    def _render_markdown(self) -> str:
        document = self._store.document
        if document is None:
            return render_loading()
        return render_page(document, self._locale, self._category)

    def _status_text(self) -> str:
        theme = "dark" if self._dark_mode else "light"
        return f"{self._locale.upper()} | {theme} | filter: {self._category}"

    def _next_locale(self) -> Locale:
        index = SUPPORTED_LOCALES.index(self._locale)
        return SUPPORTED_LOCALES[(index + 1) % len(SUPPORTED_LOCALES)]

    def _next_category(self) -> str:
        document = self._store.document
        if document is None:
            return ALL_CATEGORIES
        categories = project_categories(document)
        if self._category not in categories:
            return ALL_CATEGORIES
        return categories[(categories.index(self._category) + 1) % len(categories)]

    def _apply_theme(self) -> None:
        self.theme = "textual-dark" if self._dark_mode else "textual-light"
        self.query_one(WalkerCanvas).dark_mode = self._dark_mode

    def _set_status(self, text: str) -> None:
        self.query_one("#statusbar", Static).update(text)

    def _refresh_view(self) -> None:
        self.query_one("#content", Markdown).update(self._render_markdown())
        self._set_status(self._status_text())

    # ------------------------------------------------------------------
    # Actions

    def action_toggle_locale(self) -> None:
        self._locale = self._next_locale()
        self._refresh_view()

    def action_toggle_theme(self) -> None:
        self._dark_mode = not self._dark_mode
        self._apply_theme()
        self._set_status(self._status_text())

    def action_cycle_filter(self) -> None:
        self._category = self._next_category()
        self._refresh_view()

    def action_export_short(self) -> None:
        self._export("short")

    def action_export_long(self) -> None:
        self._export("long")

    def _export(self, variant: CvVariant) -> Path | None:
        document = self._store.document
        if document is None:
            self.notify("Content is still loading", severity="warning")
            return None
        try:
            path = export_cv(document, self._locale, variant, self._export_dir or get_export_dir())
        except OSError as exc:
            logger.exception("CV export failed")
            self.notify(f"Export failed: {exc}", severity="error")
            return None
        self.notify(f"Saved {path}")
        return path
