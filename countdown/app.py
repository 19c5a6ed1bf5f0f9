"""Main window: one countdown with keyboard control and saved geometry."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QMainWindow, QWidget

from .settings import Settings, load_settings, save_settings
from .timer.engine import TimerEngine, TimerStatus
from .ui.timer_widget import TimerWidget


logger = logging.getLogger(__name__)


class CountdownApp(QMainWindow):
    """Top-level window wrapping a ``TimerWidget``."""

    def __init__(
        self,
        settings: Settings | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings if settings is not None else load_settings()
        self.setWindowTitle("Countdown")

        self._engine = TimerEngine(
            self._settings.duration_ms,
            self,
            on_complete=self._on_complete,
            **self._settings.engine_options(),
        )
        self._timer_widget = TimerWidget(self._engine, self)
        self.setCentralWidget(self._timer_widget)

        self._restore_geometry()
        if self._settings.always_on_top:
            self.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, True)

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    # ══════════════════════════════════════════════════════════════════
    #  TIMER EVENTS
    # ══════════════════════════════════════════════════════════════════

    def _on_complete(self) -> None:
        logger.info("Countdown of %d ms complete", self._engine.total_ms)

    def _on_space(self) -> None:
        """Start, pause, or resume the timer."""
        self._engine.toggle()

    def _on_escape(self) -> None:
        """Reset the timer (no-op when idle)."""
        if self._engine.status != TimerStatus.IDLE:
            self._engine.reset()

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW STATE
    # ══════════════════════════════════════════════════════════════════

    def _restore_geometry(self) -> None:
        """Restore window position and size from settings."""
        s = self._settings
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)
        if s.window_width and s.window_height:
            self.resize(s.window_width, s.window_height)

    def _save_geometry(self) -> None:
        """Persist current window geometry to settings."""
        if not self.isVisible():
            return
        pos = self.pos()
        size = self.size()
        self._settings.window_x = pos.x()
        self._settings.window_y = pos.y()
        self._settings.window_width = size.width()
        self._settings.window_height = size.height()
        save_settings(self._settings)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._save_geometry()
        self._engine.dispose()
        event.accept()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Handle Space (start/pause) and Escape (reset) globally."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self._on_space()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._on_escape()
            event.accept()
            return
        super().keyPressEvent(event)
