"""Main timer card.

Layout (top → bottom):
    - ProgressRing (large, centred)
    - Control row: Stop / Start-Pause-Resume / Reset
    - Adjust row: -1 min / +1 min
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QFrame, QSizePolicy,
)

from ..timer.engine import TimerEngine, TimerStatus
from ..timer.timeutils import minutes
from .progress_ring import ProgressRing


ADJUST_MS = minutes(1)

START_LABELS: dict[TimerStatus, str] = {
    TimerStatus.IDLE:     "Start",
    TimerStatus.RUNNING:  "Pause",
    TimerStatus.PAUSED:   "Resume",
    TimerStatus.FINISHED: "Again",
}


class TimerWidget(QWidget):
    """The timer card: ring plus controls for one ``TimerEngine``."""

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._build_ui()
        self._connect_signals()
        self._on_state_changed(engine.status)

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 20, 24, 24)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        # ── progress ring (centrepiece) ──────────────────────────────
        self._ring = ProgressRing(card)
        self._ring.setSizePolicy(
            QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding,
        )
        layout.addWidget(self._ring)

        layout.addSpacing(12)

        # ── main controls ────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._stop_btn = QPushButton("Stop", card)
        self._stop_btn.setObjectName("dangerButton")

        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")

        self._reset_btn = QPushButton("Reset", card)
        self._reset_btn.setObjectName("secondaryButton")

        btn_row.addWidget(self._stop_btn)
        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._reset_btn)
        layout.addLayout(btn_row)

        layout.addSpacing(8)

        # ── time adjustment ──────────────────────────────────────────
        adjust_row = QHBoxLayout()
        adjust_row.setSpacing(12)
        adjust_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._minus_btn = QPushButton("-1 min", card)
        self._minus_btn.setObjectName("adjustButton")
        self._plus_btn = QPushButton("+1 min", card)
        self._plus_btn.setObjectName("adjustButton")

        adjust_row.addWidget(self._minus_btn)
        adjust_row.addWidget(self._plus_btn)
        layout.addLayout(adjust_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self._engine.toggle)
        self._stop_btn.clicked.connect(self._engine.stop)
        self._reset_btn.clicked.connect(lambda: self._engine.reset())
        self._plus_btn.clicked.connect(self._on_plus)
        self._minus_btn.clicked.connect(self._on_minus)

        self._engine.tick.connect(self._refresh_display)
        self._engine.completed.connect(self._refresh_display)
        self._engine.state_changed.connect(self._on_state_changed)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_plus(self) -> None:
        self._engine.add_time(ADJUST_MS)
        self._refresh_display()

    def _on_minus(self) -> None:
        self._engine.subtract_time(ADJUST_MS)
        self._refresh_display()

    def _on_state_changed(self, status: TimerStatus) -> None:
        self._start_pause_btn.setText(START_LABELS[status])
        self._ring.apply_status(status)
        self._update_button_visibility(status)
        self._refresh_display()

    def _update_button_visibility(self, status: TimerStatus) -> None:
        """Show/hide buttons based on current status."""
        self._stop_btn.setVisible(
            status in (TimerStatus.RUNNING, TimerStatus.PAUSED)
        )
        self._reset_btn.setVisible(status != TimerStatus.RUNNING)

    def _refresh_display(self, *_args) -> None:
        self._ring.set_time_text(self._engine.time)
        self._ring.set_percent(self._engine.progress)
