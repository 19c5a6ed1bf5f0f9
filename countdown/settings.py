"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/Countdown/settings.json

Usage::

    settings = load_settings()
    settings.duration_ms = minutes(10)
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.formatting import DEFAULT_FORMAT
from .timer.scheduler import DEFAULT_INTERVAL_MS


logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "Countdown"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    duration_ms: int = 5 * 60 * 1000
    interval_ms: int = DEFAULT_INTERVAL_MS
    time_format: str = DEFAULT_FORMAT.value
    auto_start: bool = False
    loop: bool = False
    sync_to_display: bool = False

    # ── window ────────────────────────────────────────────────────────
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 420
    window_height: int = 520
    always_on_top: bool = False

    def engine_options(self) -> dict:
        """Keyword arguments for ``TimerEngine`` (after ``total_ms``)."""
        return {
            "interval": self.interval_ms,
            "time_format": self.time_format,
            "auto_start": self.auto_start,
            "loop": self.loop,
            "sync_to_display": self.sync_to_display,
        }


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings at %s: %s", SETTINGS_PATH, exc)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
