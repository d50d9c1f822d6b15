from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

APP = "shellbridge"

PLATFORM_CHOICES = ("auto", "posix", "windows")
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def config_dir() -> Path:
    """
    Cross-platform config directory:
      - Windows: %APPDATA%\\shellbridge
      - macOS/Linux: $XDG_CONFIG_HOME/shellbridge or ~/.config/shellbridge
    """
    if os.name == "nt":
        base = os.environ.get("APPDATA") or str(Path.home())
        return Path(base) / APP
    return Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config"))) / APP


def config_path() -> Path:
    return config_dir() / "config.json"


def _timeout(value) -> Optional[float]:
    """``None``, empty, zero or negative all mean "no timeout"."""
    if value in (None, ""):
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return None
    return seconds if seconds > 0 else None


def _platform(value) -> str:
    value = str(value or "auto").lower()
    return value if value in PLATFORM_CHOICES else "auto"


def _level(value) -> str:
    value = str(value or "WARNING").upper()
    return value if value in LOG_LEVELS else "WARNING"


@dataclass
class Settings:
    platform: str = "auto"          # auto | posix | windows
    timeout_s: Optional[float] = None  # None waits for child processes forever
    log_level: str = "WARNING"
    input_history: bool = True      # persist typed lines for arrow-key recall

    @staticmethod
    def load(path: Optional[Path] = None) -> "Settings":
        path = path or config_path()

        data: dict = {}

        if path.exists():
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                data = {}
            if not isinstance(data, dict):
                data = {}

        s = Settings(
            platform=_platform(data.get("platform", Settings.platform)),
            timeout_s=_timeout(data.get("timeout_s", Settings.timeout_s)),
            log_level=_level(data.get("log_level", Settings.log_level)),
            input_history=bool(data.get("input_history", Settings.input_history)),
        )

        # Environment overrides (highest priority)
        if "SHELLBRIDGE_PLATFORM" in os.environ:
            s.platform = _platform(os.environ["SHELLBRIDGE_PLATFORM"])
        if "SHELLBRIDGE_TIMEOUT" in os.environ:
            s.timeout_s = _timeout(os.environ["SHELLBRIDGE_TIMEOUT"])
        if "SHELLBRIDGE_LOG_LEVEL" in os.environ:
            s.log_level = _level(os.environ["SHELLBRIDGE_LOG_LEVEL"])

        return s

    def save(self, path: Optional[Path] = None) -> Path:
        path = path or config_path()
        path.parent.mkdir(parents=True, exist_ok=True)

        payload = {
            "platform": self.platform,
            "timeout_s": self.timeout_s,
            "log_level": self.log_level,
            "input_history": self.input_history,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        return path
