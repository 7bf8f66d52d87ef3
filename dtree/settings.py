"""Runner settings for dtree."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict

SETTINGS_ENV = "DTREE_SETTINGS"
SETTINGS_PATH = Path("dtree.json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Console runner options, loaded from JSON and overridable per run."""

    start_section: str = "start"
    prompt: str = "> "
    show_warnings: bool = True
    exit_on_dead_end: bool = True
    no_match_hint: str = ""
    log_level: str = "WARNING"

    def normalize(self) -> "Settings":
        self.start_section = str(self.start_section).strip() or "start"
        self.prompt = str(self.prompt)
        self.show_warnings = bool(self.show_warnings)
        self.exit_on_dead_end = bool(self.exit_on_dead_end)
        self.no_match_hint = str(self.no_match_hint)

        level = str(self.log_level).strip().upper()
        if level not in LOG_LEVELS:
            level = "WARNING"
        self.log_level = level
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> "Settings":
        if not isinstance(data, dict):
            return cls()

        def _as_str(key: str, default: str) -> str:
            value = data.get(key, default)
            return value if isinstance(value, str) else default

        def _as_bool(key: str, default: bool) -> bool:
            value = data.get(key, default)
            if isinstance(value, bool):
                return value
            if isinstance(value, str):
                lowered = value.strip().lower()
                if lowered in {"true", "1", "yes", "on"}:
                    return True
                if lowered in {"false", "0", "no", "off"}:
                    return False
            return bool(value) if value is not None else default

        settings = cls(
            start_section=_as_str("start_section", "start"),
            prompt=_as_str("prompt", "> "),
            show_warnings=_as_bool("show_warnings", True),
            exit_on_dead_end=_as_bool("exit_on_dead_end", True),
            no_match_hint=_as_str("no_match_hint", ""),
            log_level=_as_str("log_level", "WARNING"),
        )
        return settings.normalize()


def default_settings_path() -> Path:
    override = os.environ.get(SETTINGS_ENV)
    return Path(override) if override else SETTINGS_PATH


def load_settings(path: Path | str | None = None) -> Settings:
    path = Path(path) if path is not None else default_settings_path()
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError:
        return Settings()
    except (OSError, json.JSONDecodeError, TypeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return Settings()
    return Settings.from_dict(data)
