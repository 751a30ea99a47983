from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

THEMES = ("light", "dark")


class PreferenceStore:
    """Local persisted UI preference; the only stored value is the theme."""

    def __init__(self, path: Union[str, Path], default_theme: str = "dark") -> None:
        if default_theme not in THEMES:
            raise ValueError(f"Unknown theme: {default_theme!r}")
        self.path = Path(path).expanduser()
        self.default_theme = default_theme

    def load_theme(self) -> str:
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return self.default_theme
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable preferences at %s: %s", self.path, exc)
            return self.default_theme

        theme = payload.get("theme") if isinstance(payload, dict) else None
        return theme if theme in THEMES else self.default_theme

    def save_theme(self, theme: str) -> None:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme: {theme!r}")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({"theme": theme}), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not persist theme to %s: %s", self.path, exc)
