"""Error types.

Tokenizing and the indentation heuristics never fail; only configuration can.
"""

from __future__ import annotations

from pathlib import Path


class ConfigError(Exception):
    """Raised when a config file or option holds an unusable value."""

    def __init__(self, message: str, key: str | None = None, path: Path | None = None) -> None:
        self.message = message
        self.key = key
        self.path = path
        super().__init__(self.format())

    def format(self) -> str:
        where = ""
        if self.path is not None:
            where = f"\n  --> {self.path}"
            if self.key is not None:
                where += f" [{self.key}]"
        elif self.key is not None:
            where = f"\n  --> option {self.key}"
        return f"error: {self.message}{where}"
