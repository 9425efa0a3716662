"""Rich Console wrapper that degrades icons on non-UTF-8 terminals."""
from typing import Any

from rich.console import Console

from .logger import is_utf8_capable, sanitize_for_terminal


class SafeConsole(Console):
    """Console whose print() replaces Unicode icons with ASCII when needed."""

    def __init__(self, *args, **kwargs):
        self._needs_sanitization = not is_utf8_capable()

        if self._needs_sanitization:
            kwargs['legacy_windows'] = True

        super().__init__(*args, **kwargs)

    def print(self, *objects: Any, **kwargs) -> None:
        if self._needs_sanitization:
            objects = tuple(
                sanitize_for_terminal(obj, utf8=False) if isinstance(obj, str) else obj
                for obj in objects
            )
        super().print(*objects, **kwargs)
