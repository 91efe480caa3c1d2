"""
appforge error taxonomy.

Two kinds reach the CLI boundary:
  - UsageError      bad invocation or configuration (exit 64)
  - ExecutionError  anything failing mid-pipeline (exit 78, or 1 for a
                    failed external command)
"""

from __future__ import annotations

import shlex
from typing import Sequence


class AppforgeError(Exception):
    exit_code: int = 78


class UsageError(AppforgeError):
    exit_code = 64


class ConfigError(UsageError):
    """Raised when the configuration cannot be loaded or validated."""
    pass


class ExecutionError(AppforgeError):
    exit_code = 78


class CommandFailedError(ExecutionError):
    """An external command exited non-zero or could not be started."""

    exit_code = 1

    def __init__(self, args: Sequence[str], returncode: int, detail: str = ""):
        self.command = list(args)
        self.returncode = returncode
        message = f"Command failed ({returncode}): {shlex.join(self.command)}"
        if detail:
            message += f"\n{detail}"
        super().__init__(message)


class NoMatchError(ExecutionError):
    """A patch pattern matched nothing: the anchor text has drifted."""

    def __init__(self, path, pattern):
        self.path = path
        self.pattern = pattern
        shown = pattern.pattern if hasattr(pattern, "pattern") else pattern
        super().__init__(f"No match found for {shown!r} in {path}")


class TemplateError(ExecutionError):
    pass


class ManifestError(ExecutionError):
    pass
