"""
Command runner.

Every external tool appforge calls goes through here. Commands are token
lists, never shell strings. A failure raises CommandFailedError and aborts
the run: scaffolding steps are not resumable, so there are no retries.
"""

from __future__ import annotations

import shlex
import subprocess
from typing import Sequence

from loguru import logger
from rich.console import Console
from rich.markup import escape

from appforge.errors import CommandFailedError

console = Console()


def log_command(args: Sequence[str]) -> None:
    console.print(f"[bold blue]$ {escape(shlex.join(args))}[/]", highlight=False)


def run(args: Sequence[str], *, log: bool = True, check: bool = True) -> int:
    """Run a command with output streamed to the terminal. Returns the exit code."""
    args = [str(a) for a in args]
    if log:
        log_command(args)
    try:
        result = subprocess.run(args)
    except OSError as e:
        raise CommandFailedError(args, 127, str(e)) from e

    if check and result.returncode != 0:
        raise CommandFailedError(args, result.returncode)
    if result.returncode != 0:
        logger.debug(f"[RUN] {args[0]} exited {result.returncode} (ignored)")
    return result.returncode


def capture(args: Sequence[str], *, check: bool = True) -> str:
    """Run a query command quietly and return its stdout."""
    args = [str(a) for a in args]
    logger.debug(f"[RUN] {shlex.join(args)}")
    try:
        result = subprocess.run(args, capture_output=True, text=True)
    except OSError as e:
        raise CommandFailedError(args, 127, str(e)) from e

    if check and result.returncode != 0:
        raise CommandFailedError(args, result.returncode, result.stderr.strip())
    return result.stdout
