"""
Version-control checkpoints for the generated app.

The repository is initialized before any task runs; one checkpoint commit
records the gems added by the run right after they are installed.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from appforge import runner

COMMIT_PREFIX = "[appforge]"


class GitRepo:
    """The git repository at the root of the generated app."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def init(self) -> None:
        runner.run(["git", "init", str(self.path)])

    def commit(self, message: str) -> str | None:
        """Stage and commit all changes. Returns the new HEAD sha, or None if clean."""
        self._git("add", "-A")

        status = self._git_capture("status", "--porcelain")
        if not status.strip():
            logger.info("[GIT] Nothing to commit.")
            return None

        logger.info("Committing")
        self._git("commit", "-m", f"{COMMIT_PREFIX} {message}")
        return self._git_capture("rev-parse", "HEAD").strip()

    def _git(self, *args: str) -> int:
        return runner.run(["git", "-C", str(self.path), *args])

    def _git_capture(self, *args: str) -> str:
        return runner.capture(["git", "-C", str(self.path), *args])
