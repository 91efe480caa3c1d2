"""
Scoped process environment for a pipeline run.

While the pipeline runs, the process works inside the app directory with
the caller's Bundler/Ruby settings removed. Both the cwd and the exact
environment are restored on every exit path.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Mapping

from loguru import logger

from appforge.config_loader import CleanEnvConfig
from appforge.errors import ExecutionError


def cleaned_environ(environ: Mapping[str, str], clean_env: CleanEnvConfig) -> dict[str, str]:
    return {k: v for k, v in environ.items() if not clean_env.matches(k)}


@contextmanager
def app_env(app_path: Path, clean_env: CleanEnvConfig) -> Iterator[Path]:
    saved_environ = dict(os.environ)
    saved_cwd = os.getcwd()
    try:
        removed = [k for k in os.environ if clean_env.matches(k)]
        for key in removed:
            del os.environ[key]
        if removed:
            logger.debug(f"[ENV] Cleared {', '.join(sorted(removed))}")
        try:
            os.chdir(app_path)
        except OSError as e:
            raise ExecutionError(f"Cannot use {app_path}: {e}") from e
        yield Path(app_path)
    finally:
        os.chdir(saved_cwd)
        os.environ.clear()
        os.environ.update(saved_environ)
