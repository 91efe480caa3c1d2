"""
appforge Generator: the pipeline orchestrator.

It is not smart. It is deterministic:

  1. Select the tasks for this configuration (fixed order)
  2. Create the app directory
  3. Inside a clean, scoped environment:
       git init
       every task's before_bundle
       one shared bundle install for every task's gems + checkpoint commit
       every task's after_bundle

The install runs exactly once per run, however many tasks contribute gems.
Any failure aborts the run; recovery is through the app's git history.
"""

from __future__ import annotations

import os
from functools import cached_property

from loguru import logger

from appforge import runner
from appforge.config_loader import AppConfig
from appforge.environment import app_env
from appforge.errors import CommandFailedError, ExecutionError
from appforge.ledger import DependencyLedger, append_to_manifest
from appforge.tasks import TASKS, Task, TaskSpec, select_tasks
from appforge.vcs import GitRepo

MANIFEST = "Gemfile"


class Generator:
    def __init__(self, config: AppConfig, task_specs: list[TaskSpec] = TASKS):
        self.config = config
        self.app_path = config.app_path.expanduser().resolve()
        self.task_specs = task_specs
        self.repo = GitRepo(self.app_path)

    def __repr__(self) -> str:
        return f"<Generator app_path={str(self.app_path)!r} tasks={[type(t).__name__ for t in self.tasks]}>"

    @cached_property
    def tasks(self) -> list[Task]:
        return select_tasks(self.config, self.task_specs)

    def summary(self) -> str:
        return "\n".join(f"* {t.summary}" for t in self.tasks)

    def dependencies(self) -> DependencyLedger:
        return DependencyLedger.union(t.gems for t in self.tasks)

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def generate(self) -> None:
        logger.debug(f"Started: {self!r}")
        try:
            self.app_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExecutionError(f"Cannot use {self.app_path}: {e}") from e
        with app_env(self.app_path, self.config.clean_env):
            self.repo.init()
            for task in self.tasks:
                logger.debug(f"[BEFORE BUNDLE] {type(task).__name__}")
                task.before_bundle()
            self.bundle()
            for task in self.tasks:
                logger.debug(f"[AFTER BUNDLE] {type(task).__name__}")
                task.after_bundle()

    def run_tests(self) -> None:
        logger.info("Running tests")
        with app_env(self.app_path, self.config.clean_env):
            runner.run(["bundle", "exec", "rspec", "-fd"])

    def bundle(self) -> None:
        added = append_to_manifest(self.app_path / MANIFEST, self.dependencies())

        logger.info("Installing gems")
        if not _gem_dir_writable():
            runner.run(["bundle", "config", "set", "--local", "path", ".bundle"])
        install = ["bundle", "install"]
        if not self.config.verbose:
            install.append("--quiet")
        runner.run(install)

        self.repo.commit(f"Add gems: {', '.join(d.name for d in added)}")


def _gem_dir_writable() -> bool:
    """Whether gems can be installed system-wide without sudo."""
    try:
        gem_dir = runner.capture(["gem", "environment", "gemdir"]).strip()
    except CommandFailedError as e:
        logger.debug(f"[BUNDLE] Could not locate the gem dir: {e}")
        return False
    return bool(gem_dir) and os.access(gem_dir, os.W_OK)
