"""
Task contract shared by every scaffolding step.

A task lives for one pipeline run and goes through:

    constructed -> before_bundle -> (shared bundle install) -> after_bundle

before_bundle may only declare gems and touch files; the gems are not
installed yet. after_bundle runs once every task's gems are installed and
may run generators that need them. Tasks never install gems themselves.

Constructing a task and reading its summary must not touch the filesystem
or run anything.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from loguru import logger

from appforge import patching, runner, templating
from appforge.config_loader import AppConfig
from appforge.ledger import Dependency, DependencyLedger


class Task:
    def __init__(self, config: AppConfig):
        self.config = config
        self.app_path = config.app_path.expanduser().resolve()
        self.app_name = config.app_name
        self.verbose = config.verbose
        self.gems = DependencyLedger()

    @property
    def summary(self) -> str:
        return type(self).__name__

    def before_bundle(self) -> None:
        pass

    def after_bundle(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} app={self.app_name!r}>"

    # ------------------------------------------------------------------
    # Helpers for subclasses
    # ------------------------------------------------------------------

    def add_gem(
        self,
        name: str,
        version: str | None = None,
        groups: Sequence[str] | None = None,
        path: str | None = None,
    ) -> Dependency:
        logger.debug(f"+ gem {name}")
        return self.gems.add(name, version=version, groups=groups, path=path)

    def template_variables(self) -> dict[str, Any]:
        """Config options overlaid with the task's own public attributes."""
        variables = self.config.model_dump()
        variables.update({k: v for k, v in vars(self).items() if not k.startswith("_")})
        return variables

    def copy(self, src: str, target: str) -> Path:
        return templating.copy(src, self.app_path / target)

    def copy_template(self, src: str, target: str) -> Path:
        return templating.render_template(src, self.app_path / target, self.template_variables())

    def replace(self, path: str, pattern: patching.Pattern, replacement: patching.Replacement, count: int = 0) -> int:
        return patching.replace(self.app_path / path, pattern, replacement, count=count)

    def run(self, *args: str, log: bool = True) -> int:
        return runner.run(args, log=log)

    def run_generator(self, *args: str) -> int:
        quiet = [] if self.verbose else ["--quiet"]
        return self.run("bundle", "exec", "rails", "generate", *args, *quiet)

    def run_rails(self, *args: str) -> int:
        return self.run("bundle", "exec", "rails", *args)
