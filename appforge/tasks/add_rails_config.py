from __future__ import annotations

from appforge.tasks.base import Task


class AddRailsConfig(Task):
    @property
    def summary(self) -> str:
        return "Add the config gem for per-environment settings"

    def before_bundle(self) -> None:
        self.add_gem("config")

    def after_bundle(self) -> None:
        self.run_generator("config:install")
