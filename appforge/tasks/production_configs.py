from __future__ import annotations

import re

from appforge.tasks.base import Task


class ProductionConfigs(Task):
    @property
    def summary(self) -> str:
        return "Add a Procfile and force SSL in production"

    def after_bundle(self) -> None:
        self.copy_template("production_configs/Procfile", "Procfile")
        self.replace(
            "config/environments/production.rb",
            re.compile(r"^[ \t]*#?[ \t]*config\.force_ssl = true$", re.MULTILINE),
            "  config.force_ssl = true",
        )
