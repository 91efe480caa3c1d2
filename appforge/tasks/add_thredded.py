from __future__ import annotations

import re

from appforge.tasks.base import Task


class AddThredded(Task):
    mount_path = "/forum"

    @property
    def summary(self) -> str:
        return f"Add the Thredded forum engine at {self.mount_path}"

    def before_bundle(self) -> None:
        self.add_gem("thredded")

    def after_bundle(self) -> None:
        self.run_generator("thredded:install")
        self.replace(
            "config/routes.rb",
            re.compile(r"^(Rails\.application\.routes\.draw do\n)", re.MULTILINE),
            rf"\1  mount Thredded::Engine => '{self.mount_path}'\n",
            count=1,
        )
