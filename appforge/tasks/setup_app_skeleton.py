from __future__ import annotations

import re

from appforge.tasks.base import Task


class SetupAppSkeleton(Task):
    @property
    def summary(self) -> str:
        return "Add a home page, root route and favicon"

    def after_bundle(self) -> None:
        self.copy_template(
            "setup_app_skeleton/home_controller.rb", "app/controllers/home_controller.rb"
        )
        self.copy_template(
            "setup_app_skeleton/home_show.html.erb", "app/views/home/show.html.erb"
        )
        self.copy("setup_app_skeleton/favicon.svg", "public/favicon.svg")
        self.replace(
            "config/routes.rb",
            re.compile(r"^(Rails\.application\.routes\.draw do\n)", re.MULTILINE),
            "\\1  root to: 'home#show'\n",
            count=1,
        )
