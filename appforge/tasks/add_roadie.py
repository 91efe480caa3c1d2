from __future__ import annotations

from appforge.tasks.base import Task


class AddRoadie(Task):
    @property
    def summary(self) -> str:
        return "Add roadie-rails to inline email CSS"

    def before_bundle(self) -> None:
        self.add_gem("roadie-rails")

    def after_bundle(self) -> None:
        self.copy_template("add_roadie/roadie.rb", "config/initializers/roadie.rb")
