from __future__ import annotations

from appforge.tasks.base import Task


class AddSimpleForm(Task):
    @property
    def summary(self) -> str:
        return "Add simple_form for form markup"

    def before_bundle(self) -> None:
        self.add_gem("simple_form")

    def after_bundle(self) -> None:
        self.run_generator("simple_form:install")
