from __future__ import annotations

from appforge.tasks.base import Task


class AddRailsEmailPreview(Task):
    @property
    def summary(self) -> str:
        return "Add rails_email_preview to preview emails in the browser"

    def before_bundle(self) -> None:
        self.add_gem("rails_email_preview")

    def after_bundle(self) -> None:
        self.run_generator("rails_email_preview:install")
