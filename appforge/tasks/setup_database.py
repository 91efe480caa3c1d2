from __future__ import annotations

from appforge.tasks.base import Task


class SetupDatabase(Task):
    @property
    def summary(self) -> str:
        return "Create and migrate the database"

    def after_bundle(self) -> None:
        self.run_rails("db:create")
        self.run_rails("db:migrate")
