from __future__ import annotations

from appforge.tasks.base import Task


class AddDisplayNameToUsers(Task):
    @property
    def summary(self) -> str:
        return "Add a unique display_name to users"

    def after_bundle(self) -> None:
        self.run_generator("migration", "AddDisplayNameToUsers", "display_name:string:uniq")
        self.replace(
            "app/models/user.rb",
            "class User < ApplicationRecord\n",
            "class User < ApplicationRecord\n"
            "  validates :display_name, presence: true, uniqueness: true\n",
            count=1,
        )
