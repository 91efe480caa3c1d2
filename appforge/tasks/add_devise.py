from __future__ import annotations

from appforge.tasks.base import Task


class AddDevise(Task):
    @property
    def summary(self) -> str:
        return "Add Devise authentication with a User model"

    def before_bundle(self) -> None:
        self.add_gem("devise")
        self.add_gem("devise-i18n")

    def after_bundle(self) -> None:
        self.run_generator("devise:install")
        self.run_generator("devise", "User")
        self.replace(
            "config/environments/development.rb",
            "Rails.application.configure do\n",
            "Rails.application.configure do\n"
            "  config.action_mailer.default_url_options = { host: 'localhost', port: 3000 }\n",
            count=1,
        )
