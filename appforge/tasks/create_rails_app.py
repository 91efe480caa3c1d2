from __future__ import annotations

from appforge.tasks.base import Task


class CreateRailsApp(Task):
    @property
    def summary(self) -> str:
        return f"Create a new Rails app with a {self.config.database} database and RSpec"

    def before_bundle(self) -> None:
        if self.config.install_gem_bundler_rails:
            self.run("gem", "update", "--system")
            self.run("gem", "install", "bundler", "rails")
        self.run(
            "rails", "new", ".",
            "--skip-bundle",
            "--skip-git",
            "--skip-test",
            f"--database={self.config.database}",
        )
        self.add_gem("rspec-rails", groups=["development", "test"])

    def after_bundle(self) -> None:
        self.run_generator("rspec:install")
        self.copy_template("create_rails_app/README.md", "README.md")
