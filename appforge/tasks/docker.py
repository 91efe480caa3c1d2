from __future__ import annotations

from appforge.config_loader import AppConfig
from appforge.tasks.base import Task


class Docker(Task):
    def __init__(self, config: AppConfig):
        super().__init__(config)
        self.postgres_version = config.get("postgres_version", "16")

    @property
    def summary(self) -> str:
        return f"Add docker-compose.yml with a PostgreSQL {self.postgres_version} service"

    def after_bundle(self) -> None:
        self.copy_template("docker/docker-compose.yml", "docker-compose.yml")
