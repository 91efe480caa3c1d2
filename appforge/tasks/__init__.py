"""
appforge task roster.

TASKS is the fixed pipeline order. Each entry pairs a condition on the
configuration with the task class to construct when it holds; the pairs
are evaluated once per run.
"""

from __future__ import annotations

from typing import Callable

from appforge.config_loader import AppConfig
from appforge.tasks.add_devise import AddDevise
from appforge.tasks.add_display_name_to_users import AddDisplayNameToUsers
from appforge.tasks.add_memcached_support import AddMemcachedSupport
from appforge.tasks.add_rails_config import AddRailsConfig
from appforge.tasks.add_rails_email_preview import AddRailsEmailPreview
from appforge.tasks.add_roadie import AddRoadie
from appforge.tasks.add_simple_form import AddSimpleForm
from appforge.tasks.add_thredded import AddThredded
from appforge.tasks.base import Task
from appforge.tasks.create_rails_app import CreateRailsApp
from appforge.tasks.docker import Docker
from appforge.tasks.production_configs import ProductionConfigs
from appforge.tasks.setup_app_skeleton import SetupAppSkeleton
from appforge.tasks.setup_database import SetupDatabase

Condition = Callable[[AppConfig], bool]
TaskSpec = tuple[Condition, type[Task]]


def always(config: AppConfig) -> bool:
    return True


TASKS: list[TaskSpec] = [
    (always, CreateRailsApp),
    (always, AddRailsConfig),
    (lambda c: c.simple_form, AddSimpleForm),
    (always, AddDevise),
    (always, AddRailsEmailPreview),
    (always, AddRoadie),
    (always, AddThredded),
    (always, AddDisplayNameToUsers),
    (always, SetupAppSkeleton),
    (always, ProductionConfigs),
    (always, AddMemcachedSupport),
    (lambda c: c.database == "postgresql", Docker),
    (always, SetupDatabase),
]


def select_tasks(config: AppConfig, specs: list[TaskSpec] = TASKS) -> list[Task]:
    return [task_class(config) for condition, task_class in specs if condition(config)]


__all__ = ["TASKS", "Task", "TaskSpec", "always", "select_tasks"]
