# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Owner-scoped project and task operations."""

from __future__ import annotations

from collections.abc import Sequence

from keystone.domain.projects.entities import (
    NAME_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Project,
    Task,
    clean_name,
)
from keystone.domain.projects.exceptions import ProjectNotFoundError, TaskNotFoundError
from keystone.domain.projects.repositories import ProjectRepository, TaskRepository
from keystone.shared.logging import logger


class ProjectWorkspace:
    def __init__(self, *, projects: ProjectRepository, tasks: TaskRepository) -> None:
        self._projects = projects
        self._tasks = tasks

    def _owned_project(self, owner_id: int, project_id: int) -> Project:
        project = self._projects.get(project_id)
        # Another owner's project is indistinguishable from a missing one.
        if project is None or project.owner_id != owner_id:
            raise ProjectNotFoundError(project_id)
        return project

    def _owned_task(self, owner_id: int, task_id: int) -> Task:
        task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        project = self._projects.get(task.project_id)
        if project is None or project.owner_id != owner_id:
            raise TaskNotFoundError(task_id)
        return task

    def create_project(self, owner_id: int, name: str, description: str | None = None) -> Project:
        name = clean_name(name, field="name", max_length=NAME_MAX_LENGTH)
        project = self._projects.add(owner_id, name, (description or "").strip())
        logger.info(f"projects.create: ok owner_id={owner_id} project_id={project.id}")
        return project

    def list_projects(self, owner_id: int) -> Sequence[Project]:
        return self._projects.list_for_owner(owner_id)

    def get_project(self, owner_id: int, project_id: int) -> Project:
        return self._owned_project(owner_id, project_id)

    def update_project(
        self,
        owner_id: int,
        project_id: int,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> Project:
        project = self._owned_project(owner_id, project_id)
        new_name = (
            clean_name(name, field="name", max_length=NAME_MAX_LENGTH)
            if name is not None
            else project.name
        )
        new_description = description.strip() if description is not None else project.description
        return self._projects.update(project_id, name=new_name, description=new_description)

    def delete_project(self, owner_id: int, project_id: int) -> None:
        self._owned_project(owner_id, project_id)
        for task in self._tasks.list_for_project(project_id):
            self._tasks.delete(task.id)
        self._projects.delete(project_id)
        logger.info(f"projects.delete: ok owner_id={owner_id} project_id={project_id}")

    def add_task(self, owner_id: int, project_id: int, title: str) -> Task:
        self._owned_project(owner_id, project_id)
        title = clean_name(title, field="title", max_length=TITLE_MAX_LENGTH)
        return self._tasks.add(project_id, title)

    def list_tasks(self, owner_id: int, project_id: int) -> Sequence[Task]:
        self._owned_project(owner_id, project_id)
        return self._tasks.list_for_project(project_id)

    def update_task(
        self,
        owner_id: int,
        task_id: int,
        *,
        title: str | None = None,
        done: bool | None = None,
    ) -> Task:
        task = self._owned_task(owner_id, task_id)
        new_title = (
            clean_name(title, field="title", max_length=TITLE_MAX_LENGTH)
            if title is not None
            else task.title
        )
        new_done = task.done if done is None else bool(done)
        return self._tasks.update(task_id, title=new_title, done=new_done)

    def delete_task(self, owner_id: int, task_id: int) -> None:
        self._owned_task(owner_id, task_id)
        self._tasks.delete(task_id)
