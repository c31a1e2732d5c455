# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, select

from keystone.domain.projects.entities import Project as DomainProject
from keystone.domain.projects.entities import Task as DomainTask
from keystone.domain.projects.exceptions import ProjectNotFoundError, TaskNotFoundError
from keystone.domain.projects.repositories import ProjectRepository, TaskRepository
from keystone.infrastructure.db.models import Project, Task
from keystone.infrastructure.unit_of_work import SessionFactory, unit_of_work_scope


def _project(row: Project) -> DomainProject:
    return DomainProject(
        id=row.id,
        owner_id=row.owner_id,
        name=row.name,
        description=row.description or "",
        created_at=row.created_at,
    )


def _task(row: Task) -> DomainTask:
    return DomainTask(
        id=row.id,
        project_id=row.project_id,
        title=row.title,
        done=bool(row.done),
        created_at=row.created_at,
    )


class SqlAlchemyProjectRepository(ProjectRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def add(self, owner_id: int, name: str, description: str) -> DomainProject:
        with unit_of_work_scope(self._session_factory) as session:
            row = Project(owner_id=owner_id, name=name, description=description)
            session.add(row)
            session.flush()
            session.refresh(row)
            return _project(row)

    def get(self, project_id: int) -> DomainProject | None:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            row = session.get(Project, project_id)
            return _project(row) if row else None

    def list_for_owner(self, owner_id: int) -> Sequence[DomainProject]:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            rows = session.scalars(
                select(Project).where(Project.owner_id == owner_id).order_by(Project.id.asc())
            ).all()
            return [_project(row) for row in rows]

    def update(self, project_id: int, *, name: str, description: str) -> DomainProject:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(Project, project_id)
            if row is None:
                raise ProjectNotFoundError(project_id)
            row.name = name
            row.description = description
            session.flush()
            return _project(row)

    def delete(self, project_id: int) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            session.execute(delete(Project).where(Project.id == project_id))


class SqlAlchemyTaskRepository(TaskRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def add(self, project_id: int, title: str) -> DomainTask:
        with unit_of_work_scope(self._session_factory) as session:
            row = Task(project_id=project_id, title=title, done=False)
            session.add(row)
            session.flush()
            session.refresh(row)
            return _task(row)

    def get(self, task_id: int) -> DomainTask | None:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            row = session.get(Task, task_id)
            return _task(row) if row else None

    def list_for_project(self, project_id: int) -> Sequence[DomainTask]:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            rows = session.scalars(
                select(Task).where(Task.project_id == project_id).order_by(Task.id.asc())
            ).all()
            return [_task(row) for row in rows]

    def update(self, task_id: int, *, title: str, done: bool) -> DomainTask:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(Task, task_id)
            if row is None:
                raise TaskNotFoundError(task_id)
            row.title = title
            row.done = done
            session.flush()
            return _task(row)

    def delete(self, task_id: int) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            session.execute(delete(Task).where(Task.id == task_id))
