# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Project, Task


class ProjectRepository(Protocol):
    def add(self, owner_id: int, name: str, description: str) -> Project: ...
    def get(self, project_id: int) -> Project | None: ...
    def list_for_owner(self, owner_id: int) -> Sequence[Project]: ...
    def update(self, project_id: int, *, name: str, description: str) -> Project: ...
    def delete(self, project_id: int) -> None: ...


class TaskRepository(Protocol):
    def add(self, project_id: int, title: str) -> Task: ...
    def get(self, task_id: int) -> Task | None: ...
    def list_for_project(self, project_id: int) -> Sequence[Task]: ...
    def update(self, task_id: int, *, title: str, done: bool) -> Task: ...
    def delete(self, task_id: int) -> None: ...
