# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from keystone.domain.exceptions import NotFoundError


class ProjectNotFoundError(NotFoundError):
    code = "project_not_found"

    def __init__(self, project_id: int) -> None:
        super().__init__(project_id=project_id)


class TaskNotFoundError(NotFoundError):
    code = "task_not_found"

    def __init__(self, task_id: int) -> None:
        super().__init__(task_id=task_id)
