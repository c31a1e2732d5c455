# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Project, Task
from .exceptions import ProjectNotFoundError, TaskNotFoundError

__all__ = ["Project", "ProjectNotFoundError", "Task", "TaskNotFoundError"]
