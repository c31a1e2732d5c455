# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, jsonify

from keystone.application.use_cases.projects.workspace import ProjectWorkspace
from keystone.interfaces.http.auth import (
    auth_required,
    current_account_id,
    live_account_required,
)
from keystone.interfaces.http.dto.projects import (
    ProjectCreateDTO,
    ProjectDTO,
    ProjectUpdateDTO,
    TaskCreateDTO,
    TaskDTO,
    TaskUpdateDTO,
)
from keystone.shared.logging import logger

from ._common import parse_body


class ProjectsController:
    def __init__(self, *, workspace: ProjectWorkspace) -> None:
        self._workspace = workspace

    @auth_required
    def list_projects(self):
        items = self._workspace.list_projects(current_account_id())
        return jsonify({"items": [ProjectDTO.from_entity(p).model_dump(mode="json") for p in items]})

    @live_account_required
    def create_project(self):
        dto = parse_body(ProjectCreateDTO)
        project = self._workspace.create_project(current_account_id(), dto.name, dto.description)
        return jsonify(ProjectDTO.from_entity(project).model_dump(mode="json")), 201

    @auth_required
    def get_project(self, project_id: int):
        project = self._workspace.get_project(current_account_id(), project_id)
        return jsonify(ProjectDTO.from_entity(project).model_dump(mode="json"))

    @auth_required
    def update_project(self, project_id: int):
        dto = parse_body(ProjectUpdateDTO)
        project = self._workspace.update_project(
            current_account_id(), project_id, name=dto.name, description=dto.description
        )
        return jsonify(ProjectDTO.from_entity(project).model_dump(mode="json"))

    @auth_required
    def delete_project(self, project_id: int):
        self._workspace.delete_project(current_account_id(), project_id)
        return jsonify({"ok": True})

    @auth_required
    def list_tasks(self, project_id: int):
        items = self._workspace.list_tasks(current_account_id(), project_id)
        return jsonify({"items": [TaskDTO.from_entity(t).model_dump(mode="json") for t in items]})

    @auth_required
    def add_task(self, project_id: int):
        dto = parse_body(TaskCreateDTO)
        task = self._workspace.add_task(current_account_id(), project_id, dto.title)
        logger.info(f"tasks.create: ok project_id={project_id} task_id={task.id}")
        return jsonify(TaskDTO.from_entity(task).model_dump(mode="json")), 201

    @auth_required
    def update_task(self, task_id: int):
        dto = parse_body(TaskUpdateDTO)
        task = self._workspace.update_task(
            current_account_id(), task_id, title=dto.title, done=dto.done
        )
        return jsonify(TaskDTO.from_entity(task).model_dump(mode="json"))

    @auth_required
    def delete_task(self, task_id: int):
        self._workspace.delete_task(current_account_id(), task_id)
        return jsonify({"ok": True})

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("projects", __name__, url_prefix="/api")
        bp.add_url_rule("/projects", view_func=self.list_projects, methods=["GET"])
        bp.add_url_rule("/projects", view_func=self.create_project, methods=["POST"])
        bp.add_url_rule("/projects/<int:project_id>", view_func=self.get_project, methods=["GET"])
        bp.add_url_rule(
            "/projects/<int:project_id>", view_func=self.update_project, methods=["PATCH"]
        )
        bp.add_url_rule(
            "/projects/<int:project_id>", view_func=self.delete_project, methods=["DELETE"]
        )
        bp.add_url_rule(
            "/projects/<int:project_id>/tasks", view_func=self.list_tasks, methods=["GET"]
        )
        bp.add_url_rule(
            "/projects/<int:project_id>/tasks", view_func=self.add_task, methods=["POST"]
        )
        bp.add_url_rule("/tasks/<int:task_id>", view_func=self.update_task, methods=["PATCH"])
        bp.add_url_rule("/tasks/<int:task_id>", view_func=self.delete_task, methods=["DELETE"])
        return bp
