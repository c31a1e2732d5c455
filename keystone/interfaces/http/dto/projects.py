from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from keystone.domain.projects.entities import Project, Task


class ProjectCreateDTO(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    description: str = Field("", max_length=4000)


class ProjectUpdateDTO(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=128)
    description: str | None = Field(None, max_length=4000)


class TaskCreateDTO(BaseModel):
    title: str = Field(min_length=1, max_length=256)


class TaskUpdateDTO(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=256)
    done: bool | None = None


class ProjectDTO(BaseModel):
    id: int
    name: str
    description: str
    created_at: datetime

    @classmethod
    def from_entity(cls, project: Project) -> ProjectDTO:
        return cls(
            id=project.id,
            name=project.name,
            description=project.description,
            created_at=project.created_at,
        )


class TaskDTO(BaseModel):
    id: int
    project_id: int
    title: str
    done: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, task: Task) -> TaskDTO:
        return cls(
            id=task.id,
            project_id=task.project_id,
            title=task.title,
            done=task.done,
            created_at=task.created_at,
        )
