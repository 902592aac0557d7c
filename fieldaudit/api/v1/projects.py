import uuid
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fieldaudit.api.deps import get_db
from fieldaudit.common.exceptions import NotFoundError
from fieldaudit.db.models.project import Project

router = APIRouter(prefix="/projects", tags=["Projects"])


# ---------- Schemas ----------


class ProjectResponse(BaseModel):
    id: uuid.UUID
    audit_id: uuid.UUID
    name: str
    client_id: str
    client_name: str | None
    lead_id: str | None
    status: str
    phase: str
    progress: int
    health: str
    value: float
    specs: dict[str, Any]
    due_date: str | None
    created_from: str
    created_at: str

    model_config = {"from_attributes": True}

    @classmethod
    def from_orm_instance(cls, project: Project) -> "ProjectResponse":
        return cls(
            id=project.id,
            audit_id=project.audit_id,
            name=project.name,
            client_id=project.client_id,
            client_name=project.client_name,
            lead_id=project.lead_id,
            status=project.status,
            phase=project.phase,
            progress=project.progress,
            health=project.health,
            value=float(project.value),
            specs=project.specs or {},
            due_date=project.due_date.isoformat() if project.due_date else None,
            created_from=project.created_from,
            created_at=project.created_at.isoformat(),
        )


# ---------- Endpoints ----------


async def _get_project(project_id: uuid.UUID, db: AsyncSession) -> Project:
    result = await db.execute(
        select(Project).where(Project.id == project_id, Project.is_deleted.is_(False))
    )
    project = result.scalar_one_or_none()
    if not project:
        raise NotFoundError("Project", str(project_id))
    return project


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    project = await _get_project(project_id, db)
    return ProjectResponse.from_orm_instance(project)
