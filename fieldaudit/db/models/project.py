import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from fieldaudit.common.enums import ProjectHealth, ProjectPhase
from fieldaudit.db.base import BaseModel


class Project(BaseModel):
    __tablename__ = "projects"

    audit_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("site_audits.id"), nullable=False, unique=True
    )
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    client_id: Mapped[str] = mapped_column(String(100), nullable=False, default="unknown")
    client_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    lead_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[ProjectPhase] = mapped_column(
        String(20), nullable=False, default=ProjectPhase.PLANNING
    )
    phase: Mapped[ProjectPhase] = mapped_column(
        String(20), nullable=False, default=ProjectPhase.PLANNING
    )
    progress: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    health: Mapped[ProjectHealth] = mapped_column(
        String(20), nullable=False, default=ProjectHealth.HEALTHY
    )
    value: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=Decimal("0.00"))
    specs: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False, default=dict)
    due_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_from: Mapped[str] = mapped_column(String(50), nullable=False, default="audit")
