from typing import Any

from sqlalchemy import Boolean, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from fieldaudit.common.enums import AuditStatus
from fieldaudit.db.base import BaseModel


class SiteAudit(BaseModel):
    """A stored wizard record plus the columns list views filter on."""

    __tablename__ = "site_audits"

    record: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False, default=dict)
    client_name: Mapped[str] = mapped_column(
        String(255), nullable=False, default="Unknown Client", index=True
    )
    status: Mapped[AuditStatus] = mapped_column(
        String(20), nullable=False, default=AuditStatus.DRAFT
    )
    service_types: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)
    engineer: Mapped[str | None] = mapped_column(String(255), nullable=True)
    moved_to_project: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    project_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
