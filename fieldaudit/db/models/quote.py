import uuid
from decimal import Decimal
from typing import Any

from sqlalchemy import ForeignKey, Numeric, String
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from fieldaudit.common.enums import QuoteStatus
from fieldaudit.db.base import BaseModel


class Quote(BaseModel):
    __tablename__ = "quotes"

    audit_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("site_audits.id"), nullable=False, index=True
    )
    client_id: Mapped[str] = mapped_column(String(100), nullable=False, default="unknown")
    client_name: Mapped[str] = mapped_column(String(255), nullable=False)
    service_type: Mapped[str] = mapped_column(String(100), nullable=False)
    specs: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False, default=dict)
    equipment: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, nullable=False, default=list)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=Decimal("0.00"))
    status: Mapped[QuoteStatus] = mapped_column(
        String(20), nullable=False, default=QuoteStatus.DRAFT
    )
