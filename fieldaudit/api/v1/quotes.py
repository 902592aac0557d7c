import uuid
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fieldaudit.api.deps import get_db
from fieldaudit.common.exceptions import NotFoundError
from fieldaudit.db.models.quote import Quote

router = APIRouter(prefix="/quotes", tags=["Quotes"])


# ---------- Schemas ----------


class QuoteResponse(BaseModel):
    id: uuid.UUID
    audit_id: uuid.UUID
    client_id: str
    client_name: str
    service_type: str
    specs: dict[str, Any]
    equipment: list[dict[str, Any]]
    total_amount: float
    status: str
    created_at: str

    model_config = {"from_attributes": True}

    @classmethod
    def from_orm_instance(cls, quote: Quote) -> "QuoteResponse":
        return cls(
            id=quote.id,
            audit_id=quote.audit_id,
            client_id=quote.client_id,
            client_name=quote.client_name,
            service_type=quote.service_type,
            specs=quote.specs or {},
            equipment=quote.equipment or [],
            total_amount=float(quote.total_amount),
            status=quote.status,
            created_at=quote.created_at.isoformat(),
        )


# ---------- Endpoints ----------


@router.get("/{quote_id}", response_model=QuoteResponse)
async def get_quote(
    quote_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(Quote).where(Quote.id == quote_id, Quote.is_deleted.is_(False))
    )
    quote = result.scalar_one_or_none()
    if not quote:
        raise NotFoundError("Quote", str(quote_id))
    return QuoteResponse.from_orm_instance(quote)
