"""Draft documents produced from an adapted audit."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from fieldaudit.common.enums import ProjectHealth, ProjectPhase, QuoteStatus


class PricingConfig(BaseModel):
    """Unit rates (NGN) used when drafting equipment lines."""

    model_config = ConfigDict(frozen=True)

    inverter_price_per_kva: float = 120_000.0
    battery_price_per_kwh: float = 95_000.0
    solar_price_per_kwp: float = 160_000.0
    cctv_camera_price: float = 45_000.0
    cctv_nvr_price: float = 150_000.0
    cctv_cable_coil_price: float = 65_000.0
    cctv_default_camera_count: int = 4

    @classmethod
    def from_settings(cls) -> PricingConfig:
        from fieldaudit.config import settings

        return cls(
            inverter_price_per_kva=settings.INVERTER_PRICE_PER_KVA,
            battery_price_per_kwh=settings.BATTERY_PRICE_PER_KWH,
            solar_price_per_kwp=settings.SOLAR_PRICE_PER_KWP,
            cctv_camera_price=settings.CCTV_CAMERA_PRICE,
            cctv_nvr_price=settings.CCTV_NVR_PRICE,
            cctv_cable_coil_price=settings.CCTV_CABLE_COIL_PRICE,
            cctv_default_camera_count=settings.CCTV_DEFAULT_CAMERA_COUNT,
        )


class EquipmentLine(BaseModel):
    item: str
    quantity: int = 1
    unit_price: float = 0.0
    category: str

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


class QuoteDraft(BaseModel):
    audit_id: str
    client_id: str
    client_name: str
    service_type: str
    specs: dict[str, Any] = Field(default_factory=dict)
    equipment: list[EquipmentLine] = Field(default_factory=list)
    total_amount: float = 0.0
    status: QuoteStatus = QuoteStatus.DRAFT


class ProjectSpecs(BaseModel):
    service_type: str | None = None
    system_size: float = 0.0
    battery_size: float = 0.0
    inverter_size: float = 0.0
    camera_count: int = 0


class ProjectDraft(BaseModel):
    name: str
    audit_id: str
    client_id: str
    client_name: str | None = None
    lead_id: str | None = None
    status: ProjectPhase = ProjectPhase.PLANNING
    phase: ProjectPhase = ProjectPhase.PLANNING
    progress: int = 0
    health: ProjectHealth = ProjectHealth.HEALTHY
    value: float = 0.0
    specs: ProjectSpecs = Field(default_factory=ProjectSpecs)
    due_date: datetime
    created_from: str = "audit"
