"""Draft a priced quote from an audit's derived results.

Only solar and CCTV have priced equipment templates; every other service
gets two zero-priced placeholder lines for the sales team to fill in.
"""

from __future__ import annotations

import math

from fieldaudit.common.enums import ServiceType
from fieldaudit.core.audit_engine.review import format_number
from fieldaudit.core.audit_engine.schemas import AdaptedView, DerivedResults, RawAuditRecord
from fieldaudit.core.sales.schemas import EquipmentLine, PricingConfig, QuoteDraft

_DEFAULT_PRICING = PricingConfig()


def _solar_lines(results: DerivedResults, pricing: PricingConfig) -> list[EquipmentLine]:
    return [
        EquipmentLine(
            item=f"{format_number(results.rec_inverter)}kVA Hybrid Inverter",
            unit_price=results.rec_inverter * pricing.inverter_price_per_kva,
            category="Inverter",
        ),
        EquipmentLine(
            item=f"{format_number(results.rec_battery)}kWh {results.battery_type} Battery Bank",
            unit_price=results.rec_battery * pricing.battery_price_per_kwh,
            category="Battery",
        ),
        EquipmentLine(
            item=f"{format_number(results.rec_solar_result)}kWp Solar Array",
            unit_price=results.rec_solar_result * pricing.solar_price_per_kwp,
            category="Solar Panels",
        ),
    ]


def _cctv_lines(results: DerivedResults, pricing: PricingConfig) -> list[EquipmentLine]:
    cameras = results.total_cameras or pricing.cctv_default_camera_count
    return [
        EquipmentLine(
            item="4MP IP Bullet Camera (Night Vision)",
            quantity=cameras,
            unit_price=pricing.cctv_camera_price,
            category="Hardware",
        ),
        EquipmentLine(
            item="16-Channel NVR Recorder",
            unit_price=pricing.cctv_nvr_price,
            category="Hardware",
        ),
        EquipmentLine(
            item="CAT6 Networking Cable (Coil)",
            quantity=math.ceil(cameras * 0.5),
            unit_price=pricing.cctv_cable_coil_price,
            category="Cabling",
        ),
    ]


def _placeholder_lines() -> list[EquipmentLine]:
    return [
        EquipmentLine(item="General Service Implementation", category="Service"),
        EquipmentLine(item="Miscellaneous Materials", category="Materials"),
    ]


def build_equipment(
    primary_service: str | None,
    results: DerivedResults,
    pricing: PricingConfig = _DEFAULT_PRICING,
) -> list[EquipmentLine]:
    if primary_service == ServiceType.SOLAR.value:
        return _solar_lines(results, pricing)
    if primary_service == ServiceType.CCTV.value:
        return _cctv_lines(results, pricing)
    return _placeholder_lines()


def service_label(primary_service: str | None) -> str:
    if not primary_service:
        return "General Project"
    return f"{primary_service[:1].upper()}{primary_service[1:]} Project"


def draft_quote(
    audit_id: str,
    record: RawAuditRecord,
    view: AdaptedView,
    pricing: PricingConfig | None = None,
) -> QuoteDraft:
    """Build the initial quote for *record* from its adapted *view*.

    The total is clamped at zero; specs are only filled for solar.
    """
    pricing = pricing or _DEFAULT_PRICING
    results = view.derived_results
    primary = record.primary_service

    specs = {}
    if primary == ServiceType.SOLAR.value:
        specs = {
            "inverter": results.rec_inverter,
            "battery": results.rec_battery,
            "solar": results.rec_solar_result,
        }

    equipment = build_equipment(primary, results, pricing)
    total = sum(line.line_total for line in equipment)

    return QuoteDraft(
        audit_id=audit_id,
        client_id=(record.client.id if record.client else None) or "unknown",
        client_name=view.client_profile.client_name or "Unknown Audit Client",
        service_type=service_label(primary),
        specs=specs,
        equipment=equipment,
        total_amount=max(total, 0.0),
    )
