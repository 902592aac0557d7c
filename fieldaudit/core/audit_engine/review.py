"""Review routing and review-summary content for each service vertical.

The primary service (first selected vertical) picks one of six review
branches; anything else, including no selection, falls back to the generic
summary.  Proof lines restate the derived figures for the reviewer; they
are presentational arithmetic and are never fed back into sizing.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from fieldaudit.common.enums import ReviewBranch, ServiceType
from fieldaudit.core.audit_engine.schemas import (
    AdaptedView,
    DerivedResults,
    RawAuditRecord,
    ReviewMetric,
    ReviewSummary,
)

SERVICE_TITLES: dict[str, str] = {
    ServiceType.SOLAR.value: "Solar & Inverter",
    ServiceType.CCTV.value: "CCTV & Security",
    ServiceType.WIRING.value: "Electrical Wiring",
    ServiceType.GENERATOR.value: "Generator / ATS",
    ServiceType.EARTHING.value: "Earthing & Surge",
    ServiceType.INDUSTRIAL.value: "Industrial Safety",
}

EARTH_RESISTANCE_LIMIT_OHM = 2.0


def select_review_branch(services: Sequence[str] | None) -> ReviewBranch:
    primary = services[0] if services else None
    try:
        return ReviewBranch(primary)
    except ValueError:
        return ReviewBranch.GENERIC


def report_filename(audit_id: str, client_name: str | None, prefix: str = "Primistine_Audit") -> str:
    clean_client = re.sub(r"[^a-zA-Z0-9]", "_", client_name or "Client")
    return f"{prefix}_{audit_id}_{clean_client}.pdf"


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_number(value: float) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


def _f1(value: float) -> str:
    return f"{value:.1f}"


def _earth_resistance(bag: dict[str, Any]) -> float | None:
    value = bag.get("earthingValue")
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return None


# ---------------------------------------------------------------------------
# Per-branch content
# ---------------------------------------------------------------------------


def _solar(r: DerivedResults, bag: dict[str, Any]) -> tuple[list[ReviewMetric], list[str]]:
    metrics = [
        ReviewMetric(label="Total Connected Load", value=round(r.total_load, 2), unit="kW"),
        ReviewMetric(label="Peak Simultaneous Load", value=round(r.peak_load, 2), unit="kW"),
        ReviewMetric(label="Total Daily Energy", value=round(r.daily_energy, 2), unit="kWh/day"),
        ReviewMetric(label="Surge Power Requirement", value=round(r.surge_power, 2), unit="kW"),
        ReviewMetric(label="Recommended Inverter", value=r.rec_inverter, unit="kVA"),
        ReviewMetric(label="Battery Bank", value=r.rec_battery, unit="kWh"),
        ReviewMetric(label="Solar Array", value=r.rec_solar_result, unit="kWp"),
    ]
    coverage_energy = r.daily_energy * r.target_coverage / 100
    proofs = [
        f"Diversity Math: {_f1(r.total_load)}kW × {format_number(r.diversity_factor)} (Div.) = {_f1(r.peak_load)}kW Peak",
        f"Continuous Load Req: {_f1(r.peak_load)}kW × 1.25 (Safety) = {_f1(r.peak_load * 1.25)}kVA",
        f"Surge Load Req: {_f1(r.surge_power)}kW ÷ 2.5 (Surge Limit) = {_f1(r.surge_power / 2.5)}kVA",
        f"Target Autonomy: {format_number(r.est_autonomy)}h Backup Goal",
        f"Daily Independence Goal: {_f1(r.daily_energy)}kWh × {format_number(r.target_coverage)}% × 0.7 = {_f1(coverage_energy * 0.7)}kWh",
        f"Efficiency (DoD Applied, {r.battery_type}): Required Energy ÷ {format_number(r.battery_dod)} = {_f1(r.rec_battery)}kWh",
        f"Solar Requirement: {_f1(coverage_energy)}kWh Daily Demand",
        "Harvesting Factor: 4.5h Peak Sun × 0.8 (System Losses) = 3.6h Effective",
        f"Sizing Result: Requirement ÷ 3.6h = {format_number(r.rec_solar_result)}kWp",
    ]
    return metrics, proofs


def _cctv(r: DerivedResults, bag: dict[str, Any]) -> tuple[list[ReviewMetric], list[str]]:
    metrics = [
        ReviewMetric(label="NVR Channels", value=r.total_cameras, unit="channels"),
        ReviewMetric(label="Storage Required", value=r.storage_required, unit="TB"),
        ReviewMetric(label="Total Cable Length", value=r.total_cable_length, unit="m"),
        ReviewMetric(label="Risk Level", value=bag.get("riskLevel")),
    ]
    proofs = [
        f"Channel Logic: {r.total_cameras} Selected Cameras → Match to Next Standard NVR (4/8/16/32)",
        f"Storage Logic: {r.total_cameras} Cam × 15GB/day (H.265) × 30 Days ≈ {r.storage_required} TB",
        f"Cable Math: {r.total_cameras} Runs × 45m Avg ≈ {format_number(r.total_cable_length)}m Total Copper",
    ]
    return metrics, proofs


def _wiring(r: DerivedResults, bag: dict[str, Any]) -> tuple[list[ReviewMetric], list[str]]:
    resistance = _earth_resistance(bag)
    earthing_ok = bool(bag.get("hasEarthing")) and resistance is not None and resistance < EARTH_RESISTANCE_LIMIT_OHM
    metrics = [
        ReviewMetric(label="Total Connected Load", value=round(r.total_load, 2), unit="kW"),
        ReviewMetric(label="Estimated Peak Load", value=round(r.peak_load, 2), unit="kW"),
        ReviewMetric(label="Recommended Cable Size", value=r.recommended_cable_size),
        ReviewMetric(label="Earthing Verdict", value="PASSED" if earthing_ok else "UPGRADE"),
    ]
    proofs = [
        f"Cable Sizing Logic: {_f1(r.total_load)}kW Load @ 230V → Required Ampacity match to BS7671 standards.",
        f"Headroom Factor: 25% spare capacity included in recommendation ({r.recommended_cable_size}).",
    ]
    return metrics, proofs


def _generator(r: DerivedResults, bag: dict[str, Any]) -> tuple[list[ReviewMetric], list[str]]:
    metrics = [
        ReviewMetric(label="Recommended Generator", value=r.recommended_gen_size, unit="kVA"),
        ReviewMetric(label="Estimated Monthly Fuel", value=r.fuel_cost, unit="NGN"),
        ReviewMetric(label="Total Connected Load", value=round(r.total_load, 2), unit="kW"),
    ]
    proofs = [
        f"Gen Sizing: Total Connected Load ({_f1(r.total_load)}kW) ÷ 0.8 PF × 1.2 Safety Factor.",
        "Opex Estimate: Consumption rate of 0.35L per kVA/hour @ 6 hours daily usage.",
    ]
    return metrics, proofs


def _earthing(r: DerivedResults, bag: dict[str, Any]) -> tuple[list[ReviewMetric], list[str]]:
    resistance = _earth_resistance(bag)
    passed = resistance is not None and resistance < EARTH_RESISTANCE_LIMIT_OHM
    metrics = [
        ReviewMetric(label="Measured Resistance", value=resistance, unit="Ω"),
        ReviewMetric(label="Soil Condition", value=bag.get("soilType")),
        ReviewMetric(label="Compliance", value="PASSED" if passed else "FAILED"),
    ]
    if passed:
        verdict = f"PASSED: < {_f1(EARTH_RESISTANCE_LIMIT_OHM)}Ω"
    else:
        verdict = f"FAILED: > {_f1(EARTH_RESISTANCE_LIMIT_OHM)}Ω"
    return metrics, [verdict]


def _industrial(r: DerivedResults, bag: dict[str, Any]) -> tuple[list[ReviewMetric], list[str]]:
    metrics = [
        ReviewMetric(label="Recommended Inverter", value=r.rec_inverter, unit="kVA"),
        ReviewMetric(label="Recommended Cable Size", value=r.recommended_cable_size),
        ReviewMetric(label="Total Connected Load", value=round(r.total_load, 2), unit="kW"),
    ]
    proofs = [f"Sizing based on {r.total_load:.2f} kW measured facility load."]
    if bag.get("powerFactor") is not None:
        proofs.append(
            f"Power Quality Correction (PFC) Recommended based on {bag['powerFactor']} PF reading."
        )
    return metrics, proofs


def _generic(r: DerivedResults, bag: dict[str, Any], services: Sequence[str]) -> tuple[list[ReviewMetric], list[str]]:
    metrics = [
        ReviewMetric(label="Services Selected", value=len(services)),
        ReviewMetric(label="Total Connected Load", value=round(r.total_load, 2), unit="kW"),
        ReviewMetric(label="Cameras Surveyed", value=r.total_cameras),
        ReviewMetric(label="Load Items", value=len(bag.get("items", []))),
    ]
    proofs = [f"Services surveyed: {', '.join(services) if services else 'None selected'}"]
    return metrics, proofs


_BRANCH_BUILDERS = {
    ReviewBranch.SOLAR: _solar,
    ReviewBranch.CCTV: _cctv,
    ReviewBranch.WIRING: _wiring,
    ReviewBranch.GENERATOR: _generator,
    ReviewBranch.EARTHING: _earthing,
    ReviewBranch.INDUSTRIAL: _industrial,
}


def build_review(
    record: RawAuditRecord,
    view: AdaptedView,
    audit_id: str | None = None,
    filename_prefix: str = "Primistine_Audit",
) -> ReviewSummary:
    """Assemble the review content for *record* from its adapted *view*."""
    branch = select_review_branch(record.services)
    results = view.derived_results
    bag = view.attribute_bag

    if branch is ReviewBranch.GENERIC:
        metrics, proofs = _generic(results, bag, record.services)
        title = "Site Audit Summary"
    else:
        metrics, proofs = _BRANCH_BUILDERS[branch](results, bag)
        title = f"{SERVICE_TITLES[branch.value]} Review"

    filename = None
    if audit_id:
        filename = report_filename(audit_id, view.client_profile.client_name, filename_prefix)

    return ReviewSummary(
        branch=branch.value,
        primary_service=record.primary_service,
        title=title,
        metrics=metrics,
        proof_lines=proofs,
        warnings=[w.model_copy() for w in results.warnings],
        report_filename=filename,
    )
