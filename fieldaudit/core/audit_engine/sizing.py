"""Sizing engine: derives engineering recommendations from a normalized audit.

Generator, cable, CCTV storage/cabling and fuel figures are computed here
from the upstream load aggregates.  Inverter, battery and array sizes are
*not* solved here; they come from the external design step and are carried
forward next to the coefficients (DoD, diversity, coverage) that reviewers
use to explain them.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from fieldaudit.core.audit_engine.schemas import (
    AuditEngineConfig,
    DerivedResults,
    DesignSurvey,
    LoadStats,
)

_DEFAULT_CONFIG = AuditEngineConfig()


# ---------------------------------------------------------------------------
# Individual rules
# ---------------------------------------------------------------------------


def _ceil(value: float) -> int:
    # an overflowed product (inf) counts as zero
    return math.ceil(value) if math.isfinite(value) else 0


def _count(value: Any) -> int:
    return len(value) if isinstance(value, (list, tuple)) else 0


def resolve_camera_count(load_cameras: Any, fallback_cameras: Any = ()) -> int:
    """Cameras listed in the load survey; the site survey only if that is empty."""
    return _count(load_cameras) or _count(fallback_cameras) or 0


def battery_depth_of_discharge(battery_type: str | None, config: AuditEngineConfig) -> float:
    if battery_type == config.lead_acid_battery_type:
        return config.lead_acid_dod
    return config.default_dod


def diversity_factor(item_count: int, config: AuditEngineConfig) -> float:
    if item_count > config.diversity_item_threshold:
        return config.diversity_factor_large
    return config.diversity_factor_small


def recommended_cable_size(total_load_kw: float, config: AuditEngineConfig) -> str:
    if total_load_kw > config.cable_size_threshold_kw:
        return config.cable_size_large
    return config.cable_size_small


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def derive(
    attribute_bag: dict[str, Any],
    load_stats: LoadStats | None,
    design: DesignSurvey | None,
    *,
    fallback_cameras: Sequence[Any] = (),
    config: AuditEngineConfig | None = None,
) -> DerivedResults:
    """Compute the canonical sizing results.

    Parameters
    ----------
    attribute_bag:
        Merged bag from ``normalize``; ``items`` and ``cameras`` are read.
    load_stats:
        Aggregates produced by the load-inventory step, or ``None``.
    design:
        Values produced by the system-design step, or ``None``.
    fallback_cameras:
        Site-survey camera list, used only when the load survey lists none.
    config:
        Business-rule constants; defaults to ``AuditEngineConfig()``.

    Returns
    -------
    DerivedResults
        Every numeric field populated; missing inputs count as zero.
    """
    config = config or _DEFAULT_CONFIG
    stats = load_stats or LoadStats()
    design = design or DesignSurvey()

    total_load = stats.total_load
    cameras = resolve_camera_count(attribute_bag.get("cameras"), fallback_cameras)

    return DerivedResults(
        total_load=total_load,
        daily_energy=stats.total_daily_energy,
        critical_load=stats.critical_load,
        peak_load=stats.peak_simultaneous_load,
        surge_power=stats.surge_power,
        rec_inverter=design.recommended_inverter,
        rec_battery=design.battery_capacity,
        rec_solar_result=design.solar_array_size,
        est_autonomy=design.backup_hours,
        independence=design.independence_level,
        monthly_savings=design.monthly_savings,
        payback=design.payback_years,
        total_cost=design.total_system_cost_estimate,
        battery_type=design.battery_type or config.default_battery_type,
        battery_dod=battery_depth_of_discharge(design.battery_type, config),
        diversity_factor=diversity_factor(_count(attribute_bag.get("items")), config),
        target_coverage=design.target_coverage,
        total_cameras=cameras,
        storage_required=_ceil(cameras * config.storage_tb_per_camera),
        total_cable_length=cameras * config.cable_run_per_camera_m,
        recommended_gen_size=_ceil(total_load * config.generator_headroom_factor),
        recommended_cable_size=recommended_cable_size(total_load, config),
        fuel_cost=_ceil(total_load * config.fuel_cost_per_kw_month),
        warnings=[w.model_copy(deep=True) for w in design.warnings],
    )
