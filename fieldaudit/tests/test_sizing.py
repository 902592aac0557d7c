import math

import pytest

from fieldaudit.core.audit_engine.schemas import (
    AuditEngineConfig,
    DesignSurvey,
    LoadStats,
)
from fieldaudit.core.audit_engine.service import adapt_audit
from fieldaudit.core.audit_engine.sizing import derive


def _derive(total_load=0.0, items=0, cameras=0, fallback=0, design=None, config=None):
    bag = {"items": [{}] * items, "cameras": [{}] * cameras}
    return derive(
        bag,
        LoadStats(total_load=total_load),
        design,
        fallback_cameras=[{}] * fallback,
        config=config,
    )


def test_empty_record_defaults_every_field():
    results = adapt_audit({}).derived_results
    for name, value in results.model_dump().items():
        if isinstance(value, float):
            assert math.isfinite(value), name
            assert value in (0.0, 0.8), name
        elif isinstance(value, int) and not isinstance(value, bool):
            assert value == 0, name
    assert results.battery_type == "Lithium"
    assert results.battery_dod == 0.8
    assert results.diversity_factor == 0.8
    assert results.recommended_cable_size == "10mm²"
    assert results.warnings == []


@pytest.mark.parametrize(
    "total_load,expected",
    [(0.0, "10mm²"), (10.0, "10mm²"), (10.01, "16mm²"), (25.0, "16mm²")],
)
def test_cable_size_threshold(total_load, expected):
    assert _derive(total_load=total_load).recommended_cable_size == expected


def test_generator_and_fuel_arithmetic():
    results = _derive(total_load=7)
    assert results.recommended_gen_size == 11
    assert results.fuel_cost == 105000


def test_camera_storage_and_cable_arithmetic():
    results = _derive(cameras=5)
    assert results.total_cameras == 5
    assert results.storage_required == 3
    assert results.total_cable_length == 225


def test_camera_fallback_to_site_survey():
    assert _derive(cameras=0, fallback=1).total_cameras == 1
    assert _derive(cameras=2, fallback=5).total_cameras == 2
    assert _derive().total_cameras == 0


def test_camera_fallback_through_full_record():
    record = {"load": {"cameras": []}, "site": {"cameras": [{"qty": 3}]}}
    assert adapt_audit(record).derived_results.total_cameras == 1


@pytest.mark.parametrize("items,expected", [(0, 0.8), (10, 0.8), (11, 0.65), (40, 0.65)])
def test_diversity_threshold(items, expected):
    assert _derive(items=items).diversity_factor == expected


@pytest.mark.parametrize(
    "battery_type,expected_type,expected_dod",
    [(None, "Lithium", 0.8), ("Lithium", "Lithium", 0.8), ("Lead-acid", "Lead-acid", 0.5), ("Gel", "Gel", 0.8)],
)
def test_battery_depth_of_discharge(battery_type, expected_type, expected_dod):
    results = _derive(design=DesignSurvey(battery_type=battery_type))
    assert results.battery_type == expected_type
    assert results.battery_dod == expected_dod


def test_design_values_pass_through_unchanged(solar_record):
    results = adapt_audit(solar_record).derived_results
    assert results.rec_inverter == 5
    assert results.rec_battery == 10
    assert results.rec_solar_result == 6
    assert results.est_autonomy == 8
    assert results.independence == 70
    assert results.monthly_savings == 85000
    assert results.payback == 3.5
    assert results.total_cost == 4500000
    assert results.target_coverage == 80


def test_load_aggregates_are_not_recomputed(solar_record):
    # items sum to well under 4.5kW; the upstream aggregate is taken as given
    results = adapt_audit(solar_record).derived_results
    assert results.total_load == 4.5
    assert results.daily_energy == 18.5
    assert results.critical_load == 1.5
    assert results.peak_load == 3.6
    assert results.surge_power == 6.0
    assert results.recommended_gen_size == 7
    assert results.fuel_cost == 67500


@pytest.mark.parametrize("raw", ["abc", None, [], {"kw": 3}, float("nan"), float("inf")])
def test_dirty_numbers_count_as_zero(raw):
    results = adapt_audit({"load": {"stats": {"totalLoad": raw}}}).derived_results
    assert results.total_load == 0
    assert results.recommended_gen_size == 0


def test_numeric_strings_are_parsed():
    results = adapt_audit({"load": {"stats": {"totalLoad": "12.5"}}}).derived_results
    assert results.total_load == 12.5
    assert results.recommended_cable_size == "16mm²"


def test_overflowing_products_stay_finite():
    results = _derive(total_load=1.7e308)
    assert results.total_load == 1.7e308
    assert results.recommended_gen_size == 0
    assert results.fuel_cost == 0


def test_config_overrides_coefficients():
    config = AuditEngineConfig(
        storage_tb_per_camera=1.0,
        cable_run_per_camera_m=30.0,
        cable_size_threshold_kw=5.0,
    )
    results = _derive(total_load=6, cameras=3, config=config)
    assert results.storage_required == 3
    assert results.total_cable_length == 90
    assert results.recommended_cable_size == "16mm²"


def test_warnings_are_copied(solar_record):
    view = adapt_audit(solar_record)
    warning = view.derived_results.warnings[0]
    assert warning.component == "Battery"
    assert warning.message == "Autonomy below target"

    warning.message = "changed"
    assert solar_record["design"]["warnings"][0]["message"] == "Autonomy below target"
    assert adapt_audit(solar_record).derived_results.warnings[0].message == "Autonomy below target"


def test_fuel_overflows_before_generator():
    results = _derive(total_load=1e308)
    assert results.recommended_gen_size == math.ceil(1e308 * 1.5)
    assert results.fuel_cost == 0


@pytest.mark.parametrize("raw", [10**400, -(10**400), "1e400"])
def test_numbers_beyond_float_range_count_as_zero(raw):
    view = adapt_audit({"load": {"stats": {"totalLoad": raw}}, "design": {"recommendedInverter": raw}})
    assert view.derived_results.total_load == 0
    assert view.derived_results.rec_inverter == 0
    assert view.derived_results.recommended_gen_size == 0
