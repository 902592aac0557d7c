"""Pydantic models for the Audit Derivation Engine.

An audit record is assembled by independent wizard steps, so every layer is
optional and may be half-filled or hold values of the wrong type.  The
field types below absorb that: numbers, lists, flags and text coerce to a
safe default instead of failing validation, which lets the normalizer and
sizing engine work on any record that parses as a mapping.

Wire keys are camelCase (``clientName``, ``hazardsList``) and map onto
snake_case attributes through an alias generator.  Keys the models do not
declare are kept as extras so that nothing the wizard wrote is lost.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Lenient field types
# ---------------------------------------------------------------------------


def _as_number(value: Any) -> float:
    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, (bool, int, float)):
        return 0.0
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _as_text(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        try:
            return str(value)
        except ValueError:
            # ints beyond the interpreter's str-conversion digit limit
            return None
    return None


def _as_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "y", "1", "on")
    if isinstance(value, (bool, int, float)):
        return bool(value)
    return False


def _as_list(value: Any) -> list:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _as_record_list(value: Any) -> list:
    # Non-mapping entries still count towards list length (camera runs etc.)
    return [v if isinstance(v, (Mapping, BaseModel)) else {} for v in _as_list(value)]


def _as_mapping(value: Any) -> Any:
    if isinstance(value, (Mapping, BaseModel)):
        return value
    return None


def _as_services(value: Any) -> list[str]:
    texts = (_as_text(v) for v in _as_list(value) if not isinstance(v, bool))
    return [t for t in texts if t is not None]


Number = Annotated[float, BeforeValidator(_as_number)]
Text = Annotated[str | None, BeforeValidator(_as_text)]
Flag = Annotated[bool, BeforeValidator(_as_flag)]
AnyList = Annotated[list[Any], BeforeValidator(_as_list)]


class SurveyLayer(BaseModel):
    """Common configuration for every open-shaped record layer."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )


# ---------------------------------------------------------------------------
# Record layers
# ---------------------------------------------------------------------------


class ClientInfo(SurveyLayer):
    id: Text = None
    lead_id: Text = None
    client_name: Text = None
    phone: Text = None
    email: Text = None
    address: Text = None
    gps: Any = None
    building_type: Text = None
    ownership: Text = None
    floors: Any = None
    landlord_contact: Text = None
    photos: AnyList = Field(default_factory=list)
    audit_date: Text = None
    engineer_name: Text = None


class CameraEntry(SurveyLayer):
    quantity: Number = Field(1, alias="qty")
    type: Text = None
    resolution: Text = None


class SiteSurvey(SurveyLayer):
    roof_material: Text = None
    captured_orientation: Any = None
    captured_tilt: Any = None
    obstructions: AnyList = Field(default_factory=list)
    hazards_list: AnyList = Field(default_factory=list)
    building_age: Any = None
    soil_type: Text = None
    lightning_risk: Any = None
    risk_level: Any = None
    photos: AnyList = Field(default_factory=list)
    cameras: Annotated[list[CameraEntry], BeforeValidator(_as_record_list)] = Field(
        default_factory=list
    )


class LoadItem(SurveyLayer):
    name: Text = None
    power: Number = Field(0, description="Rated power in watts")
    quantity: Number = Field(1, alias="qty")
    hours: Number = Field(0, description="Hours of use per day")
    category: Text = None
    critical: Flag = False


class LoadStats(SurveyLayer):
    """Aggregates computed by the load-inventory step; inputs, never recomputed."""

    total_load: Number = Field(0, description="Connected load in kW")
    total_daily_energy: Number = Field(0, description="Daily energy in kWh")
    critical_load: Number = Field(0, description="Critical load in kW")
    peak_simultaneous_load: Number = Field(0, description="Peak load in kW")
    surge_power: Number = Field(0, description="Surge power in kW")


class LoadSurvey(SurveyLayer):
    items: Annotated[list[LoadItem], BeforeValidator(_as_record_list)] = Field(
        default_factory=list
    )
    cameras: Annotated[list[CameraEntry], BeforeValidator(_as_record_list)] = Field(
        default_factory=list
    )
    machinery: AnyList = Field(default_factory=list)
    stats: Annotated[LoadStats | None, BeforeValidator(_as_mapping)] = None


class InfraSurvey(SurveyLayer):
    db_type: Text = None
    db_condition: Any = None
    mcb_quality: Text = None
    earthing_type: Text = None
    earthing_value: Any = None
    gen_exists: Any = None
    gen_capacity: Any = None
    ats_type: Text = None
    ats_rating: Any = None
    cable_type: Text = None


class DesignWarning(SurveyLayer):
    component: Text = None
    message: Text = None


class DesignSurvey(SurveyLayer):
    recommended_inverter: Number = Field(0, description="Inverter size in kVA")
    battery_capacity: Number = Field(0, description="Battery bank in kWh")
    solar_array_size: Number = Field(0, description="PV array in kWp")
    backup_hours: Number = 0
    independence_level: Number = 0
    monthly_savings: Number = 0
    payback_years: Number = 0
    total_system_cost_estimate: Number = 0
    battery_type: Text = None
    target_coverage: Number = Field(0, description="Target solar coverage in percent")
    warnings: Annotated[list[DesignWarning], BeforeValidator(_as_record_list)] = Field(
        default_factory=list
    )


class RawAuditRecord(SurveyLayer):
    """An audit as captured by the wizard; any layer may be missing."""

    id: Text = None
    client: Annotated[ClientInfo | None, BeforeValidator(_as_mapping)] = None
    site: Annotated[SiteSurvey | None, BeforeValidator(_as_mapping)] = None
    load: Annotated[LoadSurvey | None, BeforeValidator(_as_mapping)] = None
    infra: Annotated[InfraSurvey | None, BeforeValidator(_as_mapping)] = None
    design: Annotated[DesignSurvey | None, BeforeValidator(_as_mapping)] = None
    services: Annotated[list[str], BeforeValidator(_as_services)] = Field(
        default_factory=list
    )
    engineer: Text = None

    @property
    def primary_service(self) -> str | None:
        return self.services[0] if self.services else None


# ---------------------------------------------------------------------------
# Engine configuration
# ---------------------------------------------------------------------------


class AuditEngineConfig(BaseModel):
    """Business-rule constants used by the normalizer and the sizing engine."""

    model_config = ConfigDict(frozen=True)

    engineer_placeholder: str = "Demo Engineer"
    default_battery_type: str = "Lithium"
    lead_acid_battery_type: str = "Lead-acid"
    lead_acid_dod: float = 0.5
    default_dod: float = 0.8
    diversity_item_threshold: int = 10
    diversity_factor_large: float = 0.65
    diversity_factor_small: float = 0.8
    storage_tb_per_camera: float = 0.5
    cable_run_per_camera_m: float = 45.0
    generator_headroom_factor: float = 1.5
    cable_size_threshold_kw: float = 10.0
    cable_size_large: str = "16mm²"
    cable_size_small: str = "10mm²"
    fuel_cost_per_kw_month: float = 15_000.0

    @classmethod
    def from_settings(cls) -> AuditEngineConfig:
        from fieldaudit.config import settings

        return cls(
            engineer_placeholder=settings.ENGINEER_PLACEHOLDER,
            default_battery_type=settings.DEFAULT_BATTERY_TYPE,
            lead_acid_battery_type=settings.LEAD_ACID_BATTERY_TYPE,
            lead_acid_dod=settings.LEAD_ACID_DOD,
            default_dod=settings.DEFAULT_DOD,
            diversity_item_threshold=settings.DIVERSITY_ITEM_THRESHOLD,
            diversity_factor_large=settings.DIVERSITY_FACTOR_LARGE,
            diversity_factor_small=settings.DIVERSITY_FACTOR_SMALL,
            storage_tb_per_camera=settings.STORAGE_TB_PER_CAMERA,
            cable_run_per_camera_m=settings.CABLE_RUN_PER_CAMERA_M,
            generator_headroom_factor=settings.GENERATOR_HEADROOM_FACTOR,
            cable_size_threshold_kw=settings.CABLE_SIZE_THRESHOLD_KW,
            cable_size_large=settings.CABLE_SIZE_LARGE,
            cable_size_small=settings.CABLE_SIZE_SMALL,
            fuel_cost_per_kw_month=settings.FUEL_COST_PER_KW_MONTH,
        )


# ---------------------------------------------------------------------------
# Engine output
# ---------------------------------------------------------------------------


class ClientProfile(SurveyLayer):
    """Flattened client fields plus resolved photos and engineer name."""

    client_name: Text = None
    photos: list[Any] = Field(default_factory=list)
    gps: Any = None
    site_photos: list[Any] = Field(default_factory=list)
    engineer_name: str


class NormalizedAudit(BaseModel):
    client_profile: ClientProfile
    attribute_bag: dict[str, Any]


class DerivedResults(BaseModel):
    """Sizing results handed to every review, export and quote consumer."""

    # Shared load figures
    total_load: float = 0.0
    daily_energy: float = 0.0
    critical_load: float = 0.0
    peak_load: float = 0.0
    surge_power: float = 0.0

    # Solar & power (carried from the design step)
    rec_inverter: float = 0.0
    rec_battery: float = 0.0
    rec_solar_result: float = 0.0
    est_autonomy: float = 0.0
    independence: float = 0.0
    monthly_savings: float = 0.0
    payback: float = 0.0
    total_cost: float = 0.0

    # Proof-display coefficients
    battery_type: str = "Lithium"
    battery_dod: float = 0.8
    diversity_factor: float = 0.8
    target_coverage: float = 0.0

    # CCTV
    total_cameras: int = 0
    storage_required: int = Field(0, description="NVR storage in TB")
    total_cable_length: float = Field(0.0, description="Cable run in metres")

    # Generator & wiring
    recommended_gen_size: int = Field(0, description="Generator size in kVA")
    recommended_cable_size: str = "10mm²"
    fuel_cost: int = Field(0, description="Monthly fuel estimate")

    warnings: list[DesignWarning] = Field(default_factory=list)


class AdaptedView(BaseModel):
    """Canonical engine output: profile, merged attributes and sizing results."""

    client_profile: ClientProfile
    attribute_bag: dict[str, Any]
    derived_results: DerivedResults


# ---------------------------------------------------------------------------
# Review summaries
# ---------------------------------------------------------------------------


class ReviewMetric(BaseModel):
    label: str
    value: str | float | int | None
    unit: str | None = None


class ReviewSummary(BaseModel):
    """Logical content of one review screen; layout is left to the client."""

    branch: str
    primary_service: str | None
    title: str
    metrics: list[ReviewMetric] = Field(default_factory=list)
    proof_lines: list[str] = Field(default_factory=list)
    warnings: list[DesignWarning] = Field(default_factory=list)
    report_filename: str | None = None
