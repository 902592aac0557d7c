from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "postgresql+asyncpg://fieldaudit:fieldaudit_dev@db:5432/fieldaudit"

    # App
    APP_ENV: str = "development"
    ALLOWED_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Audit engine
    ENGINEER_PLACEHOLDER: str = "Demo Engineer"
    DEFAULT_BATTERY_TYPE: str = "Lithium"
    LEAD_ACID_BATTERY_TYPE: str = "Lead-acid"
    LEAD_ACID_DOD: float = 0.5
    DEFAULT_DOD: float = 0.8
    DIVERSITY_ITEM_THRESHOLD: int = 10
    DIVERSITY_FACTOR_LARGE: float = 0.65
    DIVERSITY_FACTOR_SMALL: float = 0.8
    STORAGE_TB_PER_CAMERA: float = 0.5
    CABLE_RUN_PER_CAMERA_M: float = 45.0
    GENERATOR_HEADROOM_FACTOR: float = 1.5
    CABLE_SIZE_THRESHOLD_KW: float = 10.0
    CABLE_SIZE_LARGE: str = "16mm²"
    CABLE_SIZE_SMALL: str = "10mm²"
    FUEL_COST_PER_KW_MONTH: float = 15_000.0

    # Quote pricing (NGN)
    INVERTER_PRICE_PER_KVA: float = 120_000.0
    BATTERY_PRICE_PER_KWH: float = 95_000.0
    SOLAR_PRICE_PER_KWP: float = 160_000.0
    CCTV_CAMERA_PRICE: float = 45_000.0
    CCTV_NVR_PRICE: float = 150_000.0
    CCTV_CABLE_COIL_PRICE: float = 65_000.0
    CCTV_DEFAULT_CAMERA_COUNT: int = 4

    # Projects & reports
    PROJECT_DUE_DAYS: int = 30
    REPORT_FILENAME_PREFIX: str = "Primistine_Audit"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
