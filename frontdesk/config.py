from enum import Enum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreAdapter(Enum):
    MEMORY = "memory"


class StoreConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FRONTDESK_STORE_", env_file=".env", extra="ignore")

    adapter: StoreAdapter = StoreAdapter.MEMORY
    seed_sample_data: bool = True


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FRONTDESK_", env_file=".env", extra="ignore")

    clinic_name: str = "HealthCare Pro"
    clinic_timezone: str = "America/New_York"
    settings_file: Path = Path("healthcare_settings.properties")
    log_level: str = "INFO"
    store: StoreConfig = Field(default_factory=lambda: StoreConfig())
