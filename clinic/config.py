from enum import Enum
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageBackend(Enum):
    JSON = "json"
    MEMORY = "memory"


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CLINIC_", env_file=".env", extra="ignore")

    data_file: Path = Path("data/clinic.json")
    storage: StorageBackend = StorageBackend.JSON
