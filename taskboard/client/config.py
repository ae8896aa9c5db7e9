# taskboard/client/config.py
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    api_url: str = Field("http://localhost:8000", alias="TASKBOARD_API_URL")
    timeout_sec: float = Field(10.0, alias="TASKBOARD_TIMEOUT_SEC")
    log_level: str = Field("WARNING", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
