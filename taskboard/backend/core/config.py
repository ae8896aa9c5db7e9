# taskboard/backend/core/config.py
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_ORIGINS = "http://localhost:3000,http://localhost:5173,http://localhost:8000"


class Settings(BaseSettings):
    app_name: str = Field("Taskboard API", alias="APP_NAME")
    app_version: str = Field("0.1.0", alias="APP_VERSION")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    cors_allow_origins: str = Field(_DEFAULT_ORIGINS, alias="CORS_ALLOW_ORIGINS")

    # create tables on startup instead of `alembic upgrade head`
    db_auto_create: bool = Field(False, alias="DB_AUTO_CREATE")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


settings = Settings()
