from pathlib import Path
from pydantic import AliasChoices, Field
from pydantic_settings import (
    BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict, YamlConfigSettingsSource
)
from typing import List, Optional, Tuple, Type

PROJECT_ROOT = Path(__file__).resolve().parents[2]
SECRETS_FILE = "secrets.yml"

def find_secrets_file() -> Optional[Path]:
    """secrets.yml from the working directory, else from the project root"""
    for candidate in (Path.cwd() / SECRETS_FILE, PROJECT_ROOT / SECRETS_FILE):
        if candidate.is_file():
            return candidate
    return None

class Settings(BaseSettings):
    # App Info
    app_name: str = "Retail Back-Office API"
    version: str = "1.0.0"
    debug: bool = False
    git_commit: Optional[str] = None

    # Database
    database_url: Optional[str] = None
    db_host: str = Field(
        default="localhost",
        validation_alias=AliasChoices("db_host", "db_url"),
        description="PostgreSQL host; DB_URL / db_url is accepted as well"
    )
    db_port: int = 5432
    db_name: str = "postgres"
    db_user: str = "postgres"
    db_password: str = "postgres"
    database_schema: Optional[str] = Field(
        default=None,
        description="Schema used for every table (schema_translate_map)"
    )
    auto_migrate: bool = True

    # Checkout / reports
    checkout_lock_timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Maximum wait for a product lock; unset waits indefinitely"
    )
    report_isolation_level: str = "REPEATABLE READ"

    # CORS
    allowed_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Logging
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # Keys present in secrets.yml win; missing ones fall back to env / .env
        secrets = YamlConfigSettingsSource(settings_cls, yaml_file=find_secrets_file())
        return init_settings, secrets, env_settings, dotenv_settings, file_secret_settings

    @property
    def sqlalchemy_database_url(self) -> str:
        """Full URL; built from the PostgreSQL parts when DATABASE_URL is unset"""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+psycopg2://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

settings = Settings()
