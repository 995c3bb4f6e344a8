from typing import List, Union, Optional
from pydantic import AnyHttpUrl, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Values of domain.placement.candidates.IsolationPolicy
ISOLATION_POLICIES = ("strict", "preferred", "ignore")

class Settings(BaseSettings):
    PROJECT_NAME: str = "Hospital Bed Planner"
    API_V1_STR: str = "/api/v1"

    # CORS
    BACKEND_CORS_ORIGINS: List[AnyHttpUrl] = []

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # Database
    DATABASE_URL: str = "sqlite:///./bed_planner.db"
    DEBUG: bool = False

    @model_validator(mode='after')
    def normalize_db_connection(self) -> 'Settings':
        # Sessions are synchronous, so async drivers are swapped for their sync counterpart
        if self.DATABASE_URL.startswith("postgresql://"):
            self.DATABASE_URL = self.DATABASE_URL.replace("postgresql://", "postgresql+psycopg2://", 1)
        elif self.DATABASE_URL.startswith("postgresql+asyncpg://"):
            self.DATABASE_URL = self.DATABASE_URL.replace("postgresql+asyncpg://", "postgresql+psycopg2://", 1)
        return self

    # Logging
    LOG_LEVEL: str = "INFO"

    # Bed locks
    BED_LOCK_BACKEND: str = "memory"
    REDIS_URL: Optional[str] = None
    BED_LOCK_TIMEOUT_SECONDS: int = 30
    BED_LOCK_WAIT_SECONDS: float = 5.0

    # Placement
    PLACEMENT_MAX_ATTEMPTS: int = 3
    ISOLATION_POLICY: str = "strict"

    @field_validator("PLACEMENT_MAX_ATTEMPTS")
    @classmethod
    def validate_max_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("PLACEMENT_MAX_ATTEMPTS must be at least 1")
        return v

    @field_validator("BED_LOCK_BACKEND", "ISOLATION_POLICY", "LOG_LEVEL", mode="before")
    @classmethod
    def normalize_choice(cls, v: str) -> str:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("ISOLATION_POLICY")
    @classmethod
    def validate_isolation_policy(cls, v: str) -> str:
        if v not in ISOLATION_POLICIES:
            raise ValueError(f"ISOLATION_POLICY must be one of: {', '.join(ISOLATION_POLICIES)}")
        return v

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env", extra='ignore')

settings = Settings()
