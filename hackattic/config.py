from pydantic import ConfigDict, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Platform
    base_url: str = "https://hackattic.com"
    access_token: str = ""

    # HTTP client
    http_timeout_seconds: float = 30.0
    http_max_idle_connections: int = 100
    http_max_connections_per_host: int = 100
    http_max_idle_connections_per_host: int = 10
    http_idle_connection_timeout_seconds: float = 90.0
    http_keep_alive: bool = True

    # Password hashing
    scrypt_max_memory: int = 1 << 30  # 1 GiB

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"  # console | json

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Keep base URL joinable with endpoints that start with '/'."""
        return v.rstrip("/")

    @field_validator("access_token", mode="before")
    @classmethod
    def strip_access_token(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


settings = Settings()
