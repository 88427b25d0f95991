"""Application configuration using Pydantic Settings."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    app_name: str = "SchoolDesk"
    debug: bool = False

    # MongoDB
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_db_name: str = "schooldesk"
    mongodb_timeout_ms: int = 5000

    # Writes that lose an optimistic-concurrency race are re-applied this many times
    write_conflict_retries: int = 3

    # Finance
    currency_symbol: str = "$"
    default_base_salary: float = 250.0  # seeded into each teacher's monthly payroll record

    # CORS (comma-separated origins)
    cors_origins: str = "http://localhost:3000"


settings = Settings()
