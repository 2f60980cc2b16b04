from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "SharkPicks"
    odds_api_key: str = ""
    odds_api_base_url: str = "https://api.the-odds-api.com/v4"
    odds_api_regions: str = "us"
    odds_api_markets: str = "h2h"
    odds_api_odds_format: str = "decimal"
    odds_api_date_format: str = "iso"
    odds_api_timeout_seconds: float = 20.0
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
