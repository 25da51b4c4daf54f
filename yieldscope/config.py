from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Financial Modeling Prep. The key may be left blank; the provider then answers 401/403.
    FMP_API_KEY: str = ""
    FMP_BASE_URL: str = "https://financialmodelingprep.com/api"

    # Seconds before a treasury request is abandoned.
    YIELDSCOPE_HTTP_TIMEOUT: float = 15.0
    # 0.0 keeps the exact short-vs-long comparison for "Flat".
    YIELDSCOPE_FLAT_TOLERANCE: float = 0.0
    YIELDSCOPE_LOG_LEVEL: str = "WARNING"

    @property
    def fmp_api_key(self) -> str:
        return self.FMP_API_KEY

    @property
    def fmp_base_url(self) -> str:
        return (self.FMP_BASE_URL or "https://financialmodelingprep.com/api").rstrip("/")

    @property
    def http_timeout(self) -> float:
        return float(self.YIELDSCOPE_HTTP_TIMEOUT)

    @property
    def flat_tolerance(self) -> float:
        return max(0.0, float(self.YIELDSCOPE_FLAT_TOLERANCE))

    @property
    def log_level(self) -> str:
        return (self.YIELDSCOPE_LOG_LEVEL or "WARNING").strip().upper()


def load_settings() -> Settings:
    return Settings()
