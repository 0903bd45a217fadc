"""
Configuration settings for the Solar Grid SOC service
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, overridable via SOLAR_SOC_* environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="SOLAR_SOC_",
        env_file=Path(__file__).parent.parent / ".env",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Solar Grid Security Operations Center"
    log_level: str = "INFO"

    # Live simulation
    auto_refresh: bool = True
    tick_interval_seconds: float = 7.0

    # Generation policy
    retention_days: int = 30
    threat_probability: float = 0.2
    firewall_probability: float = 0.4
    status_change_probability: float = 0.1
    failed_login_probability: float = 0.05

    # None -> seeded from the platform source (not reproducible)
    random_seed: Optional[int] = None


settings = Settings()
