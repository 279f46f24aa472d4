# terralink/config.py
# ------------------------------------------------------------
# Central configuration using pydantic-settings.
#
# All values can be overridden via environment variables
# prefixed with TERRALINK_ (e.g. TERRALINK_DATA_PATH).
# ------------------------------------------------------------

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional

from .models import Thresholds


class Settings(BaseSettings):
    """
    Runtime configuration for the backend.
    """

    model_config = SettingsConfigDict(
        env_prefix="TERRALINK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --------------------------------------------------------
    # Dataset
    # --------------------------------------------------------
    # JSON array of readings; when unset a synthetic sample is built
    data_path: Optional[str] = None
    sample_seed: Optional[int] = 42
    sample_days: int = 14

    # --------------------------------------------------------
    # Alert thresholds (detection engine defaults)
    # --------------------------------------------------------
    drought_soil_pct: float = 12
    high_temp_c: float = 32
    flood_rain_mm_day: float = 40

    # --------------------------------------------------------
    # CORS / Frontend integration
    # --------------------------------------------------------
    api_cors_origins: str = (
        "http://localhost:5173,"
        "http://localhost:3000"
    )

    # --------------------------------------------------------
    # Live simulation
    # --------------------------------------------------------
    generators_enabled: bool = True
    live_rate_sec: int = 2

    log_level: str = "INFO"

    # --------------------------------------------------------
    # Helpers
    # --------------------------------------------------------
    def cors_list(self) -> List[str]:
        """
        Parse comma-separated CORS origins into a clean list.
        """
        return [
            x.strip()
            for x in self.api_cors_origins.split(",")
            if x.strip()
        ]

    def thresholds(self) -> Thresholds:
        return Thresholds(
            drought_soil_pct=self.drought_soil_pct,
            high_temp_c=self.high_temp_c,
            flood_rain_mm_day=self.flood_rain_mm_day,
        )


# Singleton settings object
settings = Settings()
