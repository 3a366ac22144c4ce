from typing import List

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from detour.models.route import CongestionLevel


class SynthesisConfig(BaseModel):
    """Explicit per-synthesis configuration handed to the orchestrator"""

    osrm_base_url: str
    routing_profile: str
    detour_distance_m: float
    max_intersections: int
    strip_alternative: bool
    request_timeout: float
    congestion_levels: List[CongestionLevel]

    model_config = ConfigDict(frozen=True)

    @field_validator("congestion_levels")
    @classmethod
    def _check_congestion_levels(cls, levels: List[CongestionLevel]) -> List[CongestionLevel]:
        if not levels:
            raise ValueError("congestion_levels must name at least one level")
        return levels


class Settings(BaseSettings):
    # API configuration
    api_version: str = "1.0"

    # Routing backend (OSRM) configuration
    osrm_base_url: str = "http://localhost:5000"
    routing_profile: str = "driving"
    request_timeout: float = 10.0

    # Alternative route synthesis
    detour_distance_m: float = 100.0
    max_intersections: int = 10
    strip_alternative: bool = False
    congestion_levels: List[str] = ["heavy", "moderate"]

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def synthesis_config(self) -> SynthesisConfig:
        return SynthesisConfig(
            osrm_base_url=self.osrm_base_url.rstrip("/"),
            routing_profile=self.routing_profile,
            detour_distance_m=self.detour_distance_m,
            max_intersections=self.max_intersections,
            strip_alternative=self.strip_alternative,
            request_timeout=self.request_timeout,
            congestion_levels=list(self.congestion_levels),
        )


settings = Settings()
