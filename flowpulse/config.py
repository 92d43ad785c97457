"""Centralized configuration using Pydantic Settings.

Configuration can be overridden via environment variables:
- FP_PIPELINE_DEFAULT_TOP_N=100
- FP_REPAIR_POLICY=validate_only
- FP_SOURCE_DATA_DIR=/path/to/data
- FP_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Tuple

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PipelineConfig(BaseSettings):
    """Ranking and weighting settings.

    Environment variables prefixed with FP_PIPELINE_.
    """

    model_config = SettingsConfigDict(env_prefix="FP_PIPELINE_")

    default_top_n: int = 50
    top_n_choices: Tuple[int, ...] = (50, 100, 200)
    min_weight: float = 0.8
    max_weight: float = 14.0
    emphasis_exponent: float = 1.15
    chart_limit: int = 15
    table_limit: int = 100

    @field_validator("top_n_choices")
    @classmethod
    def _positive_choices(cls, value: Tuple[int, ...]) -> Tuple[int, ...]:
        if not value or any(n <= 0 for n in value):
            raise ValueError("top_n_choices must hold positive integers")
        return value

    @model_validator(mode="after")
    def _check_ranges(self) -> "PipelineConfig":
        if self.default_top_n not in self.top_n_choices:
            raise ValueError(
                f"default_top_n {self.default_top_n} is not one of {self.top_n_choices}"
            )
        if self.max_weight <= self.min_weight:
            raise ValueError("max_weight must be greater than min_weight")
        return self


class RepairConfig(BaseSettings):
    """Coordinate repair policy.

    Environment variables prefixed with FP_REPAIR_.
    """

    model_config = SettingsConfigDict(env_prefix="FP_REPAIR_")

    policy: Literal["western_hemisphere", "validate_only"] = "western_hemisphere"


class SourceConfig(BaseSettings):
    """Location of the default flow table.

    Environment variables prefixed with FP_SOURCE_.
    """

    model_config = SettingsConfigDict(env_prefix="FP_SOURCE_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    data_file: str = "sample_flows.csv"
    encoding: str = "utf-8-sig"

    @property
    def data_path(self) -> Path:
        """Full path to the default flow table."""
        return self.data_dir / self.data_file


class RenderingConfig(BaseSettings):
    """Flow map appearance.

    Environment variables prefixed with FP_MAP_.
    """

    model_config = SettingsConfigDict(env_prefix="FP_MAP_")

    output_file: str = "flow_map.html"
    south: float = 24.0
    west: float = -126.0
    north: float = 50.0
    east: float = -66.0
    leisure_color: str = "#3b82f6"
    business_color: str = "#8b5cf6"
    point_color: str = "#0f172a"
    line_opacity: float = 0.65
    point_radius: int = 3

    @property
    def bounds(self) -> list[list[float]]:
        """South-west and north-east corners as folium expects them."""
        return [[self.south, self.west], [self.north, self.east]]


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with FP_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="FP_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.pipeline.default_top_n)
        print(config.source.data_path)

    Environment variables prefixed with FP_.
    """

    model_config = SettingsConfigDict(env_prefix="FP_")

    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    repair: RepairConfig = Field(default_factory=RepairConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    rendering: RenderingConfig = Field(default_factory=RenderingConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    output_dir: Path = Field(default_factory=Path.cwd)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
