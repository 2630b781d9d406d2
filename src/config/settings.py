# src/config/settings.py
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.analytics.settings import AnalyticsSettings
from src.biases.settings import BiasEngineSettings


class SystemConfig(BaseModel):
    name: str = "Trading Analytics & Bias Engine"
    version: str = "1.0.0"


class ReportConfig(BaseModel):
    """Settings for the merged analysis report."""

    recent_trades_limit: int = Field(default=15, ge=0, le=500)


class RuntimeConfig(BaseSettings):
    """Process-level overrides read from the environment."""

    model_config = SettingsConfigDict(env_prefix="TRADE_ANALYTICS_")

    log_level: str = "INFO"
    timezone: Optional[str] = None


class Settings(BaseModel):
    system: SystemConfig = Field(default_factory=SystemConfig)
    analytics: AnalyticsSettings = Field(default_factory=AnalyticsSettings)
    biases: BiasEngineSettings = Field(default_factory=BiasEngineSettings)
    report: ReportConfig = Field(default_factory=ReportConfig)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file with env var overrides."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        """Build settings from a mapping, applying env var overrides."""
        data = dict(data)
        runtime = RuntimeConfig()

        if runtime.timezone:
            analytics = dict(data.get("analytics") or {})
            analytics["timezone"] = runtime.timezone
            data["analytics"] = analytics

        return cls(
            **{k: v for k, v in data.items() if k != "runtime"},
            runtime=runtime,
        )
