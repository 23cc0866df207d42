"""Configuration management for PPC Advisor.

Analysis thresholds come from config/settings.yaml, overridden by
PPC_ADVISOR_* environment variables (a project .env is loaded if present).
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from ppc_advisor.models.analysis import AnalysisSettings


class Settings(BaseModel):
    """Application settings."""
    acos_target: float = Field(default=25.0, description="ACOS % below which bids are raised")
    acos_threshold: float = Field(default=40.0, description="ACOS % above which bids are lowered")
    click_threshold: int = Field(default=10, description="Minimum clicks before PPC data is trusted")
    export_dir: str = Field(default="./exports", description="Directory for CSV exports")

    def to_analysis_settings(self) -> AnalysisSettings:
        return AnalysisSettings(
            acos_target=self.acos_target,
            acos_threshold=self.acos_threshold,
            click_threshold=self.click_threshold,
        )


def validate_settings(settings: AnalysisSettings) -> AnalysisSettings:
    """Reject settings that would invert the ACOS rule ranges.

    The analysis engine assumes these hold and does not check them itself.
    """
    if settings.acos_target < 0 or settings.acos_threshold < 0:
        raise ValueError("Invalid settings: ACOS target and threshold must not be negative")
    if settings.click_threshold < 0:
        raise ValueError("Invalid settings: click threshold must not be negative")
    if settings.acos_threshold < settings.acos_target:
        raise ValueError(
            f"Invalid settings: ACOS threshold ({settings.acos_threshold:g}%) "
            f"is below ACOS target ({settings.acos_target:g}%)"
        )
    return settings


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (where config/ lives)."""
    current = Path(__file__).resolve().parent
    for parent in [current, *current.parents]:
        if (parent / "config" / "settings.yaml").exists():
            return parent
    # Fallback: cwd
    return Path.cwd()


def _load_yaml_settings(project_root: Path) -> dict[str, Any]:
    """Load the ``analysis`` section of settings.yaml, or {} if there is none."""
    settings_path = project_root / "config" / "settings.yaml"
    if not settings_path.exists():
        return {}

    with open(settings_path) as f:
        data = yaml.safe_load(f) or {}

    return dict(data.get("analysis") or {})


def _env(*keys: str, default: str = "") -> str:
    """Try multiple env var names, return the first one found."""
    for key in keys:
        val = os.environ.get(key, "")
        if val:
            return val.strip().strip('"')
    return default


def _load_settings(file_values: dict[str, Any]) -> Settings:
    """Merge settings.yaml values with PPC_ADVISOR_* environment overrides."""
    defaults = Settings()
    values = {**defaults.model_dump(), **file_values}
    return Settings(
        acos_target=float(_env("PPC_ADVISOR_ACOS_TARGET", default=str(values["acos_target"]))),
        acos_threshold=float(_env("PPC_ADVISOR_ACOS_THRESHOLD", default=str(values["acos_threshold"]))),
        click_threshold=int(_env("PPC_ADVISOR_CLICK_THRESHOLD", default=str(values["click_threshold"]))),
        export_dir=_env("PPC_ADVISOR_EXPORT_DIR", default=str(values["export_dir"])),
    )


@lru_cache(maxsize=1)
def get_config() -> Settings:
    """Load and cache the application settings."""
    project_root = _find_project_root()

    # Load .env from project root if it exists
    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    return _load_settings(_load_yaml_settings(project_root))
