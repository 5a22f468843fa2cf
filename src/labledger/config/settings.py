"""Application configuration and environment-aware settings.

This module defines a `Settings` class (pydantic `BaseSettings`) used for
loading environment-based configuration and default values for output paths,
report formatting and feature toggles used throughout the project.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Top-level pydantic Settings container for labledger configuration.

    The class exposes default file system paths, report layout defaults and
    toggles (such as `include_user_activity`) which may be overridden via
    environment variables using the `LABLEDGER_` prefix.
    """

    # Report naming and output
    app_name: str = "Isaac-Asimov-Lab"
    output_dir: Path = Path.cwd() / "reports"
    log_file: Path = Path(__file__).parent.parent / "logs" / "labledger.log"

    # Calendar dates are written as text in this strftime format and timezone
    date_format: str = "%d/%m/%Y"
    display_timezone: str = "UTC"
    preview_limit: int = 10
    default_description: str = "Standard lab component"

    # Stock status thresholds, as a percentage of total stock
    low_stock_percent: float = 20.0
    medium_stock_percent: float = 50.0

    # The user activity sheet is not part of the standard export
    include_user_activity: bool = False

    model_config = ConfigDict(env_prefix="LABLEDGER_")


settings = Settings()
