"""Configuration loading and validation."""

from datetime import date
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator


class ChurchConfig(BaseModel):
    """Church identity used in report headers."""

    name: str = "Church Finance System"


class CurrencyConfig(BaseModel):
    """Currency used when formatting amounts for display."""

    code: str = Field(default="ZMW", pattern=r"^[A-Z]{3}$")
    symbol: str = "K"


class InputConfig(BaseModel):
    """Location of the submission and member snapshots."""

    submissions: Path = Field(default=Path("./data/submissions.json"))
    members: Path | None = Field(default=Path("./data/members.json"))


class ReportConfig(BaseModel):
    """Report and export configuration section."""

    output_dir: Path = Field(default=Path("./reports"))
    date_format: str = "%m/%d/%Y"
    datetime_format: str = "%m/%d/%Y, %I:%M:%S %p"
    unknown_member_label: str = "Unknown Member"


class DateRangeConfig(BaseModel):
    """Inclusive reporting period."""

    start: date
    end: date

    @model_validator(mode="after")
    def validate_order(self) -> "DateRangeConfig":
        """Validate that start does not come after end."""
        if self.start > self.end:
            msg = f"start ({self.start.isoformat()}) must not be after end ({self.end.isoformat()})"
            raise ValueError(msg)
        return self

    def as_descriptor(self) -> dict[str, str]:
        """Return the plain ``{start, end}`` descriptor used by reports."""
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}


class Config(BaseModel):
    """Root configuration model."""

    church: ChurchConfig = Field(default_factory=ChurchConfig)
    currency: CurrencyConfig = Field(default_factory=CurrencyConfig)
    input: InputConfig = Field(default_factory=InputConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    date_range: DateRangeConfig | None = None


def default_config() -> Config:
    """Return a configuration populated entirely with defaults."""
    return Config()


def load_config(path: Path) -> Config:
    """Load and validate configuration from YAML file.

    Relative input and output paths are resolved against the directory
    holding the config file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Validated Config object.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValidationError: If the config is invalid.
    """
    if not path.exists():
        msg = f"Config file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open() as f:
        raw_config: dict[str, Any] = yaml.safe_load(f) or {}

    config = Config.model_validate(raw_config)

    base_dir = path.parent
    if not config.input.submissions.is_absolute():
        config.input.submissions = base_dir / config.input.submissions
    if config.input.members is not None and not config.input.members.is_absolute():
        config.input.members = base_dir / config.input.members
    if not config.report.output_dir.is_absolute():
        config.report.output_dir = base_dir / config.report.output_dir

    return config
