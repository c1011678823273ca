"""Loader settings schema and file loading."""

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError

logger = logging.getLogger(__name__)


class SettingsError(ValueError):
    """Raised when a settings file cannot be read or has an invalid shape."""


class LoaderSettings(BaseModel):
    """Loader configuration record.

    Keys use the loader's camelCase names; snake_case field names are
    accepted too. Unknown keys are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    explain_resolutions: bool = Field(
        default=False, alias="explainResolutions", description="Log how module lookups are resolved"
    )
    wait_timeout: int | float = Field(
        default=7000, alias="waitTimeout", description="Time to wait for module script requests (ms)"
    )
    base_path: str = Field(default="", alias="basePath", description="Base path modules are retrieved from")
    combine: bool = Field(default=False, description="Combine module requests into combo URLs")
    url: str = Field(default="", description="URL of the module server")
    url_max_length: int | float = Field(
        default=2000, alias="urlMaxLength", description="Maximum combo URL length before splitting"
    )
    default_url_params: dict[str, Any] | None = Field(
        default=None, alias="defaultURLParams", description="Parameters added to every module request URL"
    )
    maps: dict[str, Any] = Field(default_factory=dict, description="Initial global alias mappings")
    paths: dict[str, str] = Field(default_factory=dict, description="Initial module path mappings")
    modules: list[str] = Field(default_factory=list, description="Module names to register up front")


def load_settings(path: Path | str) -> LoaderSettings:
    """Load settings from a YAML or JSON file.

    Args:
        path: Settings file (.yaml, .yml or .json)

    Returns:
        Parsed settings; an empty file yields the defaults

    Raises:
        SettingsError: If the file cannot be read, parsed or validated
    """
    path = Path(path)

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SettingsError(f"Cannot read settings file {path}: {e}") from e

    try:
        if path.suffix == ".json":
            data = json.loads(text) if text.strip() else {}
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SettingsError(f"Cannot parse settings file {path}: {e}") from e

    data = data or {}
    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {path} must contain a mapping, got {type(data).__name__}")

    try:
        settings = LoaderSettings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {path}: {e}") from e

    logger.debug(f"Loaded settings from {path}")
    return settings
