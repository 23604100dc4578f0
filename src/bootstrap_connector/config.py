"""Handles the activation configuration of the Bootstrap translation service factory."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_FACTORY_NAME = "Bootstrap Connector"
DEFAULT_EXPORT_FORMAT = "xml"


class BootstrapServiceConfiguration(BaseModel):
    """
    The settings a host supplies when it activates the service factory.

    Instances are immutable so that an activated factory can hand the same
    snapshot to every construction call until the next activation.
    Fields accept either their snake_case name or the host property name
    (e.g. `translationFactory`).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    translation_factory: str | None = Field(default=DEFAULT_FACTORY_NAME, alias="translationFactory")
    preview_enabled: bool = Field(default=False, alias="isPreviewEnabled")
    pseudo_localization_disabled: bool = Field(default=False, alias="isPseudoLocalizationDisabled")
    export_format: str | None = Field(default=DEFAULT_EXPORT_FORMAT, alias="exportFormat")
    language_list_path: str | None = Field(default=None, alias="languageListPath")

    @classmethod
    def from_value(cls, value: "BootstrapServiceConfiguration | Mapping[str, Any]") -> "BootstrapServiceConfiguration":
        """
        Coerce a host-supplied configuration into a configuration snapshot.

        Raises:
            ValueError: If the mapping holds values of the wrong type.

        """
        if isinstance(value, cls):
            return value
        try:
            return cls.model_validate(dict(value))
        except ValidationError as e:
            msg = f"Invalid or missing configuration: {e}"
            raise ValueError(msg) from e


def load_config(config_path: str | Path) -> BootstrapServiceConfiguration:
    """
    Load and validate a factory configuration from a YAML file.

    Args:
        config_path: The path to the YAML file.

    Returns:
        The validated configuration snapshot.

    Raises:
        FileNotFoundError: If the config file does not exist.
        yaml.YAMLError: If there is a syntax error in the YAML file.
        ValueError: If the configuration is invalid.

    """
    path = Path(config_path)
    if not path.is_file():
        msg = f"Configuration file not found at: {config_path}"
        raise FileNotFoundError(msg)

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"Error parsing YAML config file: {e}"
        raise yaml.YAMLError(msg) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        msg = "Invalid or missing configuration: config file must be a YAML mapping (dictionary)."
        raise ValueError(msg)  # noqa: TRY004

    config = BootstrapServiceConfiguration.from_value(data)
    logger.debug("Loaded factory configuration from %s", path)
    return config
