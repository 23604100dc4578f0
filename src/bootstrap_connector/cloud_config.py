"""Cloud configuration schema and resolvers for the Bootstrap connector."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import CloudConfigError

logger = logging.getLogger(__name__)

ConfigT = TypeVar("ConfigT", bound=BaseModel)


class BootstrapTranslationCloudConfig(BaseModel):
    """The settings a Bootstrap cloud configuration stores under its path."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    dummy_config_id: str = Field(default="", alias="dummyConfigId")
    dummy_server_url: str = Field(default="", alias="dummyServerUrl")
    preview_path: str = Field(default="", alias="previewPath")

    @field_validator("dummy_config_id", "dummy_server_url", "preview_path", mode="before")
    @classmethod
    def empty_when_unset(cls, value: Any) -> Any:  # noqa: ANN401
        """Read unset properties as empty strings."""
        return "" if value is None else value


class CloudConfigResolver(ABC):
    """Looks up a typed cloud configuration from its content path."""

    @abstractmethod
    def resolve(self, schema: type[ConfigT], path: str) -> ConfigT | None:
        """
        Return the cloud configuration stored at `path`, or None if there is none.

        Raises:
            CloudConfigError: If the stored settings cannot be read as `schema`.

        """
        raise NotImplementedError


class MappingCloudConfigResolver(CloudConfigResolver):
    """A resolver backed by an in-memory mapping of path to settings."""

    def __init__(self, configs: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self._configs: dict[str, Mapping[str, Any]] = {_normalize_path(k): v for k, v in (configs or {}).items()}

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "MappingCloudConfigResolver":
        """
        Build a resolver from a YAML file mapping cloud config paths to settings.

        Raises:
            FileNotFoundError: If the file does not exist.
            CloudConfigError: If the file is not valid YAML or not a mapping.

        """
        path = Path(yaml_path)
        if not path.is_file():
            msg = f"Cloud configuration file not found at: {yaml_path}"
            raise FileNotFoundError(msg)
        try:
            with path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            msg = f"Error parsing cloud configuration file {yaml_path}: {e}"
            raise CloudConfigError(msg) from e
        if not isinstance(data, dict):
            msg = f"Cloud configuration file {yaml_path} must be a YAML mapping (dictionary)."
            raise CloudConfigError(msg)
        return cls(data)

    def resolve(self, schema: type[ConfigT], path: str) -> ConfigT | None:
        settings = self._configs.get(_normalize_path(path))
        if settings is None:
            logger.debug("No cloud configuration found at '%s'", path)
            return None
        if not isinstance(settings, Mapping):
            msg = f"Cloud configuration at '{path}' must be a mapping, got {type(settings).__name__}."
            raise CloudConfigError(msg)
        try:
            return schema.model_validate(dict(settings))
        except ValidationError as e:
            msg = f"Invalid cloud configuration at '{path}': {e}"
            raise CloudConfigError(msg) from e


def _normalize_path(path: str) -> str:
    return "/" + path.strip("/") if path else "/"
