"""Defines the translation services handed out by the factory."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any


class TranslationService(ABC):
    """Abstract base class for translation services built by a service factory."""

    @abstractmethod
    def get_supported_language_map(self) -> dict[str, str | None]:
        """Return the mapping from language code to provider language."""
        raise NotImplementedError

    @abstractmethod
    def get_category_map(self) -> dict[str, str]:
        """Return the mapping of content categories the service understands."""
        raise NotImplementedError

    @abstractmethod
    def describe(self) -> dict[str, Any]:
        """Return the parameters this service was built with, for diagnostics."""
        raise NotImplementedError


class BootstrapTranslationService(TranslationService):
    """
    The Bootstrap connector's translation service.

    Holds the parameters the factory resolved for one cloud configuration.
    Requests to the translation backend go through the shared TMS service.
    """

    def __init__(  # noqa: PLR0913
        self,
        *,
        language_map: dict[str, str | None],
        category_map: dict[str, str],
        factory_name: str | None,
        preview_enabled: bool,
        pseudo_localization_disabled: bool,
        export_format: str | None,
        dummy_config_id: str,
        dummy_server_url: str,
        preview_path: str,
        translation_config: Any,  # noqa: ANN401
        tms_service: Any,  # noqa: ANN401
    ) -> None:
        self.language_map = language_map
        self.category_map = category_map
        self.factory_name = factory_name
        self.preview_enabled = preview_enabled
        self.pseudo_localization_disabled = pseudo_localization_disabled
        self.export_format = export_format
        self.dummy_config_id = dummy_config_id
        self.dummy_server_url = dummy_server_url
        self.preview_path = preview_path
        self.translation_config = translation_config
        self.tms_service = tms_service

    def get_supported_language_map(self) -> dict[str, str | None]:
        return dict(self.language_map)

    def get_category_map(self) -> dict[str, str]:
        """Return the mapping of content categories. Bootstrap defines none."""
        return dict(self.category_map)

    def describe(self) -> dict[str, Any]:
        return {
            "factory_name": self.factory_name,
            "preview_enabled": self.preview_enabled,
            "pseudo_localization_disabled": self.pseudo_localization_disabled,
            "export_format": self.export_format,
            "dummy_config_id": self.dummy_config_id,
            "dummy_server_url": self.dummy_server_url,
            "preview_path": self.preview_path,
            "language_map": dict(self.language_map),
            "category_map": dict(self.category_map),
        }


# Builds a service from the keyword parameters the factory resolved.
ServiceConstructor = Callable[..., TranslationService]
