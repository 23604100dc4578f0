"""The Bootstrap translation service factory."""

import logging
import threading
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .cloud_config import BootstrapTranslationCloudConfig, CloudConfigResolver
from .config import BootstrapServiceConfiguration
from .crypto import CryptoSupport
from .exceptions import CryptoError, LoginError, TranslationError
from .resources import ResourceResolverFactory
from .service import BootstrapTranslationService, ServiceConstructor, TranslationService
from .types import Recovered, TranslationMethod

logger = logging.getLogger(__name__)

BOOTSTRAP_SERVICE = "bootstrap-service"
LANGUAGE_MAPPING = "languageMapping"

# Used by construction calls made before the first activation.
_UNACTIVATED = BootstrapServiceConfiguration(translationFactory=None, exportFormat=None)

_SUPPORTED_TRANSLATION_METHODS = (
    TranslationMethod.HUMAN_TRANSLATION,
    TranslationMethod.MACHINE_TRANSLATION,
)


class BootstrapTranslationServiceFactory:
    """
    Builds Bootstrap translation services for cloud configurations.

    The host activates the factory with a `BootstrapServiceConfiguration`
    and then asks it for a service per cloud configuration path. Each
    activation swaps in a new immutable snapshot, so a construction call
    always works from one consistent configuration.
    """

    def __init__(  # noqa: PLR0913
        self,
        cloud_config_resolver: CloudConfigResolver,
        resource_resolver_factory: ResourceResolverFactory,
        *,
        crypto_support: CryptoSupport | None = None,
        translation_config: Any = None,  # noqa: ANN401
        tms_service: Any = None,  # noqa: ANN401
        service_constructor: ServiceConstructor = BootstrapTranslationService,
    ) -> None:
        """
        Initialize the factory with its collaborators.

        Args:
            cloud_config_resolver: Looks up cloud configurations by path.
            resource_resolver_factory: Opens service sessions on the resource tree.
            crypto_support: Unprotects encrypted config ids. Skipped when None.
            translation_config: The shared translation configuration handed to each service.
            tms_service: The shared TMS service handed to each service.
            service_constructor: Builds the service from the resolved parameters.

        """
        logger.debug("BootstrapTranslationServiceFactory created.")
        self._cloud_config_resolver = cloud_config_resolver
        self._resource_resolver_factory = resource_resolver_factory
        self._crypto_support = crypto_support
        self._translation_config = translation_config
        self._tms_service = tms_service
        self._service_constructor = service_constructor
        self._config: BootstrapServiceConfiguration | None = None
        self._config_lock = threading.Lock()

    @property
    def configuration(self) -> BootstrapServiceConfiguration | None:
        """The active configuration snapshot, or None before activation."""
        with self._config_lock:
            return self._config

    def activate(self, configuration: BootstrapServiceConfiguration | Mapping[str, Any]) -> None:
        """
        Replace the cached configuration with a new snapshot.

        Raises:
            ValueError: If a mapping is given whose values have the wrong types.

        """
        logger.debug("Starting function: activate")
        snapshot = BootstrapServiceConfiguration.from_value(configuration)
        with self._config_lock:
            self._config = snapshot

        logger.debug("Activated TSF with the following:")
        logger.debug("Factory Name: %s", snapshot.translation_factory)
        logger.debug("Preview Enabled: %s", snapshot.preview_enabled)
        logger.debug("Pseudo Localization Disabled: %s", snapshot.pseudo_localization_disabled)
        logger.debug("Export Format: %s", snapshot.export_format)
        logger.debug("Path to the list of languages: %s", snapshot.language_list_path)

    def create_translation_service(self, translation_method: TranslationMethod | None, cloud_config_path: str) -> TranslationService:
        """
        Build a translation service for the cloud configuration at `cloud_config_path`.

        A missing cloud configuration, a secret that fails to decrypt, and an
        unreadable language list all degrade to defaults instead of failing.

        Args:
            translation_method: The requested method. Bootstrap services handle both.
            cloud_config_path: The path of the Bootstrap cloud configuration.

        Returns:
            A new service instance owned by the caller.

        Raises:
            TranslationError: If the cloud configuration cannot be resolved.

        """
        logger.debug("BootstrapTranslationServiceFactory.create_translation_service (method: %s, path: %s)", translation_method, cloud_config_path)
        config = self.configuration or _UNACTIVATED

        cloud_config = self._resolve_cloud_config(cloud_config_path)
        dummy_config_id = self._unprotect_config_id(cloud_config.dummy_config_id)
        language_map = self._get_available_language_map(config.language_list_path)

        degraded = [step.reason for step in (dummy_config_id, language_map) if step.degraded]
        if degraded:
            logger.info("Building service for '%s' with fallbacks: %s", cloud_config_path, "; ".join(degraded))

        return self._service_constructor(
            language_map=language_map.value,
            category_map={},
            factory_name=config.translation_factory,
            preview_enabled=config.preview_enabled,
            pseudo_localization_disabled=config.pseudo_localization_disabled,
            export_format=config.export_format,
            dummy_config_id=dummy_config_id.value,
            dummy_server_url=cloud_config.dummy_server_url,
            preview_path=cloud_config.preview_path,
            translation_config=self._translation_config,
            tms_service=self._tms_service,
        )

    def _resolve_cloud_config(self, cloud_config_path: str) -> BootstrapTranslationCloudConfig:
        try:
            cloud_config = self._cloud_config_resolver.resolve(BootstrapTranslationCloudConfig, cloud_config_path)
        except ValidationError as e:
            msg = f"Invalid cloud configuration at '{cloud_config_path}': {e}"
            raise TranslationError(msg) from e

        if cloud_config is None:
            logger.debug("No Bootstrap cloud configuration at '%s', using empty defaults", cloud_config_path)
            return BootstrapTranslationCloudConfig()
        return cloud_config

    def _unprotect_config_id(self, dummy_config_id: str) -> Recovered[str]:
        """Decrypt the config id if it is protected. On failure, keep the protected value."""
        if self._crypto_support is None:
            return Recovered(dummy_config_id)

        try:
            if not self._crypto_support.is_protected(dummy_config_id):
                logger.debug("Dummy Config ID is not protected")
                return Recovered(dummy_config_id)
            return Recovered(self._crypto_support.unprotect(dummy_config_id))
        except CryptoError as e:
            logger.error("Error while decrypting the dummy config id: %s", e)  # noqa: TRY400
            return Recovered(dummy_config_id, reason=f"dummy config id left protected ({e})")

    def _get_available_language_map(self, language_list_path: str | None) -> Recovered[dict[str, str | None]]:
        """Read the language list from the children of `language_list_path`."""
        logger.debug("BootstrapTranslationServiceFactory._get_available_language_map")
        available_language_map: dict[str, str | None] = {}

        if not language_list_path or not language_list_path.strip():
            reason = "There is no path to the list of languages in the 'Bootstrap Translation Service Configuration'"
            logger.warning(reason)
            return Recovered(available_language_map, reason=reason)

        try:
            with self._resource_resolver_factory.get_service_resource_resolver(BOOTSTRAP_SERVICE) as service_resolver:
                language_root = service_resolver.get_resource(language_list_path)
                if language_root is None:
                    reason = f"Language list not found at '{language_list_path}'"
                    logger.debug(reason)
                    return Recovered(available_language_map, reason=reason)

                for language in language_root.list_children():
                    available_language_map[language.name] = language.get_property(LANGUAGE_MAPPING)
        except LoginError as e:
            logger.exception("Could not open a resource resolver for '%s'", BOOTSTRAP_SERVICE)
            return Recovered({}, reason=f"language list unreadable ({e})")

        return Recovered(available_language_map)

    def get_supported_translation_methods(self) -> list[TranslationMethod]:
        """Return the translation methods this factory's services handle, in fixed order."""
        logger.debug("BootstrapTranslationServiceFactory.get_supported_translation_methods")
        return list(_SUPPORTED_TRANSLATION_METHODS)

    @staticmethod
    def get_service_cloud_config_class() -> type[BootstrapTranslationCloudConfig]:
        """Return the cloud configuration schema this connector reads."""
        logger.debug("BootstrapTranslationServiceFactory.get_service_cloud_config_class")
        return BootstrapTranslationCloudConfig

    def get_service_factory_name(self) -> str | None:
        """Return the factory name of the active configuration, or None before activation."""
        logger.debug("Starting function: get_service_factory_name")
        config = self.configuration
        return config.translation_factory if config else None
