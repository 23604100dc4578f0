"""Shared fixtures for the Bootstrap connector tests."""

from typing import Any

import pytest

from bootstrap_connector.cloud_config import MappingCloudConfigResolver
from bootstrap_connector.crypto import CryptoSupport
from bootstrap_connector.exceptions import CryptoError
from bootstrap_connector.resources import MappingResourceResolverFactory

LANGUAGE_LIST_PATH = "/etc/bootstrap/languages"
CLOUD_CONFIG_PATH = "/conf/global/cloudconfigs/bootstrap"


class RecordingCryptoSupport(CryptoSupport):
    """A crypto support that treats `enc:` values as protected and can be made to fail."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.unprotected: list[str] = []

    def is_protected(self, value: str | None) -> bool:
        return bool(value) and value.startswith("enc:")  # type: ignore[union-attr]

    def unprotect(self, value: str) -> str:
        self.unprotected.append(value)
        if self.fail:
            msg = "bad padding"
            raise CryptoError(msg)
        return value.removeprefix("enc:")


class RecordingServiceConstructor:
    """Records the keyword arguments of every service it builds."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []

    def __call__(self, **kwargs: Any) -> dict[str, Any]:  # noqa: ANN401
        self.calls.append(kwargs)
        return kwargs


@pytest.fixture
def resource_tree() -> dict[str, Any]:
    """Return a resource tree with two languages under the language list path."""
    return {
        "etc": {
            "bootstrap": {
                "languages": {
                    "en": {"languageMapping": "English"},
                    "fr": {"languageMapping": "French"},
                },
            },
        },
    }


@pytest.fixture
def resource_resolver_factory(resource_tree: dict[str, Any]) -> MappingResourceResolverFactory:
    """Return a resolver factory over the shared resource tree."""
    return MappingResourceResolverFactory(resource_tree, allowed_subservices={"bootstrap-service"})


@pytest.fixture
def cloud_config_resolver() -> MappingCloudConfigResolver:
    """Return a resolver holding one Bootstrap cloud configuration."""
    return MappingCloudConfigResolver(
        {
            CLOUD_CONFIG_PATH: {
                "dummyConfigId": "enc:config-123",
                "dummyServerUrl": "https://tms.example.com",
                "previewPath": "/content/preview",
            },
        },
    )


@pytest.fixture
def crypto_support() -> RecordingCryptoSupport:
    """Return a crypto support that unprotects `enc:` values."""
    return RecordingCryptoSupport()


@pytest.fixture
def failing_crypto_support() -> RecordingCryptoSupport:
    """Return a crypto support whose unprotect always fails."""
    return RecordingCryptoSupport(fail=True)


@pytest.fixture
def service_constructor() -> RecordingServiceConstructor:
    """Return a service constructor that records its arguments."""
    return RecordingServiceConstructor()
