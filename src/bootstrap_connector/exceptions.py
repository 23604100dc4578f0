"""Exceptions raised by the Bootstrap Translation Connector."""


class TranslationError(Exception):
    """Raised when a translation service cannot be constructed."""


class CloudConfigError(TranslationError):
    """Raised when a cloud configuration cannot be resolved from its path."""


class CryptoError(Exception):
    """Raised when a protected value cannot be unprotected."""


class LoginError(Exception):
    """Raised when a service resource resolver cannot be obtained for a subservice."""
