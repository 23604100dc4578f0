"""Protection and unprotection of secrets stored in cloud configurations."""

import logging
from abc import ABC, abstractmethod

from cryptography.fernet import Fernet, InvalidToken

from .exceptions import CryptoError

logger = logging.getLogger(__name__)


class CryptoSupport(ABC):
    """Tells protected values apart from plaintext and unprotects them."""

    @abstractmethod
    def is_protected(self, value: str | None) -> bool:
        """Return True if `value` is in protected (encrypted) form."""
        raise NotImplementedError

    @abstractmethod
    def unprotect(self, value: str) -> str:
        """
        Return the plaintext of a protected value.

        Raises:
            CryptoError: If the value cannot be decrypted.

        """
        raise NotImplementedError


class FernetCryptoSupport(CryptoSupport):
    """
    A `CryptoSupport` using Fernet symmetric encryption.

    Protected values are the Fernet token wrapped in braces, e.g. `{gAAAAAB...}`.
    """

    def __init__(self, key: str | bytes) -> None:
        """
        Initialize with a url-safe base64-encoded 32-byte key.

        Raises:
            CryptoError: If the key is not a valid Fernet key.

        """
        try:
            self._fernet = Fernet(key)
        except (ValueError, TypeError) as e:
            msg = f"Invalid encryption key: {e}"
            raise CryptoError(msg) from e

    @staticmethod
    def generate_key() -> str:
        """Generate a new random key suitable for this class."""
        return Fernet.generate_key().decode()

    def is_protected(self, value: str | None) -> bool:
        return isinstance(value, str) and len(value) > 2 and value.startswith("{") and value.endswith("}")

    def protect(self, value: str) -> str:
        """Encrypt `value` and return it in protected form."""
        token = self._fernet.encrypt(value.encode("utf-8")).decode()
        return f"{{{token}}}"

    def unprotect(self, value: str) -> str:
        if not self.is_protected(value):
            msg = "Value is not in protected form."
            raise CryptoError(msg)
        try:
            return self._fernet.decrypt(value[1:-1].encode()).decode("utf-8")
        except (InvalidToken, UnicodeDecodeError) as e:
            msg = "Unable to decrypt protected value. Check encryption key configuration."
            raise CryptoError(msg) from e
