"""Defines the shared value types used by the connector."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class TranslationMethod(str, Enum):
    """Enumeration of the translation methods a service factory can offer."""

    HUMAN_TRANSLATION = "HUMAN_TRANSLATION"
    MACHINE_TRANSLATION = "MACHINE_TRANSLATION"


@dataclass(frozen=True)
class Recovered(Generic[T]):
    """
    The outcome of a step that degrades instead of failing.

    `value` is always usable. `reason` is set when the step fell back to a
    default, and describes why.
    """

    value: T
    reason: str | None = None

    @property
    def degraded(self) -> bool:
        """Return True if the step fell back to a default value."""
        return self.reason is not None
