# infinitune/core/errors.py
from __future__ import annotations


class EmptyInputError(ValueError):
    """Raised when a random pick is requested from an empty candidate list."""


class UnknownLocaleError(KeyError):
    """Raised when no identity provider is registered for a locale."""

    def __init__(self, locale: str):
        super().__init__(locale)
        self.locale = locale

    def __str__(self) -> str:
        return f"Unsupported locale: {self.locale!r}"
