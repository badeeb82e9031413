"""
errors.py

Exception taxonomy for the toolkit.

- ConfigurationError: the caller asked for something that cannot be built
  (e.g. no character class selected). Recoverable: fix options, retry.
- RandomnessUnavailable: the platform's secure random primitive failed.
  Fatal: there is no fallback to a weaker generator.
- ClipboardUnavailable: a clipboard write failed. Recoverable.
"""

from __future__ import annotations


class ToolkitError(Exception):
    """Base class for every error raised on purpose by this package."""


class ConfigurationError(ToolkitError):
    pass


class NoClassSelected(ConfigurationError):
    def __init__(self, message: str = "Please select at least one character type.") -> None:
        super().__init__(message)


class RandomnessUnavailable(ToolkitError):
    pass


class ClipboardUnavailable(ToolkitError):
    pass


__all__ = [
    "ToolkitError",
    "ConfigurationError",
    "NoClassSelected",
    "RandomnessUnavailable",
    "ClipboardUnavailable",
]
