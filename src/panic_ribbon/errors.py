"""Exception types raised by Panic Ribbon."""

from __future__ import annotations


class PanicRibbonError(Exception):
    """Base class for Panic Ribbon errors."""


class ConfigurationError(PanicRibbonError, ValueError):
    """The service configuration is missing, unreadable or invalid."""


class DisplayUnavailableError(PanicRibbonError):
    """The ribbon window could not be created."""
