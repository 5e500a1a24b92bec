"""Configuration exceptions."""

from .base import A11yInsightError


class ConfigurationError(A11yInsightError):
    """Raised when a config file, environment variable or override is invalid."""

    pass
