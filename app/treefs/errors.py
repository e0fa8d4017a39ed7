"""Exception hierarchy for treefs.

Filesystem operations report failure through return values; exceptions
are reserved for misconfiguration.
"""


class TreefsError(Exception):
    """Base exception for treefs errors."""


class InvalidDriverError(TreefsError):
    """Raised when no usable storage driver is configured or known."""


class DriverArgumentError(TreefsError):
    """Raised when a driver is given as something other than a name or instance."""


class ConfigError(TreefsError):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""
