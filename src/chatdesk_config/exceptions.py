"""Exceptions for chatdesk-config."""


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class ConfigFileError(ConfigError):
    """Error reading or writing the configuration file."""

    pass


class ConfigValidationError(ConfigError):
    """Error validating a configuration value against its section schema."""

    pass


class ConfigDirectoryError(ConfigError):
    """A required runtime directory could not be created."""

    pass
