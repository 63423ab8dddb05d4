"""Custom exceptions for Aoeline."""


class AoelineError(Exception):
    """Base exception for all Aoeline errors."""

    pass


class ValidationError(AoelineError):
    """Raised when a timeline document fails validation."""

    pass


class ParseError(AoelineError):
    """Raised when a timeline document cannot be read."""

    pass


class ConfigError(AoelineError):
    """Raised when the configuration file is invalid."""

    pass


class UnknownEntityError(AoelineError, KeyError):
    """Raised when a program or time point ID does not exist."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""
