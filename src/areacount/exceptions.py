# src/areacount/exceptions.py
"""Custom exceptions for areacount."""


class AreaCountError(Exception):
    """Base exception for areacount."""


class InvalidArgumentError(AreaCountError, ValueError):
    """Raised when a caller-supplied argument is out of range or malformed."""


class NotFoundError(AreaCountError, FileNotFoundError):
    """Raised when an image or model file is missing, or an image decodes to nothing."""


class ConfigurationError(AreaCountError, ValueError):
    """Raised when configuration is invalid."""


class ModelError(AreaCountError):
    """Raised when a model artifact cannot be used."""
