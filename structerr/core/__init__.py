"""Core types shared by the framework and the CLI."""

from .config import ConfigError, Settings, get_settings, load_settings, set_settings
from .errors import ErrorCode
from .exceptions import (
    ConfigurationError,
    HandlerTypeError,
    InheritanceLimitError,
    ReservedFieldError,
    StructErrError,
    TransportError,
    UnsupportedEventError,
)
from .result import Err, Ok, Result

__all__ = [
    # config
    "ConfigError",
    "Settings",
    "get_settings",
    "load_settings",
    "set_settings",
    # errors
    "ErrorCode",
    # exceptions
    "ConfigurationError",
    "HandlerTypeError",
    "InheritanceLimitError",
    "ReservedFieldError",
    "StructErrError",
    "TransportError",
    "UnsupportedEventError",
    # result
    "Err",
    "Ok",
    "Result",
]
