"""Templated, extendable error hierarchies with safe transport."""

from .bootstrap import configure, configure_from_environment
from .core.config import Settings, get_settings
from .core.exceptions import (
    ConfigurationError,
    HandlerTypeError,
    InheritanceLimitError,
    ReservedFieldError,
    StructErrError,
    TransportError,
    UnsupportedEventError,
)
from .error import StructuredError
from .events import Event
from .hierarchy import events_of, parent_of, spec_of
from .scheduler import (
    EventLoopScheduler,
    ManualScheduler,
    Scheduler,
    get_scheduler,
    run_deferred,
    set_scheduler,
)
from .template import render_template
from .transport import TransportEncoder, dumps

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # bootstrap
    "configure",
    "configure_from_environment",
    # settings
    "Settings",
    "get_settings",
    # exceptions
    "ConfigurationError",
    "HandlerTypeError",
    "InheritanceLimitError",
    "ReservedFieldError",
    "StructErrError",
    "TransportError",
    "UnsupportedEventError",
    # error types
    "StructuredError",
    "Event",
    "events_of",
    "parent_of",
    "spec_of",
    # scheduling
    "EventLoopScheduler",
    "ManualScheduler",
    "Scheduler",
    "get_scheduler",
    "run_deferred",
    "set_scheduler",
    # rendering and transport
    "render_template",
    "TransportEncoder",
    "dumps",
]
