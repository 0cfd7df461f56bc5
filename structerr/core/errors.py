"""Error codes for CLI exit status.

The structerr CLI maps every failure onto one of these codes. They are used
as process exit codes and should remain stable:
- 0: Success
- 1: User error (bad arguments, malformed field assignments)
- 2: Config error (unreadable or invalid settings file)
- 3: I/O error (input file missing, not valid JSON)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    CONFIG_ERROR = 2
    IO_ERROR = 3

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
