"""Process exit codes of the ``rt`` command. The values are stable."""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    # Unknown train, iteration or project; bad arguments.
    USER_ERROR = 1
    # Invalid rt.toml, unsupported phase or a broken release model.
    CONFIG_ERROR = 2
    # At least one module failed or was skipped in an orchestration run.
    BUILD_ERROR = 3
