"""Error codes for CLI exit status.

Each failure kind surfaced by an operation maps to one of these codes so the
shell sees a stable, meaningful exit status.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI operations.

    - 0: Success (also used for unsupported operations, which only warn)
    - 1: User error (bad arguments, unknown installer)
    - 2: Environment error (tool provider not found)
    - 3: Build error (compiler or child process exited non-zero)
    - 4: Network error (remote transfer failed)
    - 5: I/O error (unexpected filesystem fault)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
