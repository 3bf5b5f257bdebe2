"""Exit codes for the createrel CLI.

Values are process exit codes and must stay stable for scripts and CI
jobs that check them:
- 0: Success (release created, or it already existed)
- 1: User error (missing token, malformed repository name)
- 2: Usage error (wrong argument count; raised by click itself)
- 3: Tag error (the annotation could not be read from git)
- 4: Publish error (the API refused the release or was unreachable)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the CLI."""

    OK = 0
    USER_ERROR = 1
    USAGE_ERROR = 2
    TAG_ERROR = 3
    PUBLISH_ERROR = 4

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
