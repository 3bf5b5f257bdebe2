"""Error types for publishing a release."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["PublishError"]


@dataclass(frozen=True, slots=True)
class PublishError:
    """The release could not be created.

    Attributes:
        message: Status line and body, or the transport error text
        status: HTTP status code (0 when no response was received)
        body: Raw response body, if any
        hint: Optional suggestion for the user
    """

    message: str
    status: int = 0
    body: str = ""
    hint: str | None = None

    def __str__(self) -> str:
        return self.message

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
