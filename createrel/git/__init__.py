"""Git operations: reading tag annotations.

Usage:
    from createrel.git import GitTagReader, read_tag_message

    body = read_tag_message(GitTagReader(Path(".")), "v1.2.0")
"""

from createrel.git.tags import (
    BODY_INDENT,
    ExtractionError,
    GitTagReader,
    MockTagReader,
    TagReader,
    parse_tag_listing,
    read_tag_message,
)

__all__ = [
    "BODY_INDENT",
    "ExtractionError",
    "GitTagReader",
    "MockTagReader",
    "TagReader",
    "parse_tag_listing",
    "read_tag_message",
]
