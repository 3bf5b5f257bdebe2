"""Reading release notes from annotated git tags.

`git tag -n<N> -l <tag>` prints the tag name and subject on the first
line, followed by the rest of the annotation indented by four spaces:

    v1.2.0          Release 1.2.0

        Fixes:
        - crash on empty input

`read_tag_message` turns that listing into the release body:

    Fixes:
    - crash on empty input

An empty listing (no such tag) is reported as an error instead of being
published with an empty body, so a release is never created for a tag
that does not exist locally.

Usage:
    reader = GitTagReader(Path("."))
    match read_tag_message(reader, "v1.2.0"):
        case Ok(body):
            print(body)
        case Err(e):
            print(f"Getting tag message: {e}")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

from createrel.core.result import Err, Ok, Result
from createrel.platform.process import run as run_process

__all__ = [
    "BODY_INDENT",
    "ExtractionError",
    "GitTagReader",
    "MockTagReader",
    "TagReader",
    "parse_tag_listing",
    "read_tag_message",
]

BODY_INDENT = "    "

# git has no "unlimited" value for -n; no annotation comes close to this.
_TAG_MESSAGE_LINES = 9999
_GIT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class ExtractionError:
    """The tag annotation could not be read.

    Attributes:
        tag: Tag that was requested
        message: Combined git output, or another diagnostic
        returncode: git exit code (-1 if git never ran)
    """

    tag: str
    message: str
    returncode: int = 1

    def __str__(self) -> str:
        return self.message


@runtime_checkable
class TagReader(Protocol):
    """Source of raw tag listings.

    Injectable so tests can supply canned annotations without a repository.
    """

    def read_tag_annotation(self, tag: str) -> Result[str, ExtractionError]:
        """Return the raw `git tag -n` listing for exactly this tag."""
        ...


class GitTagReader:
    """TagReader backed by the git executable.

    Attributes:
        path: Repository checkout where git runs
        timeout: Seconds before git is abandoned
    """

    def __init__(self, path: Path, timeout: float = _GIT_TIMEOUT_SECONDS) -> None:
        self.path = path
        self.timeout = timeout

    def read_tag_annotation(self, tag: str) -> Result[str, ExtractionError]:
        cmd = ["git", "tag", f"-n{_TAG_MESSAGE_LINES}", "-l", tag]
        result = run_process(cmd, cwd=self.path, timeout=self.timeout)
        match result:
            case Err(e):
                detail = e.output.strip() or str(e)
                return Err(ExtractionError(tag=tag, message=detail, returncode=e.returncode))
            case Ok(output):
                return Ok(output)


def _empty_listings() -> dict[str, str]:
    return {}


@dataclass
class MockTagReader:
    """TagReader returning canned listings, for tests.

    Unknown tags fail the way git does when run outside a repository.
    """

    listings: dict[str, str] = field(default_factory=_empty_listings)
    calls: list[str] = field(default_factory=list)

    def set_listing(self, tag: str, listing: str) -> None:
        self.listings[tag] = listing

    def read_tag_annotation(self, tag: str) -> Result[str, ExtractionError]:
        self.calls.append(tag)
        if tag not in self.listings:
            return Err(
                ExtractionError(
                    tag=tag,
                    message="fatal: not a git repository (mock)",
                    returncode=128,
                )
            )
        return Ok(self.listings[tag])


def _scan_lines(text: str) -> list[str]:
    """Split on newlines, dropping the final empty piece and any CR."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def parse_tag_listing(listing: str) -> str:
    """Extract the release body from a `git tag -n` listing.

    The first line (tag name and subject) is always dropped. One leading
    BODY_INDENT is removed from each remaining line. Blank lines before the
    first non-blank line are skipped; after it every line is kept, each
    terminated by a newline.
    """
    body: list[str] = []
    started = False
    for line in _scan_lines(listing)[1:]:
        line = line.removeprefix(BODY_INDENT)
        if not started and not line:
            continue
        started = True
        body.append(f"{line}\n")
    return "".join(body)


def read_tag_message(reader: TagReader, tag: str) -> Result[str, ExtractionError]:
    """Read a tag's annotation and return its release body.

    git exits 0 with no output when no tag matches. That is treated as an
    error rather than publishing an empty body, because the API would
    otherwise create a brand-new tag from the default branch.

    Returns:
        Ok(body), possibly empty when the tag has no message beyond its
        subject; Err(ExtractionError) when git fails or no tag matched.
    """
    result = reader.read_tag_annotation(tag)
    if isinstance(result, Err):
        return result

    if not result.value.strip():
        return Err(ExtractionError(tag=tag, message=f"tag not found: {tag}"))

    return Ok(parse_tag_listing(result.value))
