"""Release records and their wire format."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from createrel.core.result import Err, Ok, Result
from createrel.core.structured import StrDict, get_bool, get_int

__all__ = [
    "CreatedRelease",
    "ReleaseRequest",
    "build_release_request",
    "is_prerelease",
]


def is_prerelease(tag: str) -> bool:
    """Return True if the tag names a pre-release.

    This is a naming convention, not version parsing: any hyphen counts,
    so "v1.2.0-rc1" is a pre-release but so is "release-candidate".
    """
    return "-" in tag


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    """Body of a create-release call.

    Attributes:
        tag: Existing tag the release points at
        name: Release title
        body: Release notes
        is_draft: Create as an unpublished draft
        is_prerelease: Mark as not production-ready
    """

    tag: str
    name: str
    body: str
    is_draft: bool = False
    is_prerelease: bool = False

    def to_payload(self) -> dict[str, Any]:
        return {
            "tag_name": self.tag,
            "name": self.name,
            "body": self.body,
            "draft": self.is_draft,
            "prerelease": self.is_prerelease,
        }

    @classmethod
    def from_payload(cls, data: StrDict) -> Result[ReleaseRequest, str]:
        """Parse a payload produced by `to_payload` (or sent by the API)."""
        tag = data.get("tag_name")
        name = data.get("name")
        body = data.get("body")
        if not isinstance(tag, str) or not tag:
            return Err("missing tag_name")
        if not isinstance(name, str):
            return Err("missing name")
        if body is None:
            body = ""
        if not isinstance(body, str):
            return Err("body must be a string")

        draft = get_bool(data, "draft")
        prerelease = get_bool(data, "prerelease")
        return Ok(
            cls(
                tag=tag,
                name=name,
                body=body,
                is_draft=bool(draft),
                is_prerelease=bool(prerelease),
            )
        )


def build_release_request(tag: str, body: str) -> ReleaseRequest:
    """Release for `tag`, titled after it, published immediately."""
    return ReleaseRequest(
        tag=tag,
        name=tag,
        body=body,
        is_draft=False,
        is_prerelease=is_prerelease(tag),
    )


@dataclass(frozen=True, slots=True)
class CreatedRelease:
    """What the API returned for a new release."""

    id: int | None
    html_url: str | None = None

    @classmethod
    def from_payload(cls, data: StrDict) -> CreatedRelease:
        url = data.get("html_url")
        return cls(id=get_int(data, "id"), html_url=url if isinstance(url, str) else None)
