"""Release model, API publishing and the end-to-end flow."""

from createrel.release.errors import PublishError
from createrel.release.model import (
    CreatedRelease,
    ReleaseRequest,
    build_release_request,
    is_prerelease,
)
from createrel.release.publisher import AlreadyExists, Created, publish_release
from createrel.release.service import create_release

__all__ = [
    "AlreadyExists",
    "Created",
    "CreatedRelease",
    "PublishError",
    "ReleaseRequest",
    "build_release_request",
    "create_release",
    "is_prerelease",
    "publish_release",
]
