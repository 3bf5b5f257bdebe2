"""Publish one tag as a release: read the annotation, then create it."""

from __future__ import annotations

from createrel.core.config import ReleaseConfig
from createrel.core.errors import ErrorCode
from createrel.core.result import Err, Ok
from createrel.git.tags import TagReader, read_tag_message
from createrel.output.console import ConsoleProtocol, Style
from createrel.release.http import HttpClient
from createrel.release.model import build_release_request
from createrel.release.publisher import AlreadyExists, Created, publish_release

__all__ = ["create_release"]


def create_release(
    config: ReleaseConfig,
    *,
    reader: TagReader,
    http: HttpClient,
    console: ConsoleProtocol,
) -> ErrorCode:
    """Publish `config.tag` to `config.repo`.

    Nothing is sent when the tag cannot be read. Output is silent on
    success unless `config.verbose` is set.
    """
    match read_tag_message(reader, config.tag):
        case Err(e):
            console.error(f"Getting tag message: {e}")
            return ErrorCode.TAG_ERROR
        case Ok(message):
            pass

    request = build_release_request(config.tag, message)

    if config.verbose:
        if request.is_prerelease:
            console.print("*** Pre-release ***", Style.BOLD)
        console.print(config.tag)
        console.newline()
        console.print(message)

    result = publish_release(
        http,
        api_url=config.api_url,
        repo=config.repo,
        token=config.token,
        request=request,
    )
    match result:
        case Err(e):
            console.error(f"Failed to create release: {e.pretty()}")
            return ErrorCode.PUBLISH_ERROR
        case Ok(AlreadyExists()):
            if config.verbose:
                console.warning("*** Release already exists")
        case Ok(Created(release=created)):
            if config.verbose and created.html_url:
                console.success(f"Created {created.html_url}")

    return ErrorCode.OK
