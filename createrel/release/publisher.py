"""Create a release through the GitHub REST API.

One POST to `/repos/<owner>/<name>/releases`. A 201 means the release was
created. A refusal because the release already exists is reported as
`AlreadyExists` rather than an error, so publishing the same tag twice is
harmless; the existing release is not compared with the new one.

Detecting that case is fragile. The API reports it as a validation error
with `code: already_exists`, which is matched first; the raw text is
searched for `already_exists` only when the body has no such structure.
"""

from __future__ import annotations

from dataclasses import dataclass

from createrel.core.result import Err, Ok, Result
from createrel.core.structured import as_str_dict, get_list, get_str
from createrel.release.errors import PublishError
from createrel.release.http import HttpClient, HttpResponse
from createrel.release.model import CreatedRelease, ReleaseRequest

__all__ = [
    "ALREADY_EXISTS_CODE",
    "AlreadyExists",
    "Created",
    "PublishOutcome",
    "is_already_exists",
    "publish_release",
    "releases_url",
]

ALREADY_EXISTS_CODE = "already_exists"
_API_MEDIA_TYPE = "application/vnd.github+json"


@dataclass(frozen=True, slots=True)
class Created:
    """The API returned 201 and created the release."""

    release: CreatedRelease


@dataclass(frozen=True, slots=True)
class AlreadyExists:
    """The API refused because the release exists; `detail` is its reply."""

    detail: str


type PublishOutcome = Created | AlreadyExists


def releases_url(api_url: str, repo: str) -> str:
    return f"{api_url.rstrip('/')}/repos/{repo}/releases"


def _structured_error_codes(response: HttpResponse) -> list[str]:
    data = as_str_dict(response.json())
    if data is None:
        return []
    errors = get_list(data, "errors") or []
    codes: list[str] = []
    for item in errors:
        entry = as_str_dict(item)
        if entry is None:
            continue
        code = get_str(entry, "code")
        if code is not None:
            codes.append(code)
    return codes


def is_already_exists(response: HttpResponse) -> bool:
    """True if a non-201 response says the release already exists."""
    if ALREADY_EXISTS_CODE in _structured_error_codes(response):
        return True
    return ALREADY_EXISTS_CODE in f"{response.status_line}: {response.body}"


def _parse_created(response: HttpResponse) -> CreatedRelease:
    data = as_str_dict(response.json())
    if data is None:
        return CreatedRelease(id=None)
    return CreatedRelease.from_payload(data)


def publish_release(
    http: HttpClient,
    *,
    api_url: str,
    repo: str,
    token: str,
    request: ReleaseRequest,
) -> Result[PublishOutcome, PublishError]:
    """Create `request` as a release of `repo`.

    Args:
        http: Client performing the POST
        api_url: API root, e.g. https://api.github.com
        repo: Repository as "owner/name"
        token: Token for the `Authorization: token ...` header
        request: Release to create

    Returns:
        Ok(Created) on 201, Ok(AlreadyExists) when the release exists,
        Err(PublishError) for every other response or transport failure
    """
    url = releases_url(api_url, repo)
    headers = {
        "Authorization": f"token {token}",
        "Accept": _API_MEDIA_TYPE,
    }

    result = http.post_json(url, request.to_payload(), headers)
    if isinstance(result, Err):
        return Err(PublishError(message=str(result.error)))

    response = result.value
    if response.status == 201:
        return Ok(Created(release=_parse_created(response)))

    if is_already_exists(response):
        return Ok(AlreadyExists(detail=response.body.strip()))

    hint: str | None = None
    if response.status == 401:
        hint = "check that the token is valid"
    elif response.status == 404:
        hint = f"check that {repo} exists and the token can write to it"

    return Err(
        PublishError(
            message=f"{response.status_line}: {response.body.strip()}",
            status=response.status,
            body=response.body,
            hint=hint,
        )
    )
