"""HTTP client abstraction for the releases API.

This module provides:
- HttpClient: Protocol for the one request we make (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing

Any response the server sends back, including 4xx and 5xx, is returned as
an `HttpResponse`; `HttpError` is reserved for transport failures where no
response arrived. Requests are never retried.
"""

from __future__ import annotations

import http.client
import json
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from createrel import __version__
from createrel.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpResponse",
    "MockHttpClient",
    "RealHttpClient",
]

USER_AGENT = f"createrel/{__version__}"


@dataclass(frozen=True, slots=True)
class HttpError:
    """Transport failure: nothing came back from the server.

    Attributes:
        url: The URL that failed
        message: Human-readable error message
    """

    url: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} ({self.url})"


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """A response received from the server.

    Attributes:
        status: HTTP status code
        reason: Reason phrase (may be empty over HTTP/2 proxies)
        body: Decoded response body
    """

    status: int
    reason: str
    body: str

    @property
    def status_line(self) -> str:
        """e.g. "422 Unprocessable Entity"."""
        if self.reason:
            return f"{self.status} {self.reason}"
        return str(self.status)

    def json(self) -> object | None:
        """Decoded body, or None if it is not JSON."""
        try:
            return json.loads(self.body)
        except json.JSONDecodeError:
            return None


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations."""

    def post_json(
        self,
        url: str,
        payload: dict[str, Any],
        headers: dict[str, str],
    ) -> Result[HttpResponse, HttpError]:
        """POST a JSON document.

        Args:
            url: Target URL
            payload: Object serialized as the request body
            headers: Extra request headers

        Returns:
            Ok with the response (any status), or Err with HttpError
        """
        ...


class RealHttpClient:
    """HTTP client using urllib with system certificates."""

    def __init__(self, timeout: float = 60.0, user_agent: str = USER_AGENT) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def post_json(
        self,
        url: str,
        payload: dict[str, Any],
        headers: dict[str, str],
    ) -> Result[HttpResponse, HttpError]:
        data = json.dumps(payload).encode("utf-8")
        try:
            req = urllib.request.Request(
                url,
                data=data,
                method="POST",
                headers={
                    "User-Agent": self.user_agent,
                    "Content-Type": "application/json",
                    **headers,
                },
            )
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(
                    HttpResponse(
                        status=response.status,
                        reason=response.reason or "",
                        body=response.read().decode("utf-8", errors="replace"),
                    )
                )
        except urllib.error.HTTPError as e:
            # Error statuses still carry a body the caller needs to inspect.
            body = e.read().decode("utf-8", errors="replace")
            return Ok(HttpResponse(status=e.code, reason=str(e.reason or ""), body=body))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, message=str(e.reason)))
        except http.client.HTTPException as e:
            # Malformed or truncated responses are not wrapped in URLError.
            return Err(HttpError(url=url, message=str(e) or type(e).__name__))
        except TimeoutError:
            return Err(HttpError(url=url, message=f"Request timed out after {self.timeout}s"))
        except ValueError as e:
            return Err(HttpError(url=url, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, message=str(e)))


@dataclass(frozen=True, slots=True)
class RecordedRequest:
    """A request captured by MockHttpClient."""

    url: str
    payload: dict[str, Any]
    headers: dict[str, str]


def _empty_requests() -> list[RecordedRequest]:
    return []


@dataclass
class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_response(url, HttpResponse(201, "Created", '{"id": 1}'))
        result = client.post_json(url, {"tag_name": "v1"}, {})
        assert client.requests[0].payload == {"tag_name": "v1"}
    """

    responses: dict[str, HttpResponse | HttpError] = field(default_factory=dict)
    requests: list[RecordedRequest] = field(default_factory=_empty_requests)

    def set_response(self, url: str, response: HttpResponse | HttpError) -> None:
        self.responses[url] = response

    def post_json(
        self,
        url: str,
        payload: dict[str, Any],
        headers: dict[str, str],
    ) -> Result[HttpResponse, HttpError]:
        self.requests.append(RecordedRequest(url=url, payload=payload, headers=dict(headers)))

        if url not in self.responses:
            return Ok(HttpResponse(status=404, reason="Not Found", body='{"message":"Not Found"}'))

        response = self.responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)
