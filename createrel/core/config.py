"""Run configuration, resolved once at startup.

Flags win over environment variables; the resolved `ReleaseConfig` is
immutable and is the only place the rest of the code gets settings from.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result

__all__ = [
    "API_URL_ENV_VAR",
    "DEFAULT_API_URL",
    "DEFAULT_HTTP_TIMEOUT_SECONDS",
    "TOKEN_ENV_VAR",
    "ConfigError",
    "ReleaseConfig",
    "resolve_config",
]

TOKEN_ENV_VAR = "GITHUB_TOKEN"
API_URL_ENV_VAR = "GITHUB_API_URL"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_HTTP_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Invalid or missing configuration."""

    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Everything one invocation needs.

    Attributes:
        repo: Target repository as "owner/name"
        tag: Tag to publish (also used as the release name)
        token: API token sent in the Authorization header
        verbose: Echo the release before publishing
        api_url: API root without trailing slash
        timeout: HTTP timeout in seconds
        repo_dir: Local checkout where git runs
    """

    repo: str
    tag: str
    token: str
    verbose: bool = False
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    repo_dir: Path = Path(".")

    def __repr__(self) -> str:
        # Keep the token out of tracebacks and debug output.
        return (
            f"ReleaseConfig(repo={self.repo!r}, tag={self.tag!r}, token='***', "
            f"verbose={self.verbose!r}, api_url={self.api_url!r}, "
            f"timeout={self.timeout!r}, repo_dir={self.repo_dir!r})"
        )


def _valid_repo(repo: str) -> bool:
    parts = repo.split("/")
    return len(parts) == 2 and all(p.strip() == p and p for p in parts)


def resolve_config(
    repo: str,
    tag: str,
    *,
    token: str | None,
    environ: Mapping[str, str],
    verbose: bool = False,
    api_url: str | None = None,
    timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
    repo_dir: Path | None = None,
) -> Result[ReleaseConfig, ConfigError]:
    """Build a ReleaseConfig from CLI values and the environment.

    `token` and `api_url` fall back to GITHUB_TOKEN and GITHUB_API_URL only
    when the flag was not given at all; an explicitly empty token is still
    an error.

    Returns:
        Ok(ReleaseConfig), or Err(ConfigError) describing the first problem
    """
    resolved_token = token if token is not None else environ.get(TOKEN_ENV_VAR, "")
    if not resolved_token:
        return Err(
            ConfigError(
                message="no API token",
                hint=f'export {TOKEN_ENV_VAR}="<your token here>" or use the -t flag',
            )
        )

    if not _valid_repo(repo):
        return Err(
            ConfigError(
                message=f"invalid repository: {repo!r}",
                hint="expected <owner>/<name>, e.g. octocat/hello-world",
            )
        )

    if not tag:
        return Err(ConfigError(message="tag must not be empty"))

    if timeout <= 0:
        return Err(ConfigError(message=f"timeout must be positive, got {timeout}"))

    resolved_api = api_url or environ.get(API_URL_ENV_VAR) or DEFAULT_API_URL

    return Ok(
        ReleaseConfig(
            repo=repo,
            tag=tag,
            token=resolved_token,
            verbose=verbose,
            api_url=resolved_api.rstrip("/"),
            timeout=timeout,
            repo_dir=repo_dir if repo_dir is not None else Path("."),
        )
    )
