from __future__ import annotations

import os
from pathlib import Path

import typer

from createrel import __version__
from createrel.core.config import DEFAULT_HTTP_TIMEOUT_SECONDS, resolve_config
from createrel.core.errors import ErrorCode
from createrel.core.result import Err
from createrel.git.tags import GitTagReader
from createrel.output.console import RichConsole
from createrel.release.http import RealHttpClient
from createrel.release.service import create_release

app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.command()
def createrel(
    repo: str = typer.Argument(..., metavar="OWNER/REPO", help="Target repository"),
    tag: str = typer.Argument(..., help="Annotated tag to publish"),
    token: str | None = typer.Option(
        None,
        "-t",
        "--token",
        help="API token (default: $GITHUB_TOKEN)",
        show_default=False,
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Print the release before publishing"
    ),
    repo_dir: Path | None = typer.Option(
        None,
        "-C",
        "--repo-dir",
        help="Repository checkout to read the tag from (default: cwd)",
    ),
    api_url: str | None = typer.Option(
        None,
        "--api-url",
        help="API root (default: $GITHUB_API_URL or https://api.github.com)",
        show_default=False,
    ),
    timeout: float = typer.Option(
        DEFAULT_HTTP_TIMEOUT_SECONDS, "--timeout", help="HTTP timeout in seconds"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Create a release for TAG, using the tag's annotation as release notes.

    Tags containing a hyphen are published as pre-releases. A release that
    already exists is not an error.
    """
    config_result = resolve_config(
        repo,
        tag,
        token=token,
        environ=os.environ,
        verbose=verbose,
        api_url=api_url,
        timeout=timeout,
        repo_dir=repo_dir,
    )
    if isinstance(config_result, Err):
        error = config_result.error
        typer.echo(f"error: {error.message}", err=True)
        if error.hint:
            typer.echo(f"hint: {error.hint}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    config = config_result.value
    code = create_release(
        config,
        reader=GitTagReader(config.repo_dir),
        http=RealHttpClient(timeout=config.timeout),
        console=RichConsole(),
    )
    if code.is_success:
        return
    raise typer.Exit(code=int(code))


def main() -> None:
    app(prog_name="createrel")
