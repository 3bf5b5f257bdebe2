"""Tests for createrel.git.tags."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

import createrel.git.tags as tags
from createrel.core.result import Err, Ok, Result
from createrel.git.tags import (
    ExtractionError,
    GitTagReader,
    MockTagReader,
    TagReader,
    parse_tag_listing,
    read_tag_message,
)
from createrel.platform.process import ProcessError


# =============================================================================
# parse_tag_listing
# =============================================================================


class TestParseTagListing:
    def test_strips_indent_and_subject(self) -> None:
        listing = (
            "v1.2.0          Release 1.2.0\n"
            "    \n"
            "    Fixes:\n"
            "    - crash on empty input\n"
        )
        assert parse_tag_listing(listing) == "Fixes:\n- crash on empty input\n"

    def test_first_line_always_discarded(self) -> None:
        listing = "    looks like a body line\n    real body\n"
        assert parse_tag_listing(listing) == "real body\n"

    def test_only_subject_gives_empty_body(self) -> None:
        assert parse_tag_listing("v1.0            Subject only\n") == ""

    def test_empty_listing(self) -> None:
        assert parse_tag_listing("") == ""

    def test_strips_exactly_four_spaces(self) -> None:
        listing = "v1.0 subj\n        nested\n      six\n"
        assert parse_tag_listing(listing) == "    nested\n  six\n"

    def test_unindented_lines_kept(self) -> None:
        listing = "v1.0 subj\n  two spaces\n\tTab\nplain\n"
        assert parse_tag_listing(listing) == "  two spaces\n\tTab\nplain\n"

    def test_leading_blank_lines_removed(self) -> None:
        listing = "v1.0 subj\n\n    \n\nbody\n"
        assert parse_tag_listing(listing) == "body\n"

    def test_inner_blank_lines_preserved(self) -> None:
        listing = "v1.0 subj\n    first\n    \n\n    second\n    \n"
        assert parse_tag_listing(listing) == "first\n\n\nsecond\n\n"

    def test_missing_trailing_newline(self) -> None:
        assert parse_tag_listing("v1.0 subj\n    body") == "body\n"

    def test_crlf_line_endings(self) -> None:
        listing = "v1.0 subj\r\n    one\r\n    two\r\n"
        assert parse_tag_listing(listing) == "one\ntwo\n"


# =============================================================================
# read_tag_message / MockTagReader
# =============================================================================


class TestReadTagMessage:
    def test_mock_is_a_tag_reader(self) -> None:
        assert isinstance(MockTagReader(), TagReader)

    def test_returns_parsed_body(self) -> None:
        reader = MockTagReader()
        reader.set_listing("v1.0", "v1.0 Subject\n    \n    Body\n")

        result = read_tag_message(reader, "v1.0")

        assert result == Ok("Body\n")
        assert reader.calls == ["v1.0"]

    def test_reader_error_propagates(self) -> None:
        result = read_tag_message(MockTagReader(), "v9.9")

        assert isinstance(result, Err)
        assert result.error.tag == "v9.9"
        assert result.error.returncode == 128

    def test_empty_listing_means_tag_not_found(self) -> None:
        reader = MockTagReader()
        reader.set_listing("v1.0", "")

        result = read_tag_message(reader, "v1.0")

        assert isinstance(result, Err)
        assert str(result.error) == "tag not found: v1.0"


# =============================================================================
# GitTagReader
# =============================================================================


class TestGitTagReaderCommand:
    def test_invokes_git_tag_listing(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        seen: dict[str, object] = {}

        def fake_run(
            cmd: list[str],
            cwd: Path,
            env: dict[str, str] | None = None,
            *,
            timeout: float | None = None,
        ) -> Result[str, ProcessError]:
            seen["cmd"] = cmd
            seen["cwd"] = cwd
            seen["timeout"] = timeout
            return Ok("v1.0 subj\n")

        monkeypatch.setattr(tags, "run_process", fake_run)

        result = GitTagReader(tmp_path, timeout=5.0).read_tag_annotation("v1.0")

        assert result == Ok("v1.0 subj\n")
        assert seen["cmd"] == ["git", "tag", "-n9999", "-l", "v1.0"]
        assert seen["cwd"] == tmp_path
        assert seen["timeout"] == 5.0

    def test_failure_carries_git_output(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def fake_run(
            cmd: list[str],
            cwd: Path,
            env: dict[str, str] | None = None,
            *,
            timeout: float | None = None,
        ) -> Result[str, ProcessError]:
            return Err(
                ProcessError(
                    command=tuple(cmd),
                    returncode=128,
                    output="fatal: not a git repository\n",
                )
            )

        monkeypatch.setattr(tags, "run_process", fake_run)

        result = GitTagReader(tmp_path).read_tag_annotation("v1.0")

        assert result == Err(
            ExtractionError(tag="v1.0", message="fatal: not a git repository", returncode=128)
        )


def _git(repo: Path, *args: str) -> None:
    subprocess.run(
        [
            "git",
            "-c",
            "user.name=Test",
            "-c",
            "user.email=test@example.com",
            "-c",
            "commit.gpgsign=false",
            "-c",
            "tag.gpgsign=false",
            *args,
        ],
        cwd=repo,
        check=True,
        capture_output=True,
    )


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
class TestGitTagReaderIntegration:
    @pytest.fixture
    def repo(self, tmp_path: Path) -> Path:
        _git(tmp_path, "init", "-q")
        _git(tmp_path, "commit", "-q", "--allow-empty", "-m", "initial")
        return tmp_path

    def test_annotated_tag(self, repo: Path) -> None:
        message = "Release 1.0\n\nFixes:\n- crash on empty input\n\nThanks all\n"
        _git(repo, "tag", "-a", "v1.0", "-m", message)

        result = read_tag_message(GitTagReader(repo), "v1.0")

        assert result == Ok("Fixes:\n- crash on empty input\n\nThanks all\n")

    def test_subject_only_tag(self, repo: Path) -> None:
        _git(repo, "tag", "-a", "v1.1", "-m", "Just a subject")

        result = read_tag_message(GitTagReader(repo), "v1.1")

        assert result == Ok("")

    def test_non_utf8_annotation(self, repo: Path) -> None:
        message_file = repo / "TAG_MSG"
        message_file.write_bytes(b"Release\n\nCaf\xe9 fixes\n")
        _git(repo, "tag", "-a", "v1.2", "-F", str(message_file))

        result = read_tag_message(GitTagReader(repo), "v1.2")

        assert result == Ok("Caf\ufffd fixes\n")

    def test_unknown_tag(self, repo: Path) -> None:
        result = read_tag_message(GitTagReader(repo), "v9.9")

        assert isinstance(result, Err)
        assert "tag not found" in result.error.message

    def test_not_a_repository(self, tmp_path: Path) -> None:
        outside = tmp_path / "plain"
        outside.mkdir()

        result = GitTagReader(outside).read_tag_annotation("v1.0")

        assert isinstance(result, Err)
        assert result.error.returncode != 0
        assert result.error.message
