"""Subprocess execution with Result-based error handling.

Output is captured with stderr folded into stdout, so a failing command's
diagnostics appear in the same text the caller would have parsed. Output
is decoded as UTF-8 whatever the locale; undecodable bytes become U+FFFD.

Usage:
    result = run(["git", "tag", "-l", "v1.0"], cwd=Path("."))
    match result:
        case Ok(output):
            print(output)
        case Err(error):
            print(f"Failed: {error.output}")
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from createrel.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: Exit code, or -1 if the process never ran or timed out.
        output: Combined stdout and stderr.
    """

    command: tuple[str, ...]
    returncode: int
    output: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return its combined output.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(output) on exit status 0, Err(ProcessError) otherwise.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        partial = ""
        if isinstance(e.stdout, bytes):
            partial = e.stdout.decode("utf-8", errors="replace")
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                output=f"{partial}Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, output=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                output=proc.stdout,
            )
        )

    return Ok(proc.stdout)
