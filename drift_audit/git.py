"""Git subprocess helpers."""

from __future__ import annotations

from pathlib import Path
from subprocess import run


class GitError(RuntimeError):
    """Raised when git command execution fails."""


def get_status_lines(repo: Path) -> list[str]:
    """Return non-empty ``git status --porcelain`` output lines for a repository."""
    return parse_status_output(_run_git(repo, ["status", "--porcelain"]))


def parse_status_output(stdout: str) -> list[str]:
    """Split porcelain output on newlines only; filenames may hold other separators."""
    return [line for line in stdout.split("\n") if line]


def _run_git(repo: Path, args: list[str]) -> str:
    try:
        completed = run(
            ["git", *args],
            cwd=repo,
            check=False,
            capture_output=True,
        )
    except OSError as exc:
        raise GitError(f"git {' '.join(args)} could not be started: {exc}") from exc

    stdout = completed.stdout.decode("utf-8", errors="replace")
    # A failing command that still produced output is treated as usable.
    if completed.returncode != 0 and not stdout:
        stderr = completed.stderr.decode("utf-8", errors="replace").strip()
        raise GitError(stderr or f"git {' '.join(args)} failed")

    return stdout
