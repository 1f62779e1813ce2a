"""Thin wrapper around the git command line.

Every call is a blocking ``subprocess.run``; a non-zero exit status raises
``GitCommandError`` so failures abort the run instead of yielding partial data.
"""

import subprocess
from pathlib import Path

from git_pr_release.log_config import get_logger

logger = get_logger(__name__)

GIT_CONFIG_KEY_MISSING = 1


class GitCommandError(Exception):
    """Raised when a git command exits with a non-zero status.

    Attributes:
        command: The full command line that was executed
        returncode: Exit status of the git process
        stderr: Captured standard error
    """

    def __init__(self, command: tuple[str, ...], returncode: int, stderr: str):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"{' '.join(command)} failed (exit {returncode}): {stderr.strip()}")


class GitRepository:
    """Blocking git porcelain bound to a working directory."""

    def __init__(self, cwd: str | Path | None = None, executable: str = "git"):
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.executable = executable

    def run(self, *args: str) -> list[str]:
        """Run ``git <args>`` and return its stdout split into lines.

        Raises:
            GitCommandError: If git exits with a non-zero status
        """
        command = (self.executable, *args)
        logger.debug("git_command", args=list(args))
        proc = subprocess.run(
            command,
            cwd=str(self.cwd),
            capture_output=True,
            text=True,
            check=False,
        )
        if proc.returncode != 0:
            raise GitCommandError(command, proc.returncode, proc.stderr)
        return proc.stdout.splitlines()

    def config_get(self, key: str) -> str | None:
        """Return the value of a git config key, or None when it is unset."""
        try:
            lines = self.run("config", key)
        except GitCommandError as e:
            if e.returncode == GIT_CONFIG_KEY_MISSING:
                return None
            raise
        return lines[0].strip() if lines else None

    def fetch(self, remote: str) -> None:
        """Update the remote-tracking refs of ``remote``."""
        logger.info("updating_remote", remote=remote)
        self.run("remote", "update", remote)

    def merge_base(self, first: str, second: str) -> str:
        """Return the best common ancestor of two commits."""
        return self.run("merge-base", first, second)[0].strip()

    def log(self, revision_range: str, pretty: str, *, merges_only: bool = False) -> list[str]:
        """Return one formatted line per commit in ``revision_range``."""
        args = ["log"]
        if merges_only:
            args.append("--merges")
        args.extend([f"--pretty=format:{pretty}", revision_range])
        return [line for line in self.run(*args) if line.strip()]

    def ls_remote(self, remote: str, pattern: str) -> list[str]:
        """List refs on ``remote`` matching a glob pattern."""
        return [line for line in self.run("ls-remote", remote, pattern) if line.strip()]
