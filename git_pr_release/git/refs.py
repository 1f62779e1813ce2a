"""Typed records for commits and refs, with parsers for git's text output."""

import re
from dataclasses import dataclass

PULL_REF_ROOT = "refs/pull"


class UnparseableRefError(ValueError):
    """Raised when a line of git output cannot be parsed into a typed record."""

    def __init__(self, line: str, reason: str = "unrecognized format"):
        self.line = line
        self.reason = reason
        super().__init__(f"Cannot parse {line!r}: {reason}")


@dataclass(frozen=True, slots=True)
class CommitRef:
    """An opaque commit identifier."""

    sha: str

    def __str__(self) -> str:
        return self.sha


@dataclass(frozen=True, slots=True)
class MergeCommit:
    """A commit together with its ordered parents."""

    sha: CommitRef
    parents: tuple[CommitRef, ...]

    @property
    def mainline_parent(self) -> CommitRef | None:
        return self.parents[0] if self.parents else None

    @property
    def feature_tip(self) -> CommitRef | None:
        # Octopus merges: only the second parent is treated as the feature tip.
        return self.parents[1] if len(self.parents) > 1 else None


@dataclass(frozen=True, slots=True)
class RemoteHeadRef:
    """A pull request head ref advertised by the remote."""

    name: str
    tip: CommitRef
    root: str = PULL_REF_ROOT

    @property
    def number(self) -> int:
        """Pull request number encoded in the ref name."""
        return parse_pull_number(self.name, self.root)


def parse_pull_number(name: str, root: str = PULL_REF_ROOT) -> int:
    """Extract the pull request number from ``<root>/<digits>/head``.

    Raises:
        UnparseableRefError: If the name does not follow that pattern
    """
    match = re.fullmatch(rf"{re.escape(root)}/(\d+)/head", name)
    if match is None:
        raise UnparseableRefError(name, "not a pull request head ref")
    number = int(match.group(1))
    if number <= 0:
        raise UnparseableRefError(name, "pull request number must be positive")
    return number


def parse_merge_log_line(line: str) -> MergeCommit:
    """Parse a ``git log --pretty=format:'%H %P'`` line.

    Example:
        >>> parse_merge_log_line("m1 a1 f1").feature_tip
        CommitRef(sha='f1')
    """
    fields = line.split()
    if not fields:
        raise UnparseableRefError(line, "empty log line")
    sha, *parents = fields
    return MergeCommit(CommitRef(sha), tuple(CommitRef(p) for p in parents))


def parse_ls_remote_line(line: str, root: str = PULL_REF_ROOT) -> RemoteHeadRef:
    """Parse a ``git ls-remote`` line of the form ``<sha>\\t<ref>``.

    The ref name is validated, so the returned record always has a number.
    """
    fields = line.split()
    if len(fields) != 2:  # noqa: PLR2004
        raise UnparseableRefError(line, "expected '<sha> <ref>'")
    sha, name = fields
    parse_pull_number(name, root)
    return RemoteHeadRef(name=name, tip=CommitRef(sha), root=root)
