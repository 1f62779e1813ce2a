"""Git integration: porcelain wrapper, typed refs and range scanning."""

from .ancestry import AncestryChecker
from .refs import CommitRef, MergeCommit, RemoteHeadRef, UnparseableRefError
from .remote_refs import RemoteRefIndex
from .repository import GitCommandError, GitRepository
from .scanner import BranchRangeScanner

__all__ = [
    "AncestryChecker",
    "BranchRangeScanner",
    "CommitRef",
    "GitCommandError",
    "GitRepository",
    "MergeCommit",
    "RemoteHeadRef",
    "RemoteRefIndex",
    "UnparseableRefError",
]
