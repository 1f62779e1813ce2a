"""Enumerate commits that are on staging but not yet on production."""

from git_pr_release.git.refs import CommitRef, MergeCommit, parse_merge_log_line
from git_pr_release.git.repository import GitRepository
from git_pr_release.log_config import get_logger

logger = get_logger(__name__)


class BranchRangeScanner:
    """Lists commits in ``production..staging`` on a remote's tracking refs.

    Attributes:
        repository: Git porcelain used for ``git log``
        remote: Remote whose tracking refs bound the range (default: origin)
    """

    def __init__(self, repository: GitRepository, remote: str = "origin"):
        self.repository = repository
        self.remote = remote

    def _range(self, production: str, staging: str) -> str:
        return f"{self.remote}/{production}..{self.remote}/{staging}"

    def merge_commits_between(self, production: str, staging: str) -> list[MergeCommit]:
        """Return merge commits reachable from staging but not production.

        Order is git's reverse-chronological log order.
        """
        lines = self.repository.log(
            self._range(production, staging),
            "%H %P",
            merges_only=True,
        )
        merges = [parse_merge_log_line(line) for line in lines]
        logger.debug("merge_commits_scanned", count=len(merges))
        return merges

    def all_commits_between(self, production: str, staging: str) -> list[CommitRef]:
        """Return every commit reachable from staging but not production."""
        lines = self.repository.log(self._range(production, staging), "%H")
        commits = [CommitRef(line.strip()) for line in lines]
        logger.debug("commits_scanned", count=len(commits))
        return commits
