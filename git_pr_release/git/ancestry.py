"""Ancestry queries over git's commit graph."""

from git_pr_release.git.refs import CommitRef
from git_pr_release.git.repository import GitRepository


class AncestryChecker:
    """Decides whether one commit is reachable from another."""

    def __init__(self, repository: GitRepository):
        self.repository = repository

    def is_ancestor(self, candidate: CommitRef | str, reference: CommitRef | str) -> bool:
        """Return True iff ``candidate`` is an ancestor of ``reference``.

        A feature tip is already released when it is an ancestor of the
        production tip, i.e. their merge-base is the tip itself.
        """
        candidate_sha = str(candidate)
        return self.repository.merge_base(candidate_sha, str(reference)) == candidate_sha
