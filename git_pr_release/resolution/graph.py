"""Resolve merged pull requests from the merge commit graph."""

from git_pr_release.git.ancestry import AncestryChecker
from git_pr_release.git.refs import CommitRef
from git_pr_release.git.remote_refs import RemoteRefIndex
from git_pr_release.git.scanner import BranchRangeScanner
from git_pr_release.log_config import get_logger

logger = get_logger(__name__)


class GraphMergeResolver:
    """Maps merge commits on staging to pull request numbers.

    The second parent of every merge commit in ``production..staging`` is the
    tip of the merged feature branch. A pull request matches when its head ref
    points at such a tip, and is dropped when that tip is already reachable
    from production.

    Only the first two parents are consulted, so the extra branches of an
    octopus merge are not resolved.
    """

    def __init__(
        self,
        scanner: BranchRangeScanner,
        ref_index: RemoteRefIndex,
        ancestry: AncestryChecker,
    ):
        self.scanner = scanner
        self.ref_index = ref_index
        self.ancestry = ancestry

    def resolve(self, production: str, staging: str) -> list[int]:
        """Return unreleased pull request numbers in ascending order."""
        feature_tips: set[CommitRef] = {
            merge.feature_tip
            for merge in self.scanner.merge_commits_between(production, staging)
            if merge.feature_tip is not None
        }
        if not feature_tips:
            return []

        production_tip = f"{self.scanner.remote}/{production}"
        numbers: set[int] = set()
        for ref in self.ref_index.open_pull_head_refs():
            if ref.tip not in feature_tips:
                continue
            if self.ancestry.is_ancestor(ref.tip, production_tip):
                logger.debug(
                    "pull_request_already_released",
                    number=ref.number,
                    sha=ref.tip.sha,
                    production_branch=production,
                )
                continue
            numbers.add(ref.number)

        return sorted(numbers)
