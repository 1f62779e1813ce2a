"""Resolve squash-merged pull requests through GitHub search."""

from git_pr_release.git.scanner import BranchRangeScanner
from git_pr_release.github.rest_api import GitHubIntegration
from git_pr_release.log_config import get_logger
from git_pr_release.resolution.rate_limit import IntervalRateLimiter, RateLimiter

logger = get_logger(__name__)


class SearchMergeResolver:
    """Maps every staging-only commit to the merged PRs that reference it.

    Squash merges leave no second parent to match against, so each commit in
    ``production..staging`` is looked up with one search request. Requests are
    issued one at a time, each gated by ``rate_limiter``.

    Attributes:
        deduplicate: Drop repeated numbers when several commits reference the
            same pull request. Off by default, so every search hit is kept.
    """

    def __init__(
        self,
        scanner: BranchRangeScanner,
        github: GitHubIntegration,
        rate_limiter: RateLimiter | None = None,
        deduplicate: bool = False,
    ):
        self.scanner = scanner
        self.github = github
        self.rate_limiter = rate_limiter or IntervalRateLimiter()
        self.deduplicate = deduplicate

    def resolve(self, production: str, staging: str) -> list[int]:
        numbers: list[int] = []
        for commit in self.scanner.all_commits_between(production, staging):
            self.rate_limiter.acquire()
            found = self.github.search_merged_pull_request_numbers(commit.sha)
            logger.debug("commit_searched", sha=commit.sha, pull_requests=found)
            numbers.extend(found)

        if self.deduplicate:
            return sorted(set(numbers))
        return sorted(numbers)
