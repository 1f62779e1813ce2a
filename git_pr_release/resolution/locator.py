"""Find the release pull request, if one is open."""

from github.PullRequest import PullRequest

from git_pr_release.github.rest_api import GitHubIntegration
from git_pr_release.log_config import get_logger

logger = get_logger(__name__)


class ReleasePRLocator:
    """Looks up the open pull request from staging into production."""

    def __init__(self, github: GitHubIntegration):
        self.github = github

    def find_release_pr(self, production: str, staging: str) -> PullRequest | None:
        """Return the first open staging -> production pull request, or None.

        Duplicates are not reconciled; the first one GitHub returns wins.
        """
        logger.info("searching_existing_release_pr", head=staging, base=production)
        pulls = self.github.find_pull_requests(head=staging, base=production)
        return pulls[0] if pulls else None
