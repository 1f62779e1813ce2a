"""GitHub REST API Integration using PyGithub.

Provides the pull request operations the release workflow needs: lookup,
search, creation, update, labelling and changed-file listing.
"""

from github import Auth, Github, GithubException
from github.File import File
from github.PullRequest import PullRequest
from github.Repository import Repository

from git_pr_release.log_config import get_logger

logger = get_logger(__name__)

DEFAULT_API_URL = "https://api.github.com"


class GitHubIntegration:
    """GitHub REST API integration bound to a single repository.

    TLS verification is a per-client setting handed to PyGithub, so talking to
    a GitHub Enterprise host with a private CA never affects other clients.

    Example:
        >>> github = GitHubIntegration(token="ghp_...", repository="org/repo")
        >>> github.get_pull_request(12).title
        'Add feature'

    Attributes:
        github: Underlying PyGithub client
        repository: Repository name in format 'owner/repo'
    """

    def __init__(
        self,
        token: str,
        repository: str,
        base_url: str | None = None,
        verify: bool = True,
    ):
        """Initialize GitHub integration with authentication.

        Args:
            token: GitHub personal access token or OAuth token
            repository: Repository name in format 'owner/repo'
            base_url: API endpoint, e.g. 'https://ghe.example.com/api/v3'
            verify: Whether to verify the server's TLS certificate
        """
        self.github = Github(
            auth=Auth.Token(token),
            base_url=base_url or DEFAULT_API_URL,
            verify=verify,
        )
        self.repository = repository
        self._repo: Repository | None = None
        logger.debug(
            "github_integration_initialized",
            repository=repository,
            base_url=base_url or DEFAULT_API_URL,
            verify=verify,
        )

    @property
    def owner(self) -> str:
        return self.repository.split("/")[0]

    def _get_repository(self) -> Repository:
        """Get repository object with error handling.

        Raises:
            GithubException: If repository not found or access denied
        """
        if self._repo is None:
            try:
                self._repo = self.github.get_repo(self.repository)
            except GithubException as e:
                raise GithubException(
                    e.status,
                    f"Failed to access repository '{self.repository}': {e.data}",
                ) from e
        return self._repo

    def get_pull_request(self, number: int) -> PullRequest:
        """Fetch a single pull request by number."""
        return self._get_repository().get_pull(number)

    def find_pull_requests(self, head: str, base: str) -> list[PullRequest]:
        """List open pull requests from ``head`` into ``base``.

        Args:
            head: Head branch; qualified as 'owner:branch' for the API
            base: Base branch name
        """
        qualified_head = head if ":" in head else f"{self.owner}:{head}"
        pulls = self._get_repository().get_pulls(state="open", head=qualified_head, base=base)
        return list(pulls)

    def create_pull_request(self, base: str, head: str, title: str, body: str = "") -> PullRequest:
        """Open a new pull request from ``head`` into ``base``."""
        pull = self._get_repository().create_pull(base=base, head=head, title=title, body=body)
        logger.info("pull_request_created", number=pull.number, base=base, head=head)
        return pull

    def update_pull_request(self, pull: PullRequest, title: str, body: str) -> None:
        """Replace the title and body of a pull request."""
        pull.edit(title=title, body=body)

    def add_labels(self, pull: PullRequest, labels: list[str]) -> None:
        """Attach labels to a pull request; existing labels are kept."""
        if labels:
            pull.add_to_labels(*labels)

    def pull_request_files(self, pull: PullRequest | None) -> list[File]:
        """Return every changed file of a pull request, following pagination."""
        if pull is None:
            return []
        return list(pull.get_files())

    def search_merged_pull_request_numbers(self, sha: str) -> list[int]:
        """Return numbers of merged pull requests that reference ``sha``."""
        query = f"repo:{self.repository} is:pr is:merged {sha}"
        return [issue.number for issue in self.github.search_issues(query)]

    def close(self) -> None:
        """Close the GitHub client connection."""
        self.github.close()
