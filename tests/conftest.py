"""Shared fixtures for release tool tests."""

from unittest.mock import Mock

import pytest

from github.File import File
from github.NamedUser import NamedUser
from github.PullRequest import PullRequest

from git_pr_release.config import ReleaseConfig
from git_pr_release.git.repository import GitRepository
from git_pr_release.github.rest_api import GitHubIntegration


def make_pull(
    number: int,
    title: str = "",
    author: str | None = "alice",
    assignee: str | None = None,
    body: str | None = "",
) -> Mock:
    """Build a PullRequest mock with the attributes the release tool reads."""
    pull = Mock(spec=PullRequest)
    pull.number = number
    pull.title = title or f"Pull request {number}"
    pull.body = body
    pull.html_url = f"https://github.com/test-org/test-repo/pull/{number}"
    pull.raw_data = {"number": number, "title": pull.title}
    pull.user = None
    pull.assignee = None
    if author is not None:
        pull.user = Mock(spec=NamedUser)
        pull.user.login = author
    if assignee is not None:
        pull.assignee = Mock(spec=NamedUser)
        pull.assignee.login = assignee
    return pull


def make_file(filename: str) -> Mock:
    changed = Mock(spec=File)
    changed.filename = filename
    changed.raw_data = {"filename": filename}
    return changed


@pytest.fixture
def release_config() -> ReleaseConfig:
    """Configuration for github.com with default branches."""
    return ReleaseConfig(repository="test-org/test-repo", token="test_token")  # noqa: S106


@pytest.fixture
def mock_repository() -> Mock:
    """A GitRepository whose git calls are stubbed."""
    return Mock(spec=GitRepository)


@pytest.fixture
def mock_github() -> Mock:
    """A GitHubIntegration whose API calls are stubbed."""
    github = Mock(spec=GitHubIntegration)
    github.repository = "test-org/test-repo"
    return github


@pytest.fixture
def pull_factory():
    """Factory for PullRequest mocks."""
    return make_pull


@pytest.fixture
def file_factory():
    """Factory for changed File mocks."""
    return make_file
