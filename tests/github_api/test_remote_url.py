"""Unit tests for remote URL parsing."""

import pytest

from git_pr_release.github.remote import RemoteLocation, parse_remote_url


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("git@github.com:org/repo.git", RemoteLocation(None, "org/repo", "https")),
        ("https://github.com/org/repo.git", RemoteLocation(None, "org/repo", "https")),
        ("https://github.com/org/repo", RemoteLocation(None, "org/repo", "https")),
        ("ssh://git@github.com/org/repo.git", RemoteLocation(None, "org/repo", "https")),
        (
            "git@ghe.example.com:team/app.git",
            RemoteLocation("ghe.example.com", "team/app", "https"),
        ),
        (
            "http://ghe.internal/team/app.git",
            RemoteLocation("ghe.internal", "team/app", "http"),
        ),
    ],
)
def test_parse_remote_url(url, expected):
    """Test supported remote URL forms."""
    assert parse_remote_url(url) == expected


@pytest.mark.parametrize("url", ["", "not a url", "https://github.com/only-owner"])
def test_parse_remote_url_rejects_invalid(url):
    """Test URLs without an owner/repo path are rejected."""
    with pytest.raises(ValueError, match="Remote URL|Unrecognized"):
        parse_remote_url(url)
