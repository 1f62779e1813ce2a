"""Derive GitHub host, repository and scheme from a git remote URL."""

import re
from dataclasses import dataclass
from urllib.parse import urlparse

GITHUB_HOST = "github.com"

# git@host:owner/repo.git
SCP_LIKE_URL = re.compile(r"^(?:[\w.-]+@)?(?P<host>[\w.-]+):(?P<path>[^/].*)$")


@dataclass(frozen=True)
class RemoteLocation:
    """Where a repository lives.

    Attributes:
        host: Enterprise host name, or None for github.com
        repository: Repository in format 'owner/repo'
        scheme: Scheme used to reach the API ('https' or 'http')
    """

    host: str | None
    repository: str
    scheme: str = "https"


def _normalize_path(path: str) -> str:
    path = path.strip("/")
    if path.endswith(".git"):
        path = path[: -len(".git")]
    return path


def parse_remote_url(url: str) -> RemoteLocation:
    """Parse an ssh, scp-like or http(s) remote URL.

    Example:
        >>> parse_remote_url("git@github.com:org/repo.git")
        RemoteLocation(host=None, repository='org/repo', scheme='https')

    Raises:
        ValueError: If the URL does not name an 'owner/repo' path
    """
    url = url.strip()
    if "://" in url:
        parsed = urlparse(url)
        host = parsed.hostname or ""
        path = _normalize_path(parsed.path)
        scheme = parsed.scheme if parsed.scheme in ("http", "https") else "https"
    else:
        match = SCP_LIKE_URL.match(url)
        if match is None:
            msg = f"Unrecognized remote URL: {url}"
            raise ValueError(msg)
        host = match.group("host")
        path = _normalize_path(match.group("path"))
        scheme = "https"

    if not host or path.count("/") != 1:
        msg = f"Remote URL does not point at an 'owner/repo' repository: {url}"
        raise ValueError(msg)

    return RemoteLocation(
        host=None if host == GITHUB_HOST else host,
        repository=path,
        scheme=scheme,
    )
