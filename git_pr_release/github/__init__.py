"""GitHub Integration Module."""

from .remote import RemoteLocation, parse_remote_url
from .rest_api import GitHubIntegration

__all__ = ["GitHubIntegration", "RemoteLocation", "parse_remote_url"]
