"""Merge resolution: which pull requests landed on staging but not production."""

from git_pr_release.resolution.graph import GraphMergeResolver
from git_pr_release.resolution.locator import ReleasePRLocator
from git_pr_release.resolution.rate_limit import IntervalRateLimiter, RateLimiter
from git_pr_release.resolution.search import SearchMergeResolver

__all__ = [
    "GraphMergeResolver",
    "IntervalRateLimiter",
    "RateLimiter",
    "ReleasePRLocator",
    "SearchMergeResolver",
]
