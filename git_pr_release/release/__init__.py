"""Release PR rendering and orchestration."""

from git_pr_release.release.body import build_pr_title_and_body, merge_pr_body
from git_pr_release.release.orchestrator import (
    ExistingReleasePR,
    NoReleasePR,
    ReleaseOrchestrator,
    ReleasePR,
    ReleaseResult,
)

__all__ = [
    "ExistingReleasePR",
    "NoReleasePR",
    "ReleaseOrchestrator",
    "ReleasePR",
    "ReleaseResult",
    "build_pr_title_and_body",
    "merge_pr_body",
]
