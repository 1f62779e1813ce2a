"""Console and JSON output of a release run."""

import json
import sys
from collections.abc import Sequence
from typing import Any, TextIO

from github.File import File
from github.PullRequest import PullRequest


def result_as_dict(
    release_pr: PullRequest | None,
    merged_prs: Sequence[PullRequest],
    changed_files: Sequence[File],
) -> dict[str, Any]:
    return {
        "release_pull_request": {} if release_pr is None else release_pr.raw_data,
        "merged_pull_requests": [pr.raw_data for pr in merged_prs],
        "changed_files": [f.raw_data for f in changed_files],
    }


def dump_result_as_json(
    release_pr: PullRequest | None,
    merged_prs: Sequence[PullRequest],
    changed_files: Sequence[File],
    stream: TextIO | None = None,
) -> None:
    """Write release PR, merged PRs and changed files as one JSON document."""
    payload = result_as_dict(release_pr, merged_prs, changed_files)
    print(json.dumps(payload, default=str), file=stream or sys.stdout)


def say(message: str, stream: TextIO | None = None) -> None:
    """Print a user-facing line on stdout."""
    print(message, file=stream or sys.stdout)
