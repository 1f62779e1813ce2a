"""Render the release PR title/body and merge it into the existing body.

Templates use ``string.Template`` syntax. The first rendered line becomes the
title and the remaining lines the body. Available variables:

- ``$timestamp``: local time of the run
- ``$pull_requests``: one checklist line per merged pull request
- ``$release_pr_number``: number of the release PR (empty in preview mode)
- ``$changed_files_count``: number of files the release PR touches
"""

import difflib
import re
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from string import Template
from typing import Literal

from github.File import File
from github.PullRequest import PullRequest

from git_pr_release.log_config import get_logger

logger = get_logger(__name__)

DEFAULT_TEMPLATE = """Release $timestamp
$pull_requests
"""

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"

CHECKLIST_ITEM = re.compile(r"^- \[(?P<check>[ xX])\]\s+#(?P<number>\d+)")
UNCHECKED_ITEM = re.compile(r"^- \[ \]\s+#(?P<number>\d+)")

Mention = Literal["assignee", "author"]


def mention_for(pull: PullRequest, mention: Mention = "assignee") -> str:
    """Return '@login' for the person a checklist item should ping, or ''."""
    user = pull.user
    if mention == "assignee" and pull.assignee is not None:
        user = pull.assignee
    return f"@{user.login}" if user is not None else ""


def checklist_item(pull: PullRequest, mention: Mention = "assignee") -> str:
    """Format a pull request as '- [ ] #12 Title @login'."""
    item = f"- [ ] #{pull.number} {pull.title}"
    who = mention_for(pull, mention)
    return f"{item} {who}" if who else item


def load_template(template_path: str | Path | None) -> str:
    if template_path is None:
        return DEFAULT_TEMPLATE
    return Path(template_path).read_text(encoding="utf-8")


def build_pr_title_and_body(
    release_pr: PullRequest | None,
    merged_prs: Sequence[PullRequest],
    changed_files: Sequence[File],
    template_path: str | Path | None = None,
    mention: Mention = "assignee",
    now: datetime | None = None,
) -> tuple[str, str]:
    """Render the release PR title and a freshly generated body."""
    now = now or datetime.now().astimezone()
    rendered = Template(load_template(template_path)).safe_substitute(
        timestamp=now.strftime(TIMESTAMP_FORMAT).strip(),
        pull_requests="\n".join(checklist_item(pr, mention) for pr in merged_prs),
        release_pr_number="" if release_pr is None else str(release_pr.number),
        changed_files_count=str(len(changed_files)),
    )
    title, _, body = rendered.partition("\n")
    logger.debug(
        "release_pr_rendered",
        template_path=str(template_path) if template_path else None,
        pull_requests=len(merged_prs),
        changed_files=len(changed_files),
    )
    return title.strip(), body.rstrip("\n")


def merge_pr_body(old_body: str, new_body: str) -> str:
    """Merge a freshly rendered body into the current one.

    Check marks set on the current body are carried over to the matching pull
    request numbers. Lines present only in the current body are kept, so
    manual notes survive. Merging a body with its own rendering is a no-op.
    """
    old_lines = old_body.splitlines()
    new_lines = new_body.splitlines()

    check_status: dict[str, str] = {}
    for line in old_lines:
        match = CHECKLIST_ITEM.match(line)
        if match:
            check_status[match["number"]] = match["check"]

    old_unchecked = [
        CHECKLIST_ITEM.sub(lambda m: f"- [ ] #{m['number']}", line, count=1)
        for line in old_lines
    ]

    merged: list[str] = []
    matcher = difflib.SequenceMatcher(a=old_unchecked, b=new_lines, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag in ("equal", "insert"):
            merged.extend(new_lines[j1:j2])
        elif tag == "delete":
            merged.extend(old_unchecked[i1:i2])
        else:
            paired = min(i2 - i1, j2 - j1)
            for old_line, new_line in zip(
                old_unchecked[i1 : i1 + paired],
                new_lines[j1 : j1 + paired],
                strict=True,
            ):
                merged.extend(_merge_changed_line(old_line, new_line))
            merged.extend(old_unchecked[i1 + paired : i2])
            merged.extend(new_lines[j1 + paired : j2])

    return "\n".join(
        UNCHECKED_ITEM.sub(
            lambda m: f"- [{check_status.get(m['number'], ' ')}] #{m['number']}",
            line,
            count=1,
        )
        for line in merged
    )


def _merge_changed_line(old_line: str, new_line: str) -> list[str]:
    old_is_item = UNCHECKED_ITEM.match(old_line) is not None
    new_is_item = UNCHECKED_ITEM.match(new_line) is not None
    if old_is_item and new_is_item:
        return [new_line]
    if new_is_item:
        # Keep the manual line and still list the newly merged pull request.
        return [old_line, new_line]
    return [old_line]
