"""Create or update the release pull request.

The orchestrator receives the already resolved, fully fetched merged pull
requests and drives the remaining state machine:

- no release PR yet: open one (or, in preview mode, keep ``NoReleasePR``)
- release PR exists: reuse it
- render and merge the body, then either print it (preview) or update the
  PR and attach labels
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TextIO

from github.File import File
from github.PullRequest import PullRequest

from git_pr_release.config import ReleaseConfig
from git_pr_release.github.rest_api import GitHubIntegration
from git_pr_release.log_config import get_logger
from git_pr_release.release.body import build_pr_title_and_body, merge_pr_body
from git_pr_release.release.output import dump_result_as_json, say
from git_pr_release.resolution.locator import ReleasePRLocator

logger = get_logger(__name__)

PLACEHOLDER_TITLE = "Preparing release pull request..."


@dataclass(frozen=True)
class NoReleasePR:
    """No release PR exists and none was opened (preview mode)."""

    @property
    def pull_request(self) -> None:
        return None


@dataclass(frozen=True)
class ExistingReleasePR:
    """A release PR found on GitHub or opened during this run."""

    pull_request: PullRequest
    created: bool = False


ReleasePR = NoReleasePR | ExistingReleasePR


@dataclass
class ReleaseResult:
    """Outcome of one orchestration run."""

    release_pr: ReleasePR
    title: str
    body: str
    changed_files: list[File] = field(default_factory=list)
    updated: bool = False


class ReleaseOrchestrator:
    """Keeps the staging -> production release PR in sync.

    Attributes:
        config: Resolved configuration
        github: GitHub REST integration
        locator: Finds an existing release PR
        dry_run: Print the computed title/body instead of mutating anything
        json_output: Additionally dump the result as JSON
    """

    def __init__(
        self,
        config: ReleaseConfig,
        github: GitHubIntegration,
        locator: ReleasePRLocator | None = None,
        dry_run: bool = False,
        json_output: bool = False,
        stream: TextIO | None = None,
    ):
        self.config = config
        self.github = github
        self.locator = locator or ReleasePRLocator(github)
        self.dry_run = dry_run
        self.json_output = json_output
        self.stream = stream

    def prepare_release_pr(self) -> ReleasePR:
        """Locate the release PR, opening a placeholder one when needed."""
        found = self.locator.find_release_pr(
            self.config.production_branch,
            self.config.staging_branch,
        )
        if found is not None:
            logger.info("release_pr_found", number=found.number)
            return ExistingReleasePR(found)
        if self.dry_run:
            return NoReleasePR()

        created = self.github.create_pull_request(
            base=self.config.production_branch,
            head=self.config.staging_branch,
            title=PLACEHOLDER_TITLE,
            body="",
        )
        return ExistingReleasePR(created, created=True)

    def build_title_and_body(
        self,
        release_pr: ReleasePR,
        merged_prs: Sequence[PullRequest],
        changed_files: Sequence[File],
    ) -> tuple[str, str]:
        match release_pr:
            case ExistingReleasePR(pull_request=pull):
                old_body = pull.body or ""
            case NoReleasePR():
                old_body = ""

        title, new_body = build_pr_title_and_body(
            release_pr.pull_request,
            merged_prs,
            changed_files,
            template_path=self.config.template_path,
            mention=self.config.mention,
        )
        return title, merge_pr_body(old_body, new_body)

    def run(self, merged_prs: Sequence[PullRequest]) -> ReleaseResult:
        """Create or update the release PR for ``merged_prs``."""
        release_pr = self.prepare_release_pr()
        changed_files = self.github.pull_request_files(release_pr.pull_request)
        title, body = self.build_title_and_body(release_pr, merged_prs, changed_files)
        result = ReleaseResult(release_pr, title, body, changed_files)

        if self.dry_run:
            say("Dry-run. Not updating PR", self.stream)
            say(title, self.stream)
            say(body, self.stream)
            if self.json_output:
                dump_result_as_json(release_pr.pull_request, merged_prs, changed_files, self.stream)
            return result

        match release_pr:
            case ExistingReleasePR(pull_request=pull, created=created):
                self.update_release_pr(pull, title, body)
            case NoReleasePR():
                msg = "A release PR must exist outside of preview mode"
                raise RuntimeError(msg)

        result.updated = True
        say(f"{'Created' if created else 'Updated'} pull request: {pull.html_url}", self.stream)
        if self.json_output:
            dump_result_as_json(pull, merged_prs, changed_files, self.stream)
        return result

    def update_release_pr(self, pull: PullRequest, title: str, body: str) -> None:
        logger.debug("release_pr_body", number=pull.number, body=body)
        self.github.update_pull_request(pull, title=title, body=body)
        if self.config.labels:
            self.github.add_labels(pull, list(self.config.labels))
            logger.info("release_pr_labelled", number=pull.number, labels=list(self.config.labels))
