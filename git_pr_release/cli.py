"""Command line entry point.

Resolves configuration, determines which pull requests landed on staging but
not on production, and hands them to the ``ReleaseOrchestrator``.

Exit codes:
    0: release PR created, updated or previewed
    1: no pull requests to be released
    2: git, GitHub or configuration failure
"""

import argparse
import sys
from collections.abc import Callable, Mapping, Sequence

from github import GithubException
from github.PullRequest import PullRequest
from pydantic import ValidationError
from requests.exceptions import RequestException

from git_pr_release.config import ConfigResolver, ConfigurationError, ReleaseConfig
from git_pr_release.git.ancestry import AncestryChecker
from git_pr_release.git.remote_refs import RemoteRefIndex
from git_pr_release.git.repository import GitCommandError, GitRepository
from git_pr_release.git.scanner import BranchRangeScanner
from git_pr_release.github.rest_api import GitHubIntegration
from git_pr_release.log_config import bind_context, clear_context, configure_logging, get_logger
from git_pr_release.release.orchestrator import ReleaseOrchestrator
from git_pr_release.release.output import say
from git_pr_release.resolution.graph import GraphMergeResolver
from git_pr_release.resolution.rate_limit import IntervalRateLimiter, RateLimiter
from git_pr_release.resolution.search import SearchMergeResolver

logger = get_logger(__name__)

EXIT_SUCCESS = 0
EXIT_NOTHING_TO_RELEASE = 1
EXIT_FAILURE = 2

GitHubFactory = Callable[[ReleaseConfig], GitHubIntegration]


def create_github(config: ReleaseConfig) -> GitHubIntegration:
    return GitHubIntegration(
        token=config.token,
        repository=config.repository,
        base_url=config.api_base_url,
        verify=config.tls_verify,
    )


def fetch_merged_pr_numbers(
    config: ReleaseConfig,
    repository: GitRepository,
    github: GitHubIntegration,
    squashed: bool = False,
    no_fetch: bool = False,
    rate_limiter: RateLimiter | None = None,
) -> list[int]:
    """Return numbers of pull requests merged into staging but not released."""
    if not no_fetch:
        repository.fetch(config.remote)

    scanner = BranchRangeScanner(repository, remote=config.remote)
    if squashed:
        resolver = SearchMergeResolver(
            scanner,
            github,
            rate_limiter=rate_limiter or IntervalRateLimiter(),
            deduplicate=config.dedup_squashed,
        )
    else:
        resolver = GraphMergeResolver(
            scanner,
            RemoteRefIndex(repository, remote=config.remote),
            AncestryChecker(repository),
        )
    return resolver.resolve(config.production_branch, config.staging_branch)


def fetch_merged_prs(github: GitHubIntegration, numbers: Sequence[int]) -> list[PullRequest]:
    merged_prs = []
    for number in sorted(numbers):
        pull = github.get_pull_request(number)
        say(f"To be released: #{pull.number} {pull.title}")
        merged_prs.append(pull)
    return merged_prs


def run(
    args: argparse.Namespace,
    repository: GitRepository | None = None,
    environ: Mapping[str, str] | None = None,
    github_factory: GitHubFactory = create_github,
    rate_limiter: RateLimiter | None = None,
) -> int:
    """Execute one release run and return the process exit code."""
    repository = repository or GitRepository()
    try:
        config = ConfigResolver(
            repository,
            environ=environ,
            config_path=args.config,
        ).resolve(dedup_squashed=True if args.dedup_squashed else None)
        bind_context(
            repository=config.repository,
            production_branch=config.production_branch,
            staging_branch=config.staging_branch,
        )

        github = github_factory(config)
        numbers = fetch_merged_pr_numbers(
            config,
            repository,
            github,
            squashed=args.squashed,
            no_fetch=args.no_fetch,
            rate_limiter=rate_limiter,
        )
        if not numbers:
            logger.error("No pull requests to be released")
            return EXIT_NOTHING_TO_RELEASE

        merged_prs = fetch_merged_prs(github, numbers)
        orchestrator = ReleaseOrchestrator(
            config,
            github,
            dry_run=args.dry_run,
            json_output=args.json,
        )
        orchestrator.run(merged_prs)

    except (ConfigurationError, ValidationError) as e:
        logger.exception("configuration_error", error=str(e))
        return EXIT_FAILURE

    except GitCommandError as e:
        logger.exception("git_command_failed", command=list(e.command), error=e.stderr.strip())
        return EXIT_FAILURE

    except GithubException as e:
        logger.exception("github_request_failed", status=e.status, error=str(e))
        return EXIT_FAILURE

    except RequestException as e:
        logger.exception("github_unreachable", error=str(e))
        return EXIT_FAILURE

    except (OSError, UnicodeDecodeError) as e:
        logger.exception("file_read_failed", error=str(e))
        return EXIT_FAILURE

    finally:
        clear_context()

    return EXIT_SUCCESS


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="git-pr-release",
        description="Create or update a release pull request from staging into production",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create or update the release pull request
  git-pr-release

  # Preview the title and body without touching GitHub
  git-pr-release --dry-run

  # Repository uses squash merges; skip 'git remote update' on CI
  git-pr-release --squashed --no-fetch
        """,
    )

    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Do not create/update a PR. Just prints out",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Show data of target PRs in JSON format",
    )
    parser.add_argument(
        "--no-fetch",
        action="store_true",
        help="Do not fetch from remote repo before determining target PRs (CI friendly)",
    )
    parser.add_argument(
        "--squashed",
        action="store_true",
        help="Handle squash merged PRs",
    )
    parser.add_argument(
        "--dedup-squashed",
        action="store_true",
        help="Drop duplicate PR numbers found when handling squash merged PRs",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        default=None,
        help="Optional YAML file with default settings",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (INFO level)",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug output (DEBUG level)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Render log records as JSON",
    )

    args = parser.parse_args(argv)

    if args.debug:
        args.log_level = "DEBUG"
    elif args.verbose:
        args.log_level = "INFO"

    return args


def main(argv: Sequence[str] | None = None) -> None:
    """Parse arguments, run, and exit with the resulting code."""
    args = parse_args(argv)
    configure_logging(args.log_level, json_logs=args.json_logs)
    try:
        sys.exit(run(args))
    except KeyboardInterrupt:
        sys.exit(EXIT_FAILURE)
