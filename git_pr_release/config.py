"""Configuration Management with Pydantic.

Settings are resolved once per run into an immutable ``ReleaseConfig`` from
layers of decreasing precedence:

1. ``GIT_PR_RELEASE_*`` environment variables
2. ``pr-release.*`` keys in the local git configuration
3. An optional YAML file
4. Model defaults
"""

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator

from git_pr_release.git.repository import GitRepository
from git_pr_release.github.remote import parse_remote_url
from git_pr_release.log_config import get_logger

logger = get_logger(__name__)

REPO_PARTS_COUNT = 2
TRUTHY_VALUES = ("true", "1", "yes", "on")

# field name -> (environment variable, git config key)
SETTING_SOURCES: dict[str, tuple[str, str]] = {
    "production_branch": ("GIT_PR_RELEASE_BRANCH_PRODUCTION", "pr-release.branch.production"),
    "staging_branch": ("GIT_PR_RELEASE_BRANCH_STAGING", "pr-release.branch.staging"),
    "template_path": ("GIT_PR_RELEASE_TEMPLATE", "pr-release.template"),
    "labels": ("GIT_PR_RELEASE_LABELS", "pr-release.labels"),
    "mention": ("GIT_PR_RELEASE_MENTION", "pr-release.mention"),
    "token": ("GIT_PR_RELEASE_TOKEN", "pr-release.token"),
    "tls_verify": ("GIT_PR_RELEASE_SSL_VERIFY", "pr-release.ssl-verify"),
}


class ConfigurationError(Exception):
    """Raised when the configuration cannot be resolved."""


class ReleaseConfig(BaseModel):
    """Resolved settings for one release run.

    Attributes:
        repository: Repository in format 'owner/repo'
        host: GitHub Enterprise host, or None for github.com
        scheme: Scheme used for the Enterprise API endpoint
        token: GitHub access token
        production_branch: Branch that represents what is released
        staging_branch: Integration branch feature PRs are merged into
        template_path: Optional path to a release PR body template
        labels: Labels added to the release PR
        mention: Whom checklist items mention ('assignee' or 'author')
        remote: Git remote whose tracking refs are inspected
        tls_verify: Verify TLS certificates of the API endpoint
        dedup_squashed: Drop duplicate numbers found in squash mode
    """

    repository: str = Field(pattern=r"^[\w.-]+/[\w.-]+$")
    host: str | None = None
    scheme: Literal["http", "https"] = "https"
    token: str = Field(min_length=1, repr=False)
    production_branch: str = Field(default="master", min_length=1)
    staging_branch: str = Field(default="staging", min_length=1)
    template_path: Path | None = None
    labels: tuple[str, ...] = ()
    mention: Literal["assignee", "author"] = "assignee"
    remote: str = "origin"
    tls_verify: bool = True
    dedup_squashed: bool = False

    model_config = {"frozen": True, "str_strip_whitespace": True}

    @field_validator("repository")
    @classmethod
    def validate_repository(cls, v: str) -> str:
        parts = v.split("/")
        if len(parts) != REPO_PARTS_COUNT or not all(parts):
            msg = "Repository must be in format 'owner/repo'"
            raise ValueError(msg)
        return v

    @field_validator("labels", mode="before")
    @classmethod
    def split_labels(cls, v: Any) -> Any:
        """Accept a comma-separated string as well as a list."""
        if v is None:
            return ()
        if isinstance(v, str):
            return tuple(label for label in re.split(r"\s*,\s*", v.strip()) if label)
        return v

    @field_validator("tls_verify", mode="before")
    @classmethod
    def parse_bool(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower() in TRUTHY_VALUES
        return v

    @property
    def api_base_url(self) -> str | None:
        """REST endpoint for Enterprise hosts; None means api.github.com."""
        if self.host is None:
            return None
        return f"{self.scheme}://{self.host}/api/v3"

    @property
    def web_base_url(self) -> str:
        return f"{self.scheme}://{self.host or 'github.com'}/"


class ConfigResolver:
    """Layered resolver producing one ``ReleaseConfig``.

    Example:
        >>> resolver = ConfigResolver(GitRepository("."))
        >>> config = resolver.resolve()
        >>> config.staging_branch
        'staging'
    """

    def __init__(
        self,
        repository: GitRepository,
        environ: Mapping[str, str] | None = None,
        config_path: str | Path | None = None,
        remote: str = "origin",
    ):
        self.repository = repository
        self.environ = os.environ if environ is None else environ
        self.config_path = Path(config_path) if config_path is not None else None
        self.remote = remote

    def _load_file(self) -> dict[str, Any]:
        if self.config_path is None:
            return {}
        if not self.config_path.exists():
            msg = f"Configuration file not found: {self.config_path}"
            raise FileNotFoundError(msg)

        logger.info("loading_configuration", path=str(self.config_path))
        try:
            with self.config_path.open() as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in configuration file: {e}"
            raise ConfigurationError(msg) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            msg = f"Configuration file must contain a mapping: {self.config_path}"
            raise ConfigurationError(msg)
        return data

    def _lookup(self, field: str) -> str | None:
        env_var, git_key = SETTING_SOURCES[field]
        value = self.environ.get(env_var)
        if value is not None:
            logger.debug("setting_from_environment", setting=field, env_var=env_var)
            return value
        return self.repository.config_get(git_key)

    def resolve(self, **overrides: Any) -> ReleaseConfig:
        """Merge all layers and validate the result.

        Args:
            **overrides: Values taking precedence over every layer (CLI flags)

        Raises:
            ConfigurationError: If the remote URL or token cannot be resolved
            pydantic.ValidationError: If a resolved value is invalid
        """
        settings: dict[str, Any] = self._load_file()
        settings.setdefault("remote", self.remote)

        for field in SETTING_SOURCES:
            value = self._lookup(field)
            if value is not None:
                settings[field] = value

        if "repository" not in settings:
            url = self.repository.config_get(f"remote.{settings['remote']}.url")
            if url is None:
                msg = f"Remote '{settings['remote']}' has no URL configured"
                raise ConfigurationError(msg)
            try:
                location = parse_remote_url(url)
            except ValueError as e:
                raise ConfigurationError(str(e)) from e
            settings["repository"] = location.repository
            settings.setdefault("host", location.host)
            settings.setdefault("scheme", location.scheme)

        if not settings.get("token"):
            env_var, git_key = SETTING_SOURCES["token"]
            msg = f"No GitHub token found; set {env_var} or git config {git_key}"
            raise ConfigurationError(msg)

        settings.update({k: v for k, v in overrides.items() if v is not None})
        config = ReleaseConfig(**settings)

        logger.debug(
            "configuration_resolved",
            repository=config.repository,
            host=config.host,
            production_branch=config.production_branch,
            staging_branch=config.staging_branch,
            template_path=str(config.template_path) if config.template_path else None,
            labels=list(config.labels),
        )
        return config


__all__ = [
    "ConfigResolver",
    "ConfigurationError",
    "ReleaseConfig",
]
