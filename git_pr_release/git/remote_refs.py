"""Index of pull request head refs advertised by the remote."""

from git_pr_release.git.refs import (
    PULL_REF_ROOT,
    RemoteHeadRef,
    UnparseableRefError,
    parse_ls_remote_line,
)
from git_pr_release.git.repository import GitRepository
from git_pr_release.log_config import get_logger

logger = get_logger(__name__)


class RemoteRefIndex:
    """Lists ``<root>/*/head`` refs on a remote.

    Malformed refs are skipped with one warning each.
    """

    def __init__(
        self,
        repository: GitRepository,
        remote: str = "origin",
        root: str = PULL_REF_ROOT,
    ):
        self.repository = repository
        self.remote = remote
        self.root = root

    def open_pull_head_refs(self) -> list[RemoteHeadRef]:
        refs = []
        for line in self.repository.ls_remote(self.remote, f"{self.root}/*/head"):
            try:
                refs.append(parse_ls_remote_line(line, root=self.root))
            except UnparseableRefError as e:
                logger.warning("bad_pull_request_head_ref", ref=e.line, reason=e.reason)
        return refs
