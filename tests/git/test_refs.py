"""Unit tests for typed commit/ref records and their parsers."""

import pytest

from git_pr_release.git.refs import (
    CommitRef,
    MergeCommit,
    RemoteHeadRef,
    UnparseableRefError,
    parse_ls_remote_line,
    parse_merge_log_line,
    parse_pull_number,
)

PR_NUMBER = 42


class TestParseMergeLogLine:
    """Tests for parsing '%H %P' log lines."""

    def test_two_parent_merge(self):
        """Test the second parent is the feature tip."""
        merge = parse_merge_log_line("m1 a1 f1")

        assert merge.sha == CommitRef("m1")
        assert merge.mainline_parent == CommitRef("a1")
        assert merge.feature_tip == CommitRef("f1")

    def test_octopus_merge_uses_second_parent_only(self):
        """Test extra parents of an octopus merge are kept but not the tip."""
        merge = parse_merge_log_line("m1 a1 f1 f2 f3")

        assert len(merge.parents) == 4  # noqa: PLR2004
        assert merge.feature_tip == CommitRef("f1")

    def test_single_parent_has_no_feature_tip(self):
        """Test a non-merge commit yields no feature tip."""
        assert parse_merge_log_line("c1 p1").feature_tip is None

    def test_empty_line_rejected(self):
        """Test blank lines raise UnparseableRefError."""
        with pytest.raises(UnparseableRefError):
            parse_merge_log_line("   ")


class TestParseLsRemoteLine:
    """Tests for parsing ls-remote output."""

    def test_valid_pull_head_ref(self):
        """Test a well-formed pull head ref."""
        ref = parse_ls_remote_line(f"abc123\trefs/pull/{PR_NUMBER}/head")

        assert ref == RemoteHeadRef(name=f"refs/pull/{PR_NUMBER}/head", tip=CommitRef("abc123"))
        assert ref.number == PR_NUMBER

    @pytest.mark.parametrize(
        "line",
        [
            "abc123\trefs/pull/abc/head",
            "abc123\trefs/pull/12/merge",
            "abc123\trefs/pull/1/2/head",
            "abc123\trefs/pull/0/head",
            "abc123",
        ],
    )
    def test_malformed_refs_rejected(self, line):
        """Test refs not shaped like '<root>/<digits>/head' are rejected."""
        with pytest.raises(UnparseableRefError):
            parse_ls_remote_line(line)

    def test_custom_root(self):
        """Test a non-default ref root."""
        ref = parse_ls_remote_line("abc\trefs/merge-requests/7/head", root="refs/merge-requests")
        assert ref.number == 7  # noqa: PLR2004


class TestMergeCommit:
    """Tests for MergeCommit records."""

    def test_no_parents(self):
        """Test a parentless record has neither mainline nor feature tip."""
        merge = MergeCommit(CommitRef("root"), ())
        assert merge.mainline_parent is None
        assert merge.feature_tip is None


def test_parse_pull_number_error_carries_name():
    """Test the error records the offending ref name."""
    with pytest.raises(UnparseableRefError) as exc_info:
        parse_pull_number("refs/heads/main")
    assert exc_info.value.line == "refs/heads/main"
