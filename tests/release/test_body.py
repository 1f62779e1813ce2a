"""Unit tests for rendering and merging the release PR body."""

from datetime import UTC, datetime

import pytest

from git_pr_release.release.body import (
    build_pr_title_and_body,
    checklist_item,
    merge_pr_body,
)

FIXED_NOW = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)


class TestChecklistItem:
    """Tests for checklist item formatting."""

    def test_assignee_preferred(self, pull_factory):
        """Test the assignee is mentioned when present."""
        pull = pull_factory(12, "Add search", author="alice", assignee="bob")
        assert checklist_item(pull) == "- [ ] #12 Add search @bob"

    def test_falls_back_to_author(self, pull_factory):
        """Test the author is mentioned without an assignee."""
        pull = pull_factory(12, "Add search", author="alice")
        assert checklist_item(pull) == "- [ ] #12 Add search @alice"

    def test_author_mention_mode(self, pull_factory):
        """Test mention='author' ignores the assignee."""
        pull = pull_factory(12, "Add search", author="alice", assignee="bob")
        assert checklist_item(pull, mention="author") == "- [ ] #12 Add search @alice"

    def test_no_user(self, pull_factory):
        """Test no mention is appended without any user."""
        pull = pull_factory(12, "Add search", author=None)
        assert checklist_item(pull) == "- [ ] #12 Add search"


class TestBuildTitleAndBody:
    """Tests for build_pr_title_and_body."""

    def test_default_template(self, pull_factory):
        """Test the default title and checklist body."""
        prs = [pull_factory(3, "Fix bug"), pull_factory(7, "New page", author="carol")]

        title, body = build_pr_title_and_body(None, prs, [], now=FIXED_NOW)

        assert title == "Release 2024-01-02 03:04:05 +0000"
        assert body == "- [ ] #3 Fix bug @alice\n- [ ] #7 New page @carol"

    def test_custom_template(self, tmp_path, pull_factory, file_factory):
        """Test a template file with every variable."""
        template = tmp_path / "release.tmpl"
        template.write_text(
            "Deploy #$release_pr_number\n"
            "Files: $changed_files_count\n"
            "$pull_requests\n"
            "Cost: $$0\n",
        )
        release_pr = pull_factory(99)

        title, body = build_pr_title_and_body(
            release_pr,
            [pull_factory(3, "Fix bug")],
            [file_factory("a.py"), file_factory("b.py")],
            template_path=template,
            now=FIXED_NOW,
        )

        assert title == "Deploy #99"
        assert body == "Files: 2\n- [ ] #3 Fix bug @alice\nCost: $0"

    def test_missing_template_file(self, tmp_path):
        """Test a missing template path is an error."""
        with pytest.raises(FileNotFoundError):
            build_pr_title_and_body(None, [], [], template_path=tmp_path / "missing")


class TestMergePrBody:
    """Tests for merge_pr_body."""

    def test_empty_old_body(self):
        """Test a fresh PR takes the new body as is."""
        assert merge_pr_body("", "- [ ] #1 A") == "- [ ] #1 A"

    def test_check_marks_carried_over(self):
        """Test checked items stay checked when new items are added."""
        old = "- [x] #1 A @alice\n- [ ] #2 B @bob"
        new = "- [ ] #1 A @alice\n- [ ] #2 B @bob\n- [ ] #3 C @carol"

        assert merge_pr_body(old, new) == "- [x] #1 A @alice\n- [ ] #2 B @bob\n- [ ] #3 C @carol"

    def test_manual_notes_preserved(self):
        """Test lines added by hand survive a re-render."""
        old = "- [x] #1 A\nDeploy after 5pm\n- [ ] #2 B"
        new = "- [ ] #1 A\n- [ ] #2 B\n- [ ] #3 C"

        merged = merge_pr_body(old, new)

        assert merged.splitlines() == ["- [x] #1 A", "Deploy after 5pm", "- [ ] #2 B", "- [ ] #3 C"]

    def test_new_item_not_lost_next_to_manual_line(self):
        """Test an added item replacing a manual line's position keeps both."""
        old = "- [ ] #1 A\nnote"
        new = "- [ ] #1 A\n- [ ] #2 B"

        assert merge_pr_body(old, new).splitlines() == ["- [ ] #1 A", "note", "- [ ] #2 B"]

    def test_title_change_of_listed_pr(self):
        """Test a renamed pull request takes its new title and keeps its check."""
        assert merge_pr_body("- [x] #1 Old", "- [ ] #1 New") == "- [x] #1 New"

    def test_crlf_old_body(self):
        """Test bodies edited in the browser with CRLF line endings."""
        assert merge_pr_body("- [x] #1 A\r\nnote\r\n", "- [ ] #1 A") == "- [x] #1 A\nnote"

    def test_idempotent(self):
        """Test merging the same rendering twice is a no-op."""
        new = "Intro\n- [ ] #1 A\n- [ ] #2 B"
        first = merge_pr_body("", new)
        edited = first.replace("- [ ] #1", "- [x] #1") + "\nmanual"

        assert merge_pr_body(first, new) == first
        assert merge_pr_body(edited, new) == edited
        assert merge_pr_body(merge_pr_body(edited, new), new) == edited
