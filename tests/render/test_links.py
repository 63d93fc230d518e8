import unittest

from changelog_generator.render.links import format_link, get_commit_url, link_pull_requests


class TestCommitUrl(unittest.TestCase):
    """Tests for provider specific commit URLs."""

    def test_github(self) -> None:
        self.assertEqual(get_commit_url("https://github.com/x/y", "abc123"), "https://github.com/x/y/commit/abc123")

    def test_bitbucket(self) -> None:
        self.assertEqual(
            get_commit_url("https://bitbucket.org/x/y", "abc123"),
            "https://bitbucket.org/x/y/commits/abc123",
        )

    def test_gitlab_strips_git_suffix(self) -> None:
        self.assertEqual(get_commit_url("https://gitlab.com/x/y.git", "abc123"), "https://gitlab.com/x/y/commit/abc123")

    def test_git_suffix_kept_for_other_hosts(self) -> None:
        self.assertEqual(get_commit_url("https://github.com/x/y.git", "abc123"), "https://github.com/x/y.git/commit/abc123")


class TestPullRequestLinks(unittest.TestCase):
    """Tests for pull request reference rewriting."""

    def test_markdown_links(self) -> None:
        self.assertEqual(
            link_pull_requests("merge #4 and #56", "https://github.com/x/y"),
            "merge [#4](https://github.com/x/y/pull/4) and [#56](https://github.com/x/y/pull/56)",
        )

    def test_html_links(self) -> None:
        self.assertEqual(
            link_pull_requests("fix (#9)", "https://github.com/x/y", html=True),
            'fix (<a href="https://github.com/x/y/pull/9">#9</a>)',
        )

    def test_references_must_start_with_non_zero_digit(self) -> None:
        self.assertEqual(link_pull_requests("issue #0 and #abc", "https://h"), "issue #0 and #abc")

    def test_format_link(self) -> None:
        self.assertEqual(format_link("t", "u"), "[t](u)")
        self.assertEqual(format_link("t", "u", html=True), '<a href="u">t</a>')


if __name__ == "__main__":
    unittest.main()
