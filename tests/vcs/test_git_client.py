import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from changelog_generator.vcs.git_client import GitClient, GitError, RawCommit, parse_log_output


def completed(stdout="", returncode=0, stderr=""):
    result = MagicMock(spec=subprocess.CompletedProcess)
    result.stdout = stdout
    result.stderr = stderr
    result.returncode = returncode
    return result


class TestGitClient(unittest.TestCase):
    def test_find_repo_root(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / ".git").mkdir()
            nested = root / "a" / "b"
            nested.mkdir(parents=True)
            self.assertEqual(GitClient.find_repo_root(nested), root)

    def test_resolve_revisions(self) -> None:
        cases = [
            (None, None, ""),
            ("v1.0.0", None, "v1.0.0..HEAD"),
            ("v1.0.0..v1.1.0", "v0.9.0", "v1.0.0..v1.1.0"),
            (None, "v0.9.0", "v0.9.0..HEAD"),
            ("", "  ", ""),
        ]
        for tag, latest, expected in cases:
            with self.subTest(tag=tag, latest=latest):
                self.assertEqual(GitClient.resolve_revisions(tag, latest), expected)

    @patch("changelog_generator.vcs.git_client.subprocess.run")
    def test_get_latest_tag(self, mock_run) -> None:
        mock_run.return_value = completed("v1.2.3\n")
        client = GitClient(Path("/repo"))
        self.assertEqual(client.get_latest_tag(), "v1.2.3")
        args = mock_run.call_args[0][0]
        self.assertEqual(args, ["git", "describe", "--tags", "--abbrev=0"])

    @patch("changelog_generator.vcs.git_client.subprocess.run")
    def test_get_latest_tag_without_tags(self, mock_run) -> None:
        mock_run.return_value = completed("", returncode=128, stderr="fatal: No names found")
        self.assertIsNone(GitClient(Path("/repo")).get_latest_tag())

    @patch("changelog_generator.vcs.git_client.subprocess.run")
    def test_get_log(self, mock_run) -> None:
        mock_run.return_value = completed("abc\nfeat: x\nbody\n\n===END===\ndef\nfix: y\n\n===END===\n")
        commits = GitClient(Path("/repo")).get_log("v1.0.0..HEAD")
        self.assertEqual(
            commits,
            [RawCommit("abc", "feat: x", "body"), RawCommit("def", "fix: y", "")],
        )
        args = mock_run.call_args[0][0]
        self.assertEqual(args[:3], ["git", "log", "-E"])
        self.assertEqual(args[-1], "v1.0.0..HEAD")

    @patch("changelog_generator.vcs.git_client.subprocess.run")
    def test_get_log_whole_history(self, mock_run) -> None:
        mock_run.return_value = completed("")
        self.assertEqual(GitClient(Path("/repo")).get_log(), [])
        args = mock_run.call_args[0][0]
        self.assertTrue(args[-1].startswith("--format="))

    @patch("changelog_generator.vcs.git_client.subprocess.run")
    def test_get_log_failure_raises(self, mock_run) -> None:
        mock_run.return_value = completed("", returncode=128, stderr="fatal: bad revision 'nope..HEAD'")
        with self.assertRaises(GitError) as ctx:
            GitClient(Path("/repo")).get_log("nope..HEAD")
        self.assertIn("bad revision", str(ctx.exception))

    @patch("changelog_generator.vcs.git_client.subprocess.run")
    def test_missing_git_executable(self, mock_run) -> None:
        mock_run.side_effect = FileNotFoundError("git")
        with self.assertRaises(GitError):
            GitClient(Path("/repo")).get_log()

    @patch("changelog_generator.vcs.git_client.subprocess.run")
    def test_get_remote_url(self, mock_run) -> None:
        mock_run.return_value = completed("git@github.com:user/repo.git\n")
        self.assertEqual(GitClient(Path("/repo")).get_remote_url(), "git@github.com:user/repo.git")
        mock_run.return_value = completed("", returncode=2, stderr="error: No such remote 'origin'")
        self.assertIsNone(GitClient(Path("/repo")).get_remote_url())


class TestParseLogOutput(unittest.TestCase):
    def test_multi_line_body(self) -> None:
        output = "h1\nfeat: a\nline one\nline two\n\nCloses #1\n\n===END===\n"
        self.assertEqual(parse_log_output(output), [RawCommit("h1", "feat: a", "line one\nline two\n\nCloses #1")])

    def test_empty_output(self) -> None:
        self.assertEqual(parse_log_output(""), [])


if __name__ == "__main__":
    unittest.main()
