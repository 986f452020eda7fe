"""Tests for Git service."""

import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from docker_bootstrap.services.exceptions import GitServiceError
from docker_bootstrap.services.git_service import GitService

REPO_URL = "https://github.com/scheric1/docker-startup"


class TestGitService:
    """Test cases for GitService."""

    @patch('subprocess.run')
    def test_run_git_command_success(self, mock_run, tmp_path):
        """Test successful git command execution."""
        mock_result = Mock(stdout="output", stderr="")
        mock_run.return_value = mock_result

        service = GitService(tmp_path)
        result = service._run_git_command(["status"])

        assert result == mock_result
        mock_run.assert_called_once_with(
            ["git", "status"],
            cwd=tmp_path,
            check=True,
            capture_output=True,
            text=True,
        )

    @patch('subprocess.run')
    def test_run_git_command_failure(self, mock_run, tmp_path):
        """Test git command failure."""
        mock_run.side_effect = subprocess.CalledProcessError(
            128, ["git", "status"], stderr="fatal: not a git repository"
        )

        with pytest.raises(GitServiceError, match="Git command failed: fatal: not a git repository"):
            GitService(tmp_path)._run_git_command(["status"])

    @patch('subprocess.run')
    def test_sync_clones_missing_checkout(self, mock_run, tmp_path):
        """Test a missing checkout is cloned."""
        mock_run.return_value = Mock(stdout="", stderr="", returncode=0)
        clone_dir = tmp_path / "opt" / "docker-stacks"

        action = GitService(clone_dir).sync(REPO_URL)

        assert action == "cloned"
        assert clone_dir.parent.is_dir()
        mock_run.assert_called_once_with(
            ["git", "clone", REPO_URL, str(clone_dir)],
            cwd=clone_dir.parent,
            check=True,
            capture_output=True,
            text=True,
        )

    @patch('subprocess.run')
    def test_sync_pulls_existing_checkout(self, mock_run, tmp_path):
        """Test an existing checkout is pulled."""
        mock_run.side_effect = [
            Mock(stdout=".git\n", stderr="", returncode=0),   # rev-parse --git-dir
            Mock(stdout=REPO_URL + "\n", stderr="", returncode=0),  # remote get-url
            Mock(stdout="Already up to date.\n", stderr="", returncode=0),  # pull
        ]

        action = GitService(tmp_path).sync(REPO_URL)

        assert action == "pulled"
        assert mock_run.call_args_list[-1].args[0] == ["git", "pull", "--ff-only"]

    @patch('subprocess.run')
    def test_sync_rejects_non_repository(self, mock_run, tmp_path):
        """Test an existing directory that is not a checkout is an error."""
        mock_run.side_effect = subprocess.CalledProcessError(
            128, ["git", "rev-parse"], stderr="fatal: not a git repository"
        )

        with pytest.raises(GitServiceError, match="is not a git repository"):
            GitService(tmp_path).sync(REPO_URL)

    @patch('subprocess.run')
    def test_sync_unreachable_remote(self, mock_run, tmp_path):
        """Test an unreachable remote fails the clone."""
        mock_run.side_effect = subprocess.CalledProcessError(
            128, ["git", "clone"], stderr="fatal: repository 'https://example.invalid/x' not found"
        )

        with pytest.raises(GitServiceError, match="not found"):
            GitService(tmp_path / "stacks").sync("https://example.invalid/x")

    @patch('subprocess.run')
    def test_get_remote_url_missing(self, mock_run, tmp_path):
        """Test a missing remote returns None."""
        mock_run.return_value = Mock(stdout="", stderr="error: No such remote 'origin'", returncode=2)

        assert GitService(tmp_path).get_remote_url() is None

    @patch('subprocess.run')
    def test_get_commit_hash(self, mock_run, tmp_path):
        """Test reading the HEAD commit."""
        mock_run.return_value = Mock(stdout="abc123\n", stderr="")

        assert GitService(tmp_path).get_commit_hash() == "abc123"
        mock_run.assert_called_once_with(
            ["git", "rev-parse", "HEAD"],
            cwd=tmp_path,
            check=True,
            capture_output=True,
            text=True,
        )
