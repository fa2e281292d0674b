"""Unit tests for GitGateway command construction and error reporting."""

import pytest
from unittest.mock import Mock

from gitdeploy.core.protocols import ProcessExecutor, ProcessResult
from gitdeploy.deploy import GitGateway, VersionControlError


class TestGitGatewayCommands:
    """Each operation is a single git invocation."""

    def setup_method(self):
        self.process = Mock(spec=ProcessExecutor)
        self.process.run.return_value = ProcessResult(returncode=0)
        self.gateway = GitGateway(self.process)

    def last_cmd(self):
        return self.process.run.call_args[0][0]

    def test_clone(self):
        self.gateway.clone("git@example.com:site.git", "/tmp/ws")
        assert self.last_cmd() == ["git", "clone", "git@example.com:site.git", "/tmp/ws"]

    def test_checkout(self):
        self.gateway.checkout("/tmp/ws", "gh-pages")
        assert self.last_cmd() == ["git", "-C", "/tmp/ws", "checkout", "gh-pages"]

    def test_checkout_new_branch(self):
        self.gateway.checkout_new_branch("/tmp/ws", "gh-pages")
        assert self.last_cmd() == ["git", "-C", "/tmp/ws", "checkout", "-b", "gh-pages"]

    def test_stage_all(self):
        self.gateway.stage_all("/tmp/ws")
        assert self.last_cmd() == ["git", "-C", "/tmp/ws", "add", "-A"]

    def test_commit_without_signature(self):
        self.gateway.commit("/tmp/ws", "Deploy site")
        assert self.last_cmd() == ["git", "-C", "/tmp/ws", "commit", "-m", "Deploy site"]

    def test_commit_message_is_passed_verbatim(self):
        """Quotes and shell metacharacters need no escaping with argv lists."""
        message = 'Deploy "v2" && rm -rf $HOME'
        self.gateway.commit("/tmp/ws", message)
        assert self.last_cmd()[-1] == message

    def test_commit_with_signature(self):
        self.gateway.commit("/tmp/ws", "Deploy", "Bot <bot@example.com>")
        assert self.last_cmd() == [
            "git", "-C", "/tmp/ws", "commit", "-m", "Deploy",
            "--author", "Bot <bot@example.com>"
        ]

    def test_push(self):
        self.gateway.push("/tmp/ws", "gh-pages")
        assert self.last_cmd() == ["git", "-C", "/tmp/ws", "push", "origin", "gh-pages"]

    def test_custom_git_binary(self):
        gateway = GitGateway(self.process, git_binary="/usr/local/bin/git")
        gateway.stage_all("/tmp/ws")
        assert self.last_cmd()[0] == "/usr/local/bin/git"

    def test_index_path(self):
        assert GitGateway.index_path("/tmp/ws") == "/tmp/ws/.git/index"

    @pytest.mark.parametrize("name,email,expected", [
        ("Bot", "bot@example.com", "Bot <bot@example.com>"),
        ("Bot", None, "Bot <>"),
        ("Bot", "", "Bot <>"),
    ])
    def test_format_signature(self, name, email, expected):
        assert GitGateway.format_signature(name, email) == expected


class TestGitGatewayErrors:
    """Failures carry git's raw output."""

    def setup_method(self):
        self.process = Mock(spec=ProcessExecutor)
        self.gateway = GitGateway(self.process)

    def test_failure_raises_with_stderr(self):
        self.process.run.return_value = ProcessResult(
            returncode=1, stdout="", stderr="error: failed to push some refs\n"
        )

        with pytest.raises(VersionControlError) as exc_info:
            self.gateway.push("/tmp/ws", "main")

        err = exc_info.value
        assert err.operation == "push"
        assert err.returncode == 1
        assert err.output == "error: failed to push some refs"
        assert err.command == ["git", "-C", "/tmp/ws", "push", "origin", "main"]
        assert "error: failed to push some refs" in str(err)

    def test_failure_falls_back_to_stdout(self):
        self.process.run.return_value = ProcessResult(
            returncode=1, stdout="nothing to commit, working tree clean", stderr=""
        )

        with pytest.raises(VersionControlError) as exc_info:
            self.gateway.commit("/tmp/ws", "Deploy")

        assert exc_info.value.output == "nothing to commit, working tree clean"

    def test_no_retry_on_failure(self):
        self.process.run.return_value = ProcessResult(returncode=128, stderr="Could not resolve host")

        with pytest.raises(VersionControlError):
            self.gateway.clone("https://example.invalid/repo.git", "/tmp/ws")

        assert self.process.run.call_count == 1
