"""
GitGateway - Execute git operations against a deployment workspace.

Each operation maps to exactly one git invocation. Commands are built as argv
lists and executed without a shell, so messages and signatures are passed
verbatim. Failures raise VersionControlError with git's raw output; nothing
is retried.
"""

import os
from typing import List, Optional

from gitdeploy.core.protocols import ProcessExecutor, ProcessResult
from .exceptions import VersionControlError


class GitGateway:
    """Thin adapter over the git command line."""

    def __init__(self, process_executor: ProcessExecutor, git_binary: str = "git"):
        """
        Initialize git gateway.

        Args:
            process_executor: Subprocess execution abstraction
            git_binary: git executable name or path (default: "git")
        """
        self.process = process_executor
        self.git = git_binary

    def _git_cmd(self, work_dir: Optional[str], *args: str) -> List[str]:
        """Build git command, targeting work_dir with -C when given."""
        cmd = [self.git]
        if work_dir is not None:
            cmd += ["-C", str(work_dir)]
        return cmd + list(args)

    def _run(self, operation: str, cmd: List[str]) -> ProcessResult:
        result = self.process.run(cmd)
        if not result.ok:
            raise VersionControlError(operation, cmd, result.returncode, result.output)
        return result

    @staticmethod
    def format_signature(name: str, email: Optional[str] = None) -> str:
        """Commit signature in git's "Name <email>" form; email defaults to empty."""
        return f"{name} <{email or ''}>"

    @staticmethod
    def index_path(work_dir: str) -> str:
        """Location of the index file inside a clone."""
        return os.path.join(work_dir, ".git", "index")

    def clone(self, remote: str, destination: str) -> ProcessResult:
        return self._run("clone", self._git_cmd(None, "clone", remote, str(destination)))

    def checkout(self, work_dir: str, branch: str) -> ProcessResult:
        """Switch to an existing branch. Fails if the branch does not exist."""
        return self._run("checkout", self._git_cmd(work_dir, "checkout", branch))

    def checkout_new_branch(self, work_dir: str, branch: str) -> ProcessResult:
        """Create branch and switch to it."""
        return self._run("checkout -b", self._git_cmd(work_dir, "checkout", "-b", branch))

    def stage_all(self, work_dir: str) -> ProcessResult:
        """Stage every change in the working tree, removals included."""
        return self._run("add", self._git_cmd(work_dir, "add", "-A"))

    def commit(self, work_dir: str, message: str, signature: Optional[str] = None) -> ProcessResult:
        """
        Commit staged changes.

        Args:
            work_dir: Clone to commit in
            message: Commit message
            signature: Optional author in "Name <email>" form
        """
        args = ["commit", "-m", message]
        if signature:
            args += ["--author", signature]
        return self._run("commit", self._git_cmd(work_dir, *args))

    def push(self, work_dir: str, branch: str) -> ProcessResult:
        return self._run("push", self._git_cmd(work_dir, "push", "origin", branch))
