"""
Deployment exceptions.

Every failure of a deployment run is a DeployError subclass. Errors propagate
to the caller unchanged; the message is what the CLI shows the user.
"""

from typing import List, Optional


class DeployError(Exception):
    """Base class for failures of a deployment run."""
    pass


class ConfigError(DeployError):
    """
    Raised when the deployment configuration is invalid.

    Detected before any side effect occurs, so no cleanup is needed.

    Examples:
        - "remote" or "branch" not provided
        - email given for the commit signature without a name
        - unknown keys in the static config file
    """

    def __init__(self, message: str, missing: Optional[List[str]] = None):
        super().__init__(message)
        self.missing = list(missing or [])


class WorkspaceError(DeployError):
    """Raised when the temporary workspace directory cannot be created."""
    pass


class VersionControlError(DeployError):
    """
    Raised when a git invocation fails.

    Attributes:
        operation: Gateway operation that failed (clone, push, ...)
        command: The argv that was executed
        returncode: Exit status of the git process
        output: Raw diagnostic output from git
    """

    def __init__(self, operation: str, command: List[str], returncode: int, output: str):
        self.operation = operation
        self.command = list(command)
        self.returncode = returncode
        self.output = output
        message = f"git {operation} failed (exit {returncode})"
        if output:
            message += f"\n{output}"
        super().__init__(message)


class BuildError(DeployError):
    """Raised when the site builder fails to produce the build."""
    pass


class FilesystemError(DeployError):
    """Raised when copying deployment files or clearing the index fails."""
    pass
