"""
Temporary workspace lifecycle.

A workspace is the uniquely named temporary directory that holds the clone and
the build output of one deployment run. The manager creates it; the handle
owns it and removes it at most once.
"""

import os
from typing import Optional, Type

from gitdeploy.core.protocols import FileSystemService, Logger
from .base import CleanupResult
from .exceptions import DeployError, FilesystemError, WorkspaceError

WORKSPACE_PREFIX = "gitdeploy-"


class WorkspaceHandle:
    """
    Owns one temporary directory for the duration of a run.

    Used as a context manager, the directory is removed on exit (success or
    failure) unless keep is set:

        with manager.create(keep=config.keep_workspace) as workspace:
            gateway.clone(remote, workspace.path)
    """

    def __init__(self, manager: 'TempWorkspaceManager', path: str, keep: bool = False):
        self.manager = manager
        self.path = path
        self.keep = keep
        self.removed = False

    def remove(self) -> CleanupResult:
        """Remove the directory unless kept or already removed. Never raises."""
        if self.keep or self.removed:
            return CleanupResult(success=True, errors=[])
        self.removed = True
        return self.manager.remove(self.path)

    def __enter__(self) -> 'WorkspaceHandle':
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.remove()
        return False

    def __repr__(self) -> str:
        return f"WorkspaceHandle({self.path!r}, keep={self.keep}, removed={self.removed})"


class TempWorkspaceManager:
    """Creates and removes deployment workspaces."""

    def __init__(self, filesystem: FileSystemService, logger: Logger,
                 root: Optional[str] = None, prefix: str = WORKSPACE_PREFIX):
        """
        Args:
            filesystem: Filesystem operations abstraction
            logger: Logging abstraction
            root: Parent directory for workspaces (default: system temp dir)
            prefix: Name prefix; a random suffix makes each name unique
        """
        self.fs = filesystem
        self.log = logger
        self.root = root
        self.prefix = prefix

    def create(self, keep: bool = False) -> WorkspaceHandle:
        """
        Create a fresh, uniquely named workspace directory.

        Raises:
            WorkspaceError: If the directory cannot be created
        """
        try:
            path = self.fs.make_temp_dir(self.prefix, self.root)
        except OSError as e:
            raise WorkspaceError(f"Could not create temporary workspace: {e}") from e
        self.log.debug(f"Created workspace {path}")
        return WorkspaceHandle(self, path, keep=keep)

    def remove(self, path: str) -> CleanupResult:
        """Best-effort recursive delete of a workspace directory."""
        errors = []
        try:
            if self.fs.exists(path):
                self.fs.rmtree(path)
        except OSError as e:
            errors.append(f"Failed to remove {path}: {e}")
            self.log.warning(errors[-1])
        return CleanupResult(success=len(errors) == 0, errors=errors)


def workspace_join(root: str, rel: str, error: Type[DeployError] = FilesystemError) -> str:
    """
    Join a configured relative path onto root, keeping the result inside root.

    Leading separators are dropped, so "/docs" names root/docs rather than the
    host's /docs. Paths that climb out of root with ".." raise error.
    """
    path = os.path.normpath(os.path.join(root, rel.lstrip("/\\")))
    base = os.path.normpath(root)
    if path != base and not path.startswith(base.rstrip(os.sep) + os.sep):
        raise error(f"Path {rel!r} points outside {root}")
    return path
