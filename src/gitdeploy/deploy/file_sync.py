"""Copy additional deployment files into the workspace after the build."""

import os
from typing import Iterable

from gitdeploy.core.protocols import FileSystemService, Logger
from .base import DeploymentFile
from .exceptions import FilesystemError
from .workspace import workspace_join


class FileSynchronizer:
    """Replaces workspace destinations with project sources, pair by pair.

    Args:
        filesystem: Filesystem operations abstraction
        logger: Logging abstraction
        project_dir: Base directory that sources are resolved against
    """

    def __init__(self, filesystem: FileSystemService, logger: Logger, project_dir: str = "."):
        self.fs = filesystem
        self.log = logger
        self.project_dir = project_dir

    def sync(self, pairs: Iterable[DeploymentFile], workspace_root: str) -> None:
        """
        Copy each src over its dest, in input order.

        Any existing destination is removed first, so directories are replaced
        rather than merged. Running sync twice yields the same result.

        Raises:
            FilesystemError: If a source is missing or a copy/remove fails
        """
        for pair in pairs:
            src = os.path.join(self.project_dir, pair.src.lstrip("/\\"))
            dest = workspace_join(workspace_root, pair.dest)

            if not self.fs.exists(src):
                raise FilesystemError(f"Deployment file not found: {src}")

            self.log.debug(f"Copying {src} -> {dest}")
            try:
                self.fs.remove(dest)
                parent = os.path.dirname(dest)
                if parent:
                    self.fs.mkdir(parent)
                if self.fs.is_dir(src):
                    self.fs.copy_tree(src, dest)
                else:
                    self.fs.copy_file(src, dest)
            except OSError as e:
                raise FilesystemError(f"Failed to copy {src} to {dest}: {e}") from e
