"""
DirectorySiteBuilder - Build the site into the deployment workspace.

Strategy: optional build command → clear target → copy built site → add extras

The builder treats the site generator as a black box: whatever command is
configured produces a directory of static files, which is then copied into the
target directory of the workspace.
"""

import os
import shlex
from pathlib import Path
from typing import List, Optional

from gitdeploy.core.protocols import FileSystemService, ProcessExecutor, Logger
from .base import BuildOptions, DEFAULT_SOURCE_DIR
from .exceptions import BuildError
from .workspace import workspace_join

# Never copied from the build output, whatever the exclude list says.
ALWAYS_EXCLUDED = (".git",)


class DirectorySiteBuilder:
    """
    Builds by copying a directory of static files into the target.

    Args:
        filesystem: Filesystem operations abstraction
        process_executor: Subprocess execution abstraction
        logger: Logging abstraction
        project_dir: Project root; all relative paths resolve against it
        source_dir: Built site directory, relative to project_dir
        build_command: Command that produces source_dir (optional)
    """

    def __init__(
        self,
        filesystem: FileSystemService,
        process_executor: ProcessExecutor,
        logger: Logger,
        project_dir: str = ".",
        source_dir: str = DEFAULT_SOURCE_DIR,
        build_command: Optional[str] = None
    ):
        self.fs = filesystem
        self.process = process_executor
        self.log = logger
        self.project_dir = project_dir
        self.source_dir = source_dir
        self.build_command = build_command

    def build(self, target: str, options: BuildOptions) -> None:
        """
        Build the site into target.

        Steps:
            1. Run the build command in the project directory (if configured)
            2. Delete target entries matching options.delete_patterns
            3. Copy source_dir into target, minus options.exclude_links
            4. Copy each of options.add_links into target

        Raises:
            BuildError: If the command fails, the source is missing, a copy
                fails, or a symlinked build is requested
        """
        if options.symlink:
            raise BuildError("Symlinked builds are not supported for deployment.")

        if self.build_command:
            self._run_build_command()

        source = os.path.join(self.project_dir, self.source_dir)
        if not self.fs.is_dir(source):
            raise BuildError(f"Build output directory not found: {source}")

        try:
            self.fs.mkdir(target)
            self._clear_target(target, options.delete_patterns)

            ignore = list(ALWAYS_EXCLUDED) + list(options.exclude_links)
            self.log.debug(f"Copying {source} -> {target} (excluding {', '.join(ignore)})")
            self.fs.copy_tree(source, target, ignore=ignore)

            for link in options.add_links:
                self._add_path(link, target)
        except OSError as e:
            raise BuildError(f"Failed to build site into {target}: {e}") from e

    def _run_build_command(self) -> None:
        try:
            cmd = shlex.split(self.build_command)
        except ValueError as e:
            raise BuildError(f"Invalid build command {self.build_command!r}: {e}") from e
        self.log.debug(f"Running build command: {self.build_command}")
        result = self.process.run(cmd, cwd=self.project_dir)
        if not result.ok:
            raise BuildError(
                f"Build command failed (exit {result.returncode}): {self.build_command}\n"
                f"{result.output}"
            )

    def _clear_target(self, target: str, patterns) -> None:
        """Delete entries matched by positive patterns and not protected by '!' ones."""
        doomed: List[Path] = []
        protected: List[Path] = []
        for pattern in patterns:
            if pattern.startswith("!"):
                protected.extend(self.fs.glob(target, pattern[1:]))
            else:
                doomed.extend(self.fs.glob(target, pattern))

        for path in doomed:
            if any(path == keep or keep in path.parents for keep in protected):
                continue
            self.fs.remove(path)

    def _add_path(self, link: str, target: str) -> None:
        src = os.path.join(self.project_dir, link.lstrip("/\\"))
        dest = workspace_join(target, link, BuildError)
        if not self.fs.exists(src):
            raise BuildError(f"Additional build path not found: {src}")
        if self.fs.is_dir(src):
            self.fs.copy_tree(src, dest)
        else:
            self.fs.mkdir(os.path.dirname(dest))
            self.fs.copy_file(src, dest)
