"""Protocol definitions for dependency injection.

This module defines Protocol-based abstractions for every external dependency
the deployment pipeline touches. Protocols use structural typing, so any class
implementing these methods satisfies the Protocol without explicit inheritance.

Benefits:
- Easy to mock in tests (just implement the methods)
- No inheritance required
- Clear interface contracts between the pipeline and the outside world
"""

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, Dict, Any, Optional, List, Union, Iterator

if TYPE_CHECKING:
    from gitdeploy.deploy.base import BuildOptions


@dataclass
class ProcessResult:
    """Outcome of a completed external process.

    Attributes:
        returncode: Process exit status (0 means success)
        stdout: Captured standard output
        stderr: Captured standard error
    """
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Raw diagnostic text: stderr when present, otherwise stdout."""
        return (self.stderr or self.stdout or "").strip()


class Logger(Protocol):
    """Abstraction for status reporting.

    Replaces direct print() statements throughout the codebase.
    """

    def info(self, message: str) -> None:
        """Log informational (status) message."""
        ...

    def success(self, message: str) -> None:
        """Log a final success message."""
        ...

    def warning(self, message: str) -> None:
        """Log warning message."""
        ...

    def error(self, message: str) -> None:
        """Log error message."""
        ...

    def debug(self, message: str) -> None:
        """Log debug message."""
        ...


class FileSystemService(Protocol):
    """Abstraction for filesystem operations.

    Wraps Path and shutil operations so the pipeline can be tested without
    touching a real filesystem.
    """

    def exists(self, path: Union[str, Path]) -> bool:
        """Check if path exists (symlinks included, even if dangling)."""
        ...

    def is_file(self, path: Union[str, Path]) -> bool:
        ...

    def is_dir(self, path: Union[str, Path]) -> bool:
        ...

    def read_file(self, path: Union[str, Path]) -> str:
        """Read entire file as string."""
        ...

    def mkdir(self, path: Union[str, Path], parents: bool = True, exist_ok: bool = True) -> None:
        """Create directory (with parents if specified)."""
        ...

    def make_temp_dir(self, prefix: str, root: Optional[str] = None) -> str:
        """Create a uniquely named directory and return its path."""
        ...

    def rmtree(self, path: Union[str, Path]) -> None:
        """Recursively remove directory tree."""
        ...

    def remove(self, path: Union[str, Path]) -> None:
        """Remove a file, symlink or directory tree. Missing paths are ignored."""
        ...

    def copy_file(self, src: Union[str, Path], dest: Union[str, Path]) -> None:
        """Copy a single file, overwriting dest."""
        ...

    def copy_tree(self, src: Union[str, Path], dest: Union[str, Path],
                  ignore: Optional[List[str]] = None) -> None:
        """Copy a directory tree, merging into dest and overwriting files.

        Args:
            ignore: Paths relative to src that are skipped
        """
        ...

    def glob(self, path: Union[str, Path], pattern: str) -> List[Path]:
        """Find all paths matching glob pattern under path."""
        ...

    def iterdir(self, path: Union[str, Path]) -> Iterator[Path]:
        """Iterate over directory contents."""
        ...


class ProcessExecutor(Protocol):
    """Abstraction for process execution.

    Wraps subprocess.run so gateway and builder code can be tested without
    spawning real processes.
    """

    def run(
        self,
        cmd: List[str],
        cwd: Optional[str] = None,
        env: Optional[Dict[str, str]] = None
    ) -> ProcessResult:
        """Run command to completion and capture its output."""
        ...


class ConfigLoader(Protocol):
    """Abstraction for configuration file loading.

    Wraps YAML loading to enable testing with mock configurations
    without requiring actual config files.
    """

    def load_yaml(self, path: str) -> Any:
        """Load YAML file and return the parsed document."""
        ...


class SiteBuilder(Protocol):
    """Produces the site's build artifacts into a target directory.

    Implementations raise BuildError on failure.
    """

    def build(self, target: str, options: 'BuildOptions') -> None:
        """Build the site into target."""
        ...
