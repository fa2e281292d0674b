"""Production implementations of dependency injection protocols.

This module provides real implementations that wrap actual external dependencies
(filesystem, subprocess, YAML). These are used in production code.

For testing, use mocks or test doubles instead of these implementations.
"""

import os
import shutil
import subprocess
import sys
import tempfile
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List, Union, Iterator

from gitdeploy.core.protocols import ProcessResult


class ConsoleLogger:
    """Production logger that prints to console (stdout/stderr)."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def info(self, message: str) -> None:
        """Print status message to stdout."""
        print(message)

    def success(self, message: str) -> None:
        print(f"✓ {message}")

    def warning(self, message: str) -> None:
        print(f"Warning: {message}")

    def error(self, message: str) -> None:
        """Print error message to stderr."""
        print(f"Error: {message}", file=sys.stderr)

    def debug(self, message: str) -> None:
        """Print debug message to stdout (verbose mode only)."""
        if self.verbose:
            print(f"Debug: {message}")


class RealFileSystemService:
    """Production filesystem service using real pathlib and shutil operations."""

    def exists(self, path: Union[str, Path]) -> bool:
        return os.path.lexists(path)

    def is_file(self, path: Union[str, Path]) -> bool:
        return Path(path).is_file()

    def is_dir(self, path: Union[str, Path]) -> bool:
        return Path(path).is_dir()

    def read_file(self, path: Union[str, Path]) -> str:
        """Read entire file as string."""
        with open(path, 'r') as f:
            return f.read()

    def mkdir(self, path: Union[str, Path], parents: bool = True, exist_ok: bool = True) -> None:
        Path(path).mkdir(parents=parents, exist_ok=exist_ok)

    def make_temp_dir(self, prefix: str, root: Optional[str] = None) -> str:
        """Create a uniquely named directory (random suffix) and return its path."""
        return tempfile.mkdtemp(prefix=prefix, dir=root)

    def rmtree(self, path: Union[str, Path]) -> None:
        shutil.rmtree(path)

    def remove(self, path: Union[str, Path]) -> None:
        """Remove file, symlink or directory tree. Missing paths are ignored."""
        p = Path(path)
        if p.is_symlink() or p.is_file():
            p.unlink()
        elif p.is_dir():
            shutil.rmtree(p)

    def copy_file(self, src: Union[str, Path], dest: Union[str, Path]) -> None:
        shutil.copy2(src, dest)

    def copy_tree(self, src: Union[str, Path], dest: Union[str, Path],
                  ignore: Optional[List[str]] = None) -> None:
        """Copy directory tree into dest, skipping ignored relative paths."""
        src_root = Path(src)
        skipped = {Path(p) for p in (ignore or [])}

        def _ignore(directory, names):
            rel_dir = Path(directory).relative_to(src_root)
            return {name for name in names if rel_dir / name in skipped}

        shutil.copytree(src_root, dest, ignore=_ignore, dirs_exist_ok=True)

    def glob(self, path: Union[str, Path], pattern: str) -> List[Path]:
        return list(Path(path).glob(pattern))

    def iterdir(self, path: Union[str, Path]) -> Iterator[Path]:
        return Path(path).iterdir()


class SubprocessExecutor:
    """Production process executor using real subprocess.run."""

    def run(
        self,
        cmd: List[str],
        cwd: Optional[str] = None,
        env: Optional[Dict[str, str]] = None
    ) -> ProcessResult:
        """Run command and capture output. A missing executable is a failed result."""
        try:
            completed = subprocess.run(
                cmd,
                cwd=cwd,
                env=env,
                capture_output=True,
                text=True
            )
        except FileNotFoundError as e:
            return ProcessResult(returncode=127, stderr=str(e))
        return ProcessResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or ""
        )


class YamlConfigLoader:
    """Production config loader using real YAML parser."""

    def __init__(self, filesystem: 'RealFileSystemService'):
        """Initialize with filesystem service for reading files."""
        self.fs = filesystem

    def load_yaml(self, path: str) -> Any:
        """Load YAML file and return parsed document."""
        content = self.fs.read_file(path)
        return yaml.safe_load(content)
