"""Core dependency injection infrastructure for gitdeploy.

This module provides Protocol-based abstractions for every external capability
the deployment pipeline consumes (filesystem, subprocess, YAML, site builder),
together with their production implementations.

Design:
- Protocol-based abstractions (typing.Protocol) for structural typing
- Production implementations for real-world use
- Easy mocking for unit tests
"""

from gitdeploy.core.protocols import (
    Logger,
    FileSystemService,
    ProcessExecutor,
    ProcessResult,
    ConfigLoader,
    SiteBuilder,
)

from gitdeploy.core.implementations import (
    ConsoleLogger,
    RealFileSystemService,
    SubprocessExecutor,
    YamlConfigLoader,
)

__all__ = [
    # Protocols
    "Logger",
    "FileSystemService",
    "ProcessExecutor",
    "ProcessResult",
    "ConfigLoader",
    "SiteBuilder",
    # Implementations
    "ConsoleLogger",
    "RealFileSystemService",
    "SubprocessExecutor",
    "YamlConfigLoader",
]
