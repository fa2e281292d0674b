"""
Git deployment subsystem.

Stages a temporary clone of the target repository, builds the site into it,
commits and pushes:
    - DeploymentPipeline: ordered steps with cleanup-on-failure
    - GitGateway: one git invocation per operation
    - TempWorkspaceManager: unique temp directories per run
    - FileSynchronizer: extra deployment files
    - DirectorySiteBuilder: copies a built site into the workspace

Public API:
    - DeploymentConfig, DeploymentFile, BuildOptions: Inputs
    - DeploymentResult, CleanupResult, RunState: Result types
    - DeployError and subclasses: Exceptions
"""

from .base import (
    BuildOptions,
    CleanupResult,
    DeploymentConfig,
    DeploymentFile,
    DeploymentResult,
    RunState,
)
from .exceptions import (
    BuildError,
    ConfigError,
    DeployError,
    FilesystemError,
    VersionControlError,
    WorkspaceError,
)
from .file_sync import FileSynchronizer
from .git_gateway import GitGateway
from .pipeline import DeploymentPipeline
from .site_builder import DirectorySiteBuilder
from .workspace import TempWorkspaceManager, WorkspaceHandle

__all__ = [
    # Inputs and results
    "BuildOptions",
    "CleanupResult",
    "DeploymentConfig",
    "DeploymentFile",
    "DeploymentResult",
    "RunState",

    # Exceptions
    "DeployError",
    "ConfigError",
    "WorkspaceError",
    "VersionControlError",
    "BuildError",
    "FilesystemError",

    # Components
    "DeploymentPipeline",
    "GitGateway",
    "TempWorkspaceManager",
    "WorkspaceHandle",
    "FileSynchronizer",
    "DirectorySiteBuilder",
]
