"""
Deployment data model.

Defines the immutable configuration of a run, the options handed to the site
builder, the run states the pipeline moves through, and the result types.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .exceptions import ConfigError

DEFAULT_MESSAGE = "Deployment from source repository."
DEFAULT_DELETE_PATTERNS = ("*", "!.git")
DEFAULT_SOURCE_DIR = "build"

REQUIRED_OPTIONS = ("remote", "branch", "message")


@dataclass(frozen=True)
class DeploymentFile:
    """Extra file copied into the workspace after the build.

    Attributes:
        src: Source path, relative to the project directory
        dest: Destination path, relative to the workspace root
    """
    src: str
    dest: str


@dataclass(frozen=True)
class BuildOptions:
    """Options passed through to the site builder.

    The pipeline always builds with symlink=False.
    """
    symlink: bool = False
    delete_patterns: Tuple[str, ...] = DEFAULT_DELETE_PATTERNS
    exclude_links: Tuple[str, ...] = ()
    add_links: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DeploymentConfig:
    """
    Validated input to a deployment run.

    Attributes:
        remote: Repository URL to deploy to
        branch: Branch to deploy to
        message: Commit message for the deployment commit
        folder: Workspace subdirectory that receives the build (None = root)
        author_name: Name for the commit signature
        author_email: Email for the commit signature (requires author_name)
        deployment_files: Extra files copied after the build, in order
        exclude_links: Paths the builder must not copy
        add_links: Extra project paths the builder copies in
        delete_patterns: Globs of workspace entries the builder clears first
        keep_workspace: Debug flag, never remove the workspace
        project_dir: Base directory for relative source paths
        source_dir: Built site directory, relative to project_dir
        build_command: Command run in project_dir before copying the build
    """
    remote: Optional[str] = None
    branch: Optional[str] = None
    message: Optional[str] = DEFAULT_MESSAGE
    folder: Optional[str] = None
    author_name: Optional[str] = None
    author_email: Optional[str] = None
    deployment_files: Tuple[DeploymentFile, ...] = ()
    exclude_links: Tuple[str, ...] = ()
    add_links: Tuple[str, ...] = ()
    delete_patterns: Tuple[str, ...] = DEFAULT_DELETE_PATTERNS
    keep_workspace: bool = False
    project_dir: str = "."
    source_dir: str = DEFAULT_SOURCE_DIR
    build_command: Optional[str] = None

    def validate(self) -> None:
        """
        Check required options and the commit signature.

        Raises:
            ConfigError: If any required option is missing, or an email is
                given without a name
        """
        missing = [name for name in REQUIRED_OPTIONS if not getattr(self, name)]
        if missing:
            raise ConfigError(
                "\n".join(f'"{name}" option is missing. Cannot deploy.' for name in missing),
                missing=missing
            )

        if self.author_email and not self.author_name:
            raise ConfigError(
                "Name is required for a custom commit signature if the email is provided."
            )

    def build_options(self) -> BuildOptions:
        return BuildOptions(
            symlink=False,
            delete_patterns=self.delete_patterns,
            exclude_links=self.exclude_links,
            add_links=self.add_links
        )


class RunState(Enum):
    """States of a single deployment run."""
    VALIDATING = "validating"
    STAGING = "staging"
    BUILDING_AND_COPYING = "building_and_copying"
    COMMITTING = "committing"
    PUSHING = "pushing"
    CLEANING_UP = "cleaning_up"
    DONE = "done"
    FAILED = "failed"


@dataclass
class CleanupResult:
    """
    Result of cleanup operation.

    Attributes:
        success: Whether cleanup succeeded
        errors: List of non-fatal issues encountered during cleanup
    """
    success: bool
    errors: List[str] = field(default_factory=list)


@dataclass
class DeploymentResult:
    """
    Result of successful deployment.

    Attributes:
        success: Whether deployment succeeded
        remote: Repository that was pushed to
        branch: Branch that was pushed
        workspace: Path of the temporary workspace used by the run
        branch_created: True when the branch did not exist and was created
        workspace_removed: False when the debug flag kept the workspace
        states: Run states in the order they were entered
    """
    success: bool
    remote: str
    branch: str
    workspace: str
    branch_created: bool = False
    workspace_removed: bool = True
    states: List[RunState] = field(default_factory=list)
