"""
DeploymentPipeline - Deploy a built site to a remote git repository.

Strategy: temp workspace → clone → checkout/create branch → build → copy
deployment files → clear index → add → commit → push → remove workspace

Every step runs to completion before the next starts. The first failure aborts
the run; the workspace is removed (unless the debug flag keeps it) and the
original error is re-raised to the caller unchanged.
"""

from typing import List

from gitdeploy.core.protocols import FileSystemService, Logger, SiteBuilder
from .base import DeploymentConfig, DeploymentResult, RunState
from .exceptions import DeployError, FilesystemError, VersionControlError
from .file_sync import FileSynchronizer
from .git_gateway import GitGateway
from .workspace import TempWorkspaceManager, WorkspaceHandle, workspace_join


class DeploymentPipeline:
    """
    Sequences workspace, git, builder and file sync into one deployment.

    Args:
        workspace_manager: Creates and removes temp workspaces
        gateway: git operations
        builder: Site builder writing into the workspace
        synchronizer: Copies extra deployment files
        filesystem: Filesystem operations abstraction (index clearing)
        logger: Logging abstraction
    """

    def __init__(
        self,
        workspace_manager: TempWorkspaceManager,
        gateway: GitGateway,
        builder: SiteBuilder,
        synchronizer: FileSynchronizer,
        filesystem: FileSystemService,
        logger: Logger
    ):
        self.workspaces = workspace_manager
        self.git = gateway
        self.builder = builder
        self.files = synchronizer
        self.fs = filesystem
        self.log = logger
        self.state = None
        self.states: List[RunState] = []

    def _enter(self, state: RunState) -> None:
        self.state = state
        self.states.append(state)

    def deploy(self, config: DeploymentConfig) -> DeploymentResult:
        """
        Run the full deployment.

        Args:
            config: Immutable deployment configuration

        Returns:
            DeploymentResult describing the finished run

        Raises:
            ConfigError: Before any I/O, if the config is invalid
            WorkspaceError: If the temp workspace cannot be created
            VersionControlError: If clone, branch creation, add, commit or push fails
            BuildError: If the site builder fails
            FilesystemError: If deployment files or the index cannot be handled

        Postconditions:
            - Branch pushed to remote
            - Workspace removed, unless config.keep_workspace
        """
        self.states = []
        self._enter(RunState.VALIDATING)
        try:
            config.validate()
        except DeployError:
            self._enter(RunState.FAILED)
            raise

        self._enter(RunState.STAGING)
        try:
            workspace = self.workspaces.create(keep=config.keep_workspace)
        except DeployError:
            self._enter(RunState.FAILED)
            raise

        # Leaving the block removes the workspace on every path unless kept.
        with workspace:
            try:
                branch_created = self._run_steps(config, workspace)
            except Exception:
                self._enter(RunState.FAILED)
                self._remove_workspace(workspace)
                raise

            self._enter(RunState.CLEANING_UP)
            self._remove_workspace(workspace)

        self._enter(RunState.DONE)
        self.log.success("The site has been successfully deployed!")

        return DeploymentResult(
            success=True,
            remote=config.remote,
            branch=config.branch,
            workspace=workspace.path,
            branch_created=branch_created,
            workspace_removed=workspace.removed,
            states=list(self.states)
        )

    def _run_steps(self, config: DeploymentConfig, workspace: WorkspaceHandle) -> bool:
        """Execute clone through push. Returns True if the branch was created."""
        path = workspace.path

        self.log.info(f"Cloning the repository into {path}...")
        self.git.clone(config.remote, path)

        branch_created = self._checkout_branch(path, config.branch)

        self._enter(RunState.BUILDING_AND_COPYING)
        self.log.info("Building the site...")
        build_path = workspace_join(path, config.folder) if config.folder else path
        self.builder.build(build_path, config.build_options())

        self.log.info("Copying deployment files...")
        self.files.sync(config.deployment_files, path)

        self._enter(RunState.COMMITTING)
        self.log.info("Clearing the index...")
        self._clear_index(path)

        self.log.info("Adding all files to the index...")
        self.git.stage_all(path)

        self.log.info("Committing changes...")
        signature = None
        if config.author_name:
            signature = self.git.format_signature(config.author_name, config.author_email)
        self.git.commit(path, config.message, signature)

        self._enter(RunState.PUSHING)
        self.log.info(f"Pushing branch: {config.branch}...")
        self.git.push(path, config.branch)

        return branch_created

    def _remove_workspace(self, workspace: WorkspaceHandle) -> None:
        if workspace.keep or workspace.removed:
            return
        self.log.info(f"Removing the {workspace.path} directory...")
        workspace.remove()

    def _checkout_branch(self, path: str, branch: str) -> bool:
        """
        Check out branch, creating it when checkout fails.

        Any checkout failure is read as "branch does not exist"; only a failure
        to create the branch is fatal.
        """
        self.log.info(f"Checking out branch: {branch}...")
        try:
            self.git.checkout(path, branch)
            return False
        except VersionControlError as e:
            self.log.debug(f"Checkout of {branch} failed: {e.output}")

        self.log.info(f"Creating new branch: {branch}...")
        self.git.checkout_new_branch(path, branch)
        return True

    def _clear_index(self, path: str) -> None:
        """Drop the index so removed build outputs are staged as deletions."""
        index = self.git.index_path(path)
        try:
            self.fs.remove(index)
        except OSError as e:
            raise FilesystemError(f"Failed to clear the index {index}: {e}") from e
