"""Deploy the built site to a remote git repository command"""
import os

from gitdeploy.core import (
    ConsoleLogger,
    RealFileSystemService,
    SubprocessExecutor,
    YamlConfigLoader,
)
from gitdeploy.deploy import (
    DeployError,
    DeploymentPipeline,
    DirectorySiteBuilder,
    FileSynchronizer,
    GitGateway,
    TempWorkspaceManager,
)
from gitdeploy.deploy.base import DEFAULT_MESSAGE
from gitdeploy.utils.config import load_deployment_config

# CLI dests that map onto deployment options
CLI_OPTIONS = (
    'remote', 'branch', 'message', 'folder', 'name', 'email', 'debug',
    'source_dir', 'build_command',
)


def setup_parser(parser):
    """Setup argument parser for deploy command"""
    parser.add_argument(
        '-r', '--remote',
        help='The repository to deploy to'
    )
    parser.add_argument(
        '-b', '--branch',
        help='The branch to deploy to'
    )
    parser.add_argument(
        '-m', '--message',
        help=f'The message to use with the deployment commit (default: "{DEFAULT_MESSAGE}")'
    )
    parser.add_argument(
        '-f', '--folder',
        help='Subfolder in remote repository that should hold the build'
    )
    parser.add_argument(
        '-n', '--name',
        help='Name to use for the deployment commit signature'
    )
    parser.add_argument(
        '-a', '--email',
        help='Email to use for the deployment commit signature'
    )
    parser.add_argument(
        '-d', '--debug',
        action='store_true',
        help="Don't delete the temporary gitdeploy-* directory"
    )
    parser.add_argument(
        '-c', '--config',
        help='Static deployment config file (default: gitdeploy.yaml in the project dir)'
    )
    parser.add_argument(
        '--project-dir',
        default='.',
        help='Project root that relative paths resolve against (default: current directory)'
    )
    parser.add_argument(
        '--source-dir',
        help='Directory holding the built site, relative to the project dir (default: build)'
    )
    parser.add_argument(
        '--build-command',
        help='Command that builds the site, run in the project dir before deploying'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show verbose output'
    )


def create_pipeline(config, logger, filesystem=None, process_executor=None, workspace_root=None):
    """Wire the production collaborators for one deployment."""
    fs = filesystem or RealFileSystemService()
    process = process_executor or SubprocessExecutor()
    builder = DirectorySiteBuilder(
        fs, process, logger,
        project_dir=config.project_dir,
        source_dir=config.source_dir,
        build_command=config.build_command
    )
    return DeploymentPipeline(
        workspace_manager=TempWorkspaceManager(fs, logger, root=workspace_root),
        gateway=GitGateway(process),
        builder=builder,
        synchronizer=FileSynchronizer(fs, logger, project_dir=config.project_dir),
        filesystem=fs,
        logger=logger
    )


def execute(args):
    """Execute deploy command"""
    logger = ConsoleLogger(verbose=getattr(args, 'verbose', False))
    filesystem = RealFileSystemService()
    project_dir = os.path.abspath(getattr(args, 'project_dir', None) or '.')

    cli_options = {name: getattr(args, name, None) for name in CLI_OPTIONS}

    try:
        config = load_deployment_config(
            cli_options,
            config_path=getattr(args, 'config', None),
            project_dir=project_dir,
            config_loader=YamlConfigLoader(filesystem),
            filesystem=filesystem
        )
        pipeline = create_pipeline(config, logger, filesystem=filesystem)
        pipeline.deploy(config)
    except DeployError as e:
        logger.error(str(e))
        return 1

    return 0
