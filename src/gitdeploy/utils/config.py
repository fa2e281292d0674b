"""Configuration construction: static YAML config merged with CLI options"""
import os
import yaml
from typing import Any, Dict, Optional

from gitdeploy.core import ConfigLoader, FileSystemService, RealFileSystemService, YamlConfigLoader
from gitdeploy.deploy.base import (
    DEFAULT_DELETE_PATTERNS,
    DEFAULT_MESSAGE,
    DEFAULT_SOURCE_DIR,
    DeploymentConfig,
    DeploymentFile,
)
from gitdeploy.deploy.exceptions import ConfigError

DEFAULT_CONFIG_FILE = "gitdeploy.yaml"

# Option name (YAML key / CLI dest) -> DeploymentConfig field
OPTION_FIELDS = {
    "remote": "remote",
    "branch": "branch",
    "message": "message",
    "folder": "folder",
    "name": "author_name",
    "email": "author_email",
    "debug": "keep_workspace",
    "deployment_files": "deployment_files",
    "exclude_links": "exclude_links",
    "add_links": "add_links",
    "delete_patterns": "delete_patterns",
    "source_dir": "source_dir",
    "build_command": "build_command",
}

DEFAULT_OPTIONS = {
    "message": DEFAULT_MESSAGE,
    "deployment_files": [],
    "exclude_links": [],
    "add_links": [],
    "delete_patterns": list(DEFAULT_DELETE_PATTERNS),
    "source_dir": DEFAULT_SOURCE_DIR,
    "debug": False,
}


def load_static_config(
    config_path: Optional[str] = None,
    project_dir: str = ".",
    config_loader: Optional[ConfigLoader] = None,
    filesystem: Optional[FileSystemService] = None
) -> Dict[str, Any]:
    """Load the static deployment config.

    Args:
        config_path: Explicit config file (must exist)
        project_dir: Where the default gitdeploy.yaml is looked up
        config_loader: YAML loading abstraction
        filesystem: Filesystem abstraction

    Returns:
        Mapping of option name to value ({} when no default file exists)

    Raises:
        ConfigError: If the file is missing, unreadable or unparsable, is not a
            mapping, or contains unknown options
    """
    fs = filesystem or RealFileSystemService()
    loader = config_loader or YamlConfigLoader(fs)

    if config_path is None:
        default_path = os.path.join(project_dir, DEFAULT_CONFIG_FILE)
        if not fs.exists(default_path):
            return {}
        config_path = default_path
    elif not fs.exists(config_path):
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        data = loader.load_yaml(config_path)
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse config file {config_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not read config file {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping of options")

    unknown = sorted(set(data) - set(OPTION_FIELDS))
    if unknown:
        raise ConfigError(f"Unknown option(s) in {config_path}: {', '.join(unknown)}")

    return data


def merge_options(*sources: Dict[str, Any]) -> Dict[str, Any]:
    """Merge option mappings left to right over the defaults.

    A later source only overrides when its value is truthy, so an unset CLI
    flag never masks a value from the static config.
    """
    merged = dict(DEFAULT_OPTIONS)
    for source in sources:
        for name, value in source.items():
            if value:
                merged[name] = value
    return merged


def _as_tuple(name: str, value: Any) -> tuple:
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, (list, tuple)):
        raise ConfigError(f'"{name}" must be a list')
    return tuple(str(v) for v in value)


def _deployment_files(value: Any) -> tuple:
    if not isinstance(value, (list, tuple)):
        raise ConfigError('"deployment_files" must be a list of {src, dest} entries')

    files = []
    for entry in value:
        if isinstance(entry, DeploymentFile):
            files.append(entry)
        elif isinstance(entry, dict) and entry.get("src") and entry.get("dest"):
            files.append(DeploymentFile(src=str(entry["src"]), dest=str(entry["dest"])))
        else:
            raise ConfigError(f"Invalid deployment file entry (needs src and dest): {entry!r}")
    return tuple(files)


def build_config(options: Dict[str, Any], project_dir: str = ".") -> DeploymentConfig:
    """Turn merged options into one immutable DeploymentConfig.

    Required options are not checked here; DeploymentConfig.validate() does
    that as the first step of a run.
    """
    fields: Dict[str, Any] = {"project_dir": project_dir}
    for name, value in options.items():
        if name not in OPTION_FIELDS:
            continue
        field_name = OPTION_FIELDS[name]
        if name == "deployment_files":
            value = _deployment_files(value)
        elif name in ("exclude_links", "add_links", "delete_patterns"):
            value = _as_tuple(name, value)
        elif name == "debug":
            value = bool(value)
        elif value is not None:
            value = str(value)
        fields[field_name] = value
    return DeploymentConfig(**fields)


def load_deployment_config(
    cli_options: Dict[str, Any],
    config_path: Optional[str] = None,
    project_dir: str = ".",
    config_loader: Optional[ConfigLoader] = None,
    filesystem: Optional[FileSystemService] = None
) -> DeploymentConfig:
    """Load static config, merge CLI options over it, and build the config.

    Args:
        cli_options: Option name -> value from the command line (None = unset)
        config_path: Explicit static config file
        project_dir: Project root

    Returns:
        DeploymentConfig (not yet validated)
    """
    static = load_static_config(config_path, project_dir, config_loader, filesystem)
    options = merge_options(static, cli_options)
    return build_config(options, project_dir=project_dir)
