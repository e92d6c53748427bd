"""
Configuration loading for BootstrapKit.

Values are layered, highest precedence first:
1. Command-line flags
2. ``INPUT_*`` environment variables (GitHub Actions inputs)
3. ``bootstrapkit.yaml`` in the working directory (or ``--config PATH``)
4. Defaults

Example bootstrapkit.yaml:
    repo: octocat/hello-world
    tags: [1, "1.0", latest]  # quote x.y versions: 1.10 is read as 1.1
    name: my-app
    main: my-app --key val
    post: my-app cleanup
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import yaml

from bootstrapkit.core.directory import get_cache_dir, get_state_file
from bootstrapkit.core.exceptions import ConfigurationError
from bootstrapkit.registry.base import Repository

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "bootstrapkit.yaml"
DEFAULT_TAGS = ["latest"]


@dataclass
class BootstrapConfig:
    """Resolved configuration for one BootstrapKit invocation."""

    repository: Repository
    tags: List[str] = field(default_factory=lambda: list(DEFAULT_TAGS))
    name: str = ""
    main: Optional[str] = None
    post: Optional[str] = None
    token: Optional[str] = None
    cache_dir: Optional[Path] = None
    state_file: Optional[Path] = None

    def __post_init__(self):
        if not self.name:
            self.name = self.repository.repo


def load_yaml_config(config_file: Path, required: bool = False) -> Dict[str, Any]:
    """
    Load and parse a YAML configuration file.

    Args:
        config_file: Path to YAML configuration file
        required: If True, raise error if file doesn't exist

    Returns:
        Configuration dictionary (empty dict if file doesn't exist and not required)

    Raises:
        ConfigurationError: If the file is required but missing, or invalid
    """
    if not config_file.exists():
        if required:
            raise ConfigurationError(f"Configuration file not found: {config_file}")
        logger.debug(f"Config file not found (optional): {config_file}")
        return {}

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_file}: {e}") from e

    config = config or {}
    if not isinstance(config, dict):
        raise ConfigurationError(f"Invalid configuration in {config_file}: expected a mapping")

    return config


def parse_tags(value: Union[str, List[Any], None]) -> List[str]:
    """
    Parse a tag list.

    Accepts a comma separated string or a list. Entries are trimmed and
    empty entries dropped; nothing left means ``["latest"]``.

    YAML reads an unquoted ``1.10`` as the number ``1.1``, so list entries
    must be strings or integers.

    Raises:
        ConfigurationError: If an entry is neither a string nor an integer

    Example:
        >>> parse_tags("1, 1.0, 1.0.0, latest")
        ['1', '1.0', '1.0.0', 'latest']
    """
    if value is None:
        return list(DEFAULT_TAGS)

    if isinstance(value, str):
        items = value.split(",")
    else:
        if not isinstance(value, list):
            value = [value]
        items = [_tag_entry(item) for item in value]

    tags = [item.strip() for item in items if item.strip()]
    return tags or list(DEFAULT_TAGS)


def _tag_entry(item: Any) -> str:
    if isinstance(item, str):
        return item
    if isinstance(item, int) and not isinstance(item, bool):
        return str(item)

    raise ConfigurationError(
        f"Invalid tag {item!r}: quote versions in YAML, e.g. \"1.10\" instead of 1.10"
    )


def _load_file_config(config_file: Optional[Path], cwd: Path) -> Dict[str, Any]:
    if config_file is not None:
        return load_yaml_config(Path(config_file), required=True)

    return load_yaml_config(cwd / DEFAULT_CONFIG_FILE)


def _first(*values: Any) -> Any:
    for value in values:
        if value not in (None, ""):
            return value
    return None


def load_config(
    repo: Optional[str] = None,
    tags: Optional[str] = None,
    name: Optional[str] = None,
    main: Optional[str] = None,
    post: Optional[str] = None,
    cache_dir: Optional[Path] = None,
    state_file: Optional[Path] = None,
    config_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
) -> BootstrapConfig:
    """
    Build the configuration from flags, environment and the config file.

    Args:
        repo, tags, name, main, post, cache_dir, state_file: Flag values
            (None when not given)
        config_file: Explicit config file; must exist when given
        environ: Environment mapping (defaults to ``os.environ``)
        cwd: Working directory (defaults to the current directory)

    Returns:
        BootstrapConfig

    Raises:
        ConfigurationError: If the repository is missing or malformed
    """
    if environ is None:
        environ = os.environ
    cwd = cwd or Path.cwd()

    file_config = _load_file_config(config_file, cwd)

    repo_value = _first(
        repo,
        environ.get("INPUT_REPO"),
        file_config.get("repo"),
        environ.get("GITHUB_REPOSITORY"),
    )
    if not repo_value:
        raise ConfigurationError("Input required: repo")

    repository = Repository.parse(str(repo_value))

    tags_value = _first(tags, environ.get("INPUT_TAGS"), file_config.get("tags"))

    cache_value = _first(cache_dir, file_config.get("cache_dir"))
    state_value = _first(state_file, file_config.get("state_file"))

    config = BootstrapConfig(
        repository=repository,
        tags=parse_tags(tags_value),
        name=_first(name, environ.get("INPUT_NAME"), file_config.get("name")) or "",
        main=_first(main, environ.get("INPUT_MAIN"), file_config.get("main")),
        post=_first(post, environ.get("INPUT_POST"), file_config.get("post")),
        token=_first(environ.get("GITHUB_TOKEN"), file_config.get("token")),
        cache_dir=Path(cache_value) if cache_value else get_cache_dir(environ),
        state_file=Path(state_value)
        if state_value
        else get_state_file(environ, cwd=cwd),
    )

    logger.debug(
        f"Configuration: repo={config.repository} tags={config.tags} "
        f"name={config.name} cache={config.cache_dir}"
    )
    return config


def load_post_settings(
    post: Optional[str] = None,
    state_file: Optional[Path] = None,
    config_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
) -> Tuple[Optional[str], Path]:
    """
    Load what the ``post`` command needs: its command and the state file.

    Unlike :func:`load_config` this does not require a repository.

    Returns:
        Tuple of (post command or None, state file path)
    """
    if environ is None:
        environ = os.environ
    cwd = cwd or Path.cwd()

    file_config = _load_file_config(config_file, cwd)

    command = _first(post, environ.get("INPUT_POST"), file_config.get("post"))
    state_value = _first(state_file, file_config.get("state_file"))

    if state_value:
        return command, Path(state_value)

    return command, get_state_file(environ, cwd=cwd)


__all__ = [
    "BootstrapConfig",
    "load_post_settings",
    "DEFAULT_CONFIG_FILE",
    "load_config",
    "load_yaml_config",
    "parse_tags",
]
