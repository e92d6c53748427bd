"""
Cache command implementation.

Lists the versions of the configured tool present in the tool cache.
"""

from bootstrapkit.cli.utils import config_from_args
from bootstrapkit.core.cache import ToolCache
from bootstrapkit.installer.acquisition import cache_key


def run(args) -> int:
    """
    Run the cache command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    config = config_from_args(args)
    cache = ToolCache(config.cache_dir)
    key = cache_key(config.repository, config.name)

    versions = cache.list_versions(key)
    if not versions:
        print(f"No cached versions of {config.name} in {config.cache_dir}")
        return 0

    for version in versions:
        print(f"{version}\t{cache.entry_path(key, version)}")

    return 0
