"""
BootstrapKit CLI argument parser.

This module implements the command-line interface for BootstrapKit using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from bootstrapkit.core.exceptions import BootstrapKitError

# Get version from package
try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("bootstrapkit")
except PackageNotFoundError:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)

COMMAND_MODULES = {
    "run": "bootstrapkit.cli.commands.run",
    "post": "bootstrapkit.cli.commands.post",
    "resolve": "bootstrapkit.cli.commands.resolve",
    "cache": "bootstrapkit.cli.commands.cache",
}


class CLI:
    """BootstrapKit command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="bootstrapkit",
            description="BootstrapKit - Fetch and run prebuilt release binaries",
            epilog='Use "bootstrapkit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"BootstrapKit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./bootstrapkit.yaml)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_run_command(subparsers)
        self._add_post_command(subparsers)
        self._add_resolve_command(subparsers)
        self._add_cache_command(subparsers)

        return parser

    def _add_release_arguments(self, parser: argparse.ArgumentParser):
        """Add the options identifying the tool and its releases."""
        parser.add_argument(
            "--repo",
            metavar="OWNER/REPO",
            help="Repository publishing the releases (default: $GITHUB_REPOSITORY)",
        )
        parser.add_argument(
            "--tags",
            metavar="TAGS",
            help='Comma separated version candidates (e.g. "1, 1.0, latest")',
        )
        parser.add_argument(
            "--name",
            metavar="NAME",
            help="Tool name release assets start with (default: repository name)",
        )
        parser.add_argument(
            "--cache-dir",
            type=Path,
            metavar="PATH",
            help="Tool cache directory (default: ~/.bootstrapkit/cache)",
        )

    def _add_run_command(self, subparsers):
        """Add 'run' subcommand."""
        parser = subparsers.add_parser(
            "run",
            help="Acquire the tool and run the main command",
            description="Resolve, download and cache the tool, then run the main command from it",
        )
        self._add_release_arguments(parser)
        parser.add_argument(
            "--main",
            metavar="COMMAND",
            help='Command to run from the tool directory (e.g. "my-app --key val")',
        )
        parser.add_argument(
            "--state-file",
            type=Path,
            metavar="PATH",
            help="Where to record the tool directory for 'post'",
        )

    def _add_post_command(self, subparsers):
        """Add 'post' subcommand."""
        parser = subparsers.add_parser(
            "post",
            help="Run the post command",
            description="Run the post command from the directory recorded by 'run'",
        )
        parser.add_argument(
            "--post",
            metavar="COMMAND",
            help="Command to run from the recorded tool directory",
        )
        parser.add_argument(
            "--state-file",
            type=Path,
            metavar="PATH",
            help="State file written by 'run'",
        )

    def _add_resolve_command(self, subparsers):
        """Add 'resolve' subcommand."""
        parser = subparsers.add_parser(
            "resolve",
            help="Print the release tag of each candidate",
            description="Resolve version candidates to release tags without downloading",
        )
        self._add_release_arguments(parser)

    def _add_cache_command(self, subparsers):
        """Add 'cache' subcommand."""
        parser = subparsers.add_parser(
            "cache",
            help="List cached versions of the tool",
            description="List the versions of the tool present in the tool cache",
        )
        self._add_release_arguments(parser)

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except BootstrapKitError as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        module_name = COMMAND_MODULES.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
