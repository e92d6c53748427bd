"""
Entry point for running BootstrapKit CLI as a module.

Usage: python -m bootstrapkit [command] [options]
"""

from bootstrapkit.cli.parser import main

if __name__ == "__main__":
    main()
