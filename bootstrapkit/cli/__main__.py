"""
Entry point for running BootstrapKit CLI as a module.

Usage: python -m bootstrapkit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
