"""
Entry point for running anylist-cli as a module.

This allows users to run the CLI using:
    python -m anylist_cli [command] [options]
"""

from anylist_cli.cli.app import main

if __name__ == "__main__":
    main()
