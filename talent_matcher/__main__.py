"""
Main entry point for the talent_matcher package.

Usage:
    python -m talent_matcher [command] [options]

See 'python -m talent_matcher --help' for available commands.
"""

from talent_matcher.cli import main

if __name__ == "__main__":
    main()
