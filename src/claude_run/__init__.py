"""
claude-run - pick a model provider and export its environment for the claude CLI.

Usage:
    claude-run                   # Interactive setup wizard
    claude-run --list-providers  # Show known providers
    claude-run --test            # Check the saved endpoint and key
    claude-run --reset           # Forget saved settings
"""

__version__ = "0.1.0"
__author__ = "claude-run contributors"
