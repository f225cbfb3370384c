"""Setup utilities for claude-run."""

from .connection import check_connection
from .prompt_utils import SetupCancelled
from .wizard import EnvSetupWizard, run_setup_wizard

__all__ = [
    "SetupCancelled",
    "EnvSetupWizard",
    "run_setup_wizard",
    "check_connection",
]
