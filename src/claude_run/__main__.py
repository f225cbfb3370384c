"""Allow ``python -m claude_run``."""

import sys

from claude_run.cli import main

if __name__ == "__main__":
    sys.exit(main())
