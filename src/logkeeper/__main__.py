"""Run the logkeeper CLI with ``python -m logkeeper``."""

import sys

from logkeeper.ui.cli import main

if __name__ == "__main__":
    sys.exit(main())
