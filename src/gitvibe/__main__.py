"""Entry point for ``python -m gitvibe``."""

import sys

from gitvibe.cli import main

if __name__ == "__main__":
	sys.exit(main())
