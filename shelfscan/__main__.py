"""Allow running shelfscan as a module: python -m shelfscan."""

import sys

from shelfscan.cli import main

if __name__ == '__main__':
    sys.exit(main())
