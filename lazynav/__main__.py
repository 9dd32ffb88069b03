"""Module entrypoint for ``python -m lazynav``.

All argument parsing and runtime setup happen in ``lazynav.cli``.
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
