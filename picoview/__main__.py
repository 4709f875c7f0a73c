"""Module entrypoint for ``python -m picoview``.

All argument parsing and runtime setup happen in ``picoview.cli``.
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
