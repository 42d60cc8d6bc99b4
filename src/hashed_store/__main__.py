"""Allow ``python -m hashed_store``."""

import sys

from .cli import main

sys.exit(main())
