"""Allows ``python -m runalone -- COMMAND``."""

import sys

from runalone.core.cli import main

sys.exit(main())
