"""Allow ``python -m immutable_table``."""

import sys

from immutable_table.cli import main

sys.exit(main())
