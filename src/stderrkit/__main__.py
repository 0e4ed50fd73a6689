"""Allow ``python -m stderrkit``."""

import sys

from stderrkit.cli import main

sys.exit(main())
