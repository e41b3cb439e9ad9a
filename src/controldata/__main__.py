"""Allow ``python -m controldata``."""

import sys

from controldata.adapters.inbound.cli import main

sys.exit(main())
