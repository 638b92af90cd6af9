"""Allow ``python -m korrupt``."""

import sys

from korrupt.cli.main import main

sys.exit(main())
