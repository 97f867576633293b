"""Allow ``python -m mercure_client``."""

import sys

from mercure_client.cli import main

sys.exit(main())
