"""Allow ``python -m attitude``."""

import sys

from attitude.main import main

sys.exit(main())
