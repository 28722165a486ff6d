"""Allow ``python -m lumonsh``."""

import sys

from lumonsh.main import main

sys.exit(main())
