"""Allow ``python -m component_props``."""

import sys

from .cli import main

sys.exit(main())
