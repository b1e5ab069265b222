"""Allow running the exporter with ``python -m brother_exporter``."""

import sys

from brother_exporter.cli import main

sys.exit(main())
