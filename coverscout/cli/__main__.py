"""Allow ``python -m coverscout.cli`` execution."""

import sys

from coverscout.cli.scrape import main

sys.exit(main())
