"""Run TimeDial with ``python -m timedial``."""

from __future__ import annotations

import sys

from timedial.app import main

if __name__ == "__main__":
    sys.exit(main())
