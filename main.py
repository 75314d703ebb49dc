#!/usr/bin/env python3
"""IntervalQuest — entry point.

Run with:
    python main.py --preset "Quick HIIT"
    python -m intervalquest --work 30 --rest 10 --rounds 5
"""

import sys

from intervalquest.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
