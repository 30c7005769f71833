#!/usr/bin/env python3
"""Sample straddle run.

Usage:
    python scripts/price_straddle.py
    python scripts/price_straddle.py --straddle-price 25 --strike 100
"""

import os
import sys

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from optionrisk.cli import main

if __name__ == "__main__":
    sys.exit(main())
