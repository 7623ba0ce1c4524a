#!/usr/bin/env python3
"""
Wrapper script for the rawpix demo.
Makes it easier to run without the -m flag.

Usage:
    python rawpix_demo.py --pattern noise --size 256 192 --ratio 1.5
"""

import sys
from rawpix.cli import main

if __name__ == '__main__':
    sys.exit(main())
