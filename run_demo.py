#!/usr/bin/env python3
"""
Run the genetics demo

Usage:
    python run_demo.py [size]
"""

import sys

from bitgenetics.demo import main

if __name__ == '__main__':
    sys.exit(main())
