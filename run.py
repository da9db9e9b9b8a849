#!/usr/bin/env python3
"""
run.py - Main entry point for the Connect-N engine

Examples:
    python run.py play
    python run.py play --rows 7 --cols 7 --connect 5
    python run.py test --position 2,2,2,0,0,0,...
    python run.py benchmark --iterations 500
"""

import sys

from connectn.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
