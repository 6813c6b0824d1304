#!/usr/bin/env python3
"""
Launch script for the Q-learning grid world.
Runs the command-line front end from a source checkout.
"""

import sys

from qgrid.__main__ import main

if __name__ == "__main__":
    sys.exit(main())
