#!/usr/bin/env python3
"""
SphereGlow - A small Monte Carlo path tracer

Main entry point for rendering the built-in scene.
"""

import sys

from sphereglow.cli import main


if __name__ == '__main__':
    sys.exit(main())
