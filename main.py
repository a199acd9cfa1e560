"""
Gymnarium Application - Main Entry Point
Run this file to validate a combination of environment, agent, visualiser
and exit condition and start the run.
"""

import sys

from gymnarium_app.cli import main

if __name__ == "__main__":
    sys.exit(main())
