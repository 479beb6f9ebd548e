"""
Package entry point.

Allows running the application via:

    python -m sgpacalc

This simply forwards execution to sgpacalc.cli.main().
"""

from sgpacalc.cli import main

if __name__ == "__main__":
    main()
