"""
Airwatch Module Entry Point
============================

Allows running the Airwatch CLI via: python -m airwatch
"""

from airwatch.cli import main

if __name__ == "__main__":
    main()
