#!/usr/bin/env python3
"""Tabata Timer — entry point.

Run with:
    python main.py
    python -m tabata
"""

from tabata.__main__ import main


if __name__ == "__main__":
    main()
