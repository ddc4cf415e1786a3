#!/usr/bin/env python3
"""
Metaball Menu — quick launcher.

Usage:
    python run_metaballmenu.py [options]

Run ``python run_metaballmenu.py --help`` for full options.
"""

from metaballmenu.app import main

if __name__ == "__main__":
    main()
