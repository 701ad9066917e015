# src/tcpl_scanner/__main__.py
"""Permite ejecutar: python -m tcpl_scanner <ruta>"""

import sys

from tcpl_scanner.modules.interface.entry_points.cli import main

if __name__ == "__main__":
    sys.exit(main())
