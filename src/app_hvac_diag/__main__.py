"""
Entry point for HVAC Cycle Diagnostics

Allows running the application with: python -m app_hvac_diag

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-06
"""

import sys

from app_hvac_diag.ui.app import main

if __name__ == "__main__":
    sys.exit(main())
