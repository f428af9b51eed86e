"""
Main entry point for HVAC Cycle Diagnostics

Run with: python main.py reading.json

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-06
"""

import sys

from app_hvac_diag.ui.app import main

if __name__ == "__main__":
    sys.exit(main())
