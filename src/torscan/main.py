#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Dihedral Scan Main Application

Main entry point for the dihedral scan application.
"""

import sys
from torscan.cli import main_cli


if __name__ == "__main__":
    exit_code = main_cli()
    sys.exit(exit_code)
