#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Error Types

Exceptions raised while setting up a dihedral scan.
"""


class ScanSetupError(ValueError):
    """
    Raised when the scan cannot be set up: invalid configuration values,
    an empty or malformed atom selection, or a broken bond graph.
    """
