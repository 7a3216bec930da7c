#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Scan Engine Module

Dihedral scan engine with random and interval rotation modes.
"""

from .core import DihedralScanEngine, ScanOutcome
from .cursor import DihedralCursor

__all__ = [
    'DihedralScanEngine',
    'ScanOutcome',
    'DihedralCursor'
]
