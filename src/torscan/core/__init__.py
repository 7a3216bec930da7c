#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core Module

Provides core functionality for backbone dihedral scanning, including dihedral
identification, bond rotation, clash detection and the scan engine.
"""

from .rotation import BondRotator, rotate_around_bond
from .dihedral_identifier import identify_dihedrals
from .clash_detector import ClashDetector, ClashResult, ClashStatus
from .structure_check import StructureChecker
from .scan_engine import DihedralScanEngine, ScanOutcome

__all__ = [
    'BondRotator',
    'rotate_around_bond',
    'identify_dihedrals',
    'ClashDetector',
    'ClashResult',
    'ClashStatus',
    'StructureChecker',
    'DihedralScanEngine',
    'ScanOutcome'
]
