#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Model Package

Provides data models for atoms, residues, topology, coordinate frames,
dihedrals and scan configuration.
"""

from .atom import Atom
from .residue import Residue
from .coordinate import Coordinate
from .topology import Topology
from .dihedral import Dihedral
from .config import ScanConfig, MODE_RANDOM, MODE_INTERVAL

__all__ = ['Atom', 'Residue', 'Coordinate', 'Topology', 'Dihedral', 'ScanConfig', 'MODE_RANDOM', 'MODE_INTERVAL']
