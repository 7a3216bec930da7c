#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
torscan Package

Backbone dihedral scanning of protein structures: rotates phi/psi dihedrals
at fixed intervals or to random values, with steric clash repair.
"""

from .cli import main_cli
from .core.scan_engine import DihedralScanEngine, ScanOutcome
from .core.clash_detector import ClashDetector, ClashStatus
from .io.pdb_io import PDBIO
from .io.trajectory_writer import TrajectoryWriter
from .io.data_writer import DataSet, DataFile
from .models.topology import Topology
from .models.coordinate import Coordinate
from .models.config import ScanConfig
from .errors import ScanSetupError
from .utils.logger import Logger

__all__ = [
    'main_cli',
    'DihedralScanEngine',
    'ScanOutcome',
    'ClashDetector',
    'ClashStatus',
    'PDBIO',
    'TrajectoryWriter',
    'DataSet',
    'DataFile',
    'Topology',
    'Coordinate',
    'ScanConfig',
    'ScanSetupError',
    'Logger'
]

__version__ = '1.0.0'
__description__ = 'Backbone dihedral scan with steric clash repair'
