#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
IO Module

Reading and writing of PDB structures, trajectories and data files.
"""

from .pdb_io import PDBIO
from .trajectory_writer import TrajectoryWriter
from .data_writer import DataSet, DataFile

__all__ = ['PDBIO', 'TrajectoryWriter', 'DataSet', 'DataFile']
