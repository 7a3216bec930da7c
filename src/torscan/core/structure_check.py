#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Structure Check Module

Counts atom overlaps in a frame. The count is reported per frame as the
"number of problems" of a scanned structure.
"""

from typing import Optional, Set, Tuple

from ..models.coordinate import Coordinate
from ..models.topology import Topology
from ..utils.distance_utils import pairs_below_cutoff
from ..utils.logger import Logger


class StructureChecker:
    """
    Reports atom pairs closer than a cutoff, skipping directly bonded pairs.

    Distances are computed ``block_size`` rows at a time against the atoms
    that follow the block, so memory grows with ``block_size * N`` rather
    than ``N * N``. No periodic imaging and no bond length checks are done.

    Attributes:
        cutoff (float): Overlap distance in Angstrom
        block_size (int): Number of atoms per distance block
        logger (Logger): Logger instance
    """
    def __init__(self, cutoff: float = 0.8, logger: Optional[Logger] = None, block_size: int = 128):
        if block_size < 1:
            raise ValueError("block_size must be >= 1")
        self.cutoff = cutoff
        self.block_size = block_size
        self.logger = logger or Logger(quiet=True)
        self._bonded: Set[Tuple[int, int]] = set()

    def setup(self, topology: Topology) -> None:
        """
        Collect the bonded pairs excluded from the overlap count.

        Args:
            topology (Topology): Topology with bonds
        """
        self._bonded = {(atom, partner) for atom, partners in enumerate(topology.bonds)
                        for partner in partners if partner > atom}

    def check_frame(self, frame_num: int, frame: Coordinate) -> int:
        """
        Count overlapping atom pairs in a frame.

        Args:
            frame_num (int): 1-based frame number, used in messages
            frame (Coordinate): Frame to check

        Returns:
            int: Number of problems found
        """
        coords = frame.coordinates
        natom = coords.shape[0]
        cutoff2 = self.cutoff * self.cutoff
        n_problems = 0
        for start in range(0, natom, self.block_size):
            stop = min(start + self.block_size, natom)
            # Rows start..stop against every atom from start on; keep j > i only
            for i, j, _ in pairs_below_cutoff(coords[start:stop], coords[start:], cutoff2):
                atom1 = start + i
                atom2 = start + j
                if atom2 > atom1 and (atom1, atom2) not in self._bonded:
                    n_problems += 1
        if n_problems > 0:
            self.logger.debug(f"Frame {frame_num}: {n_problems} atom pairs closer than {self.cutoff:.2f} Angstrom")
        return n_problems
