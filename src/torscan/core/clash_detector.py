#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Clash Detector Module

Residue-based steric clash detection used while repairing random rotations.

Checking every atom pair after every rotation attempt is too slow, so the
check is done in two steps. The coarse step compares one representative atom
per residue against a residue cutoff to find neighbouring residues; the fine
step compares every atom pair of the rotated residue with each neighbour.
"""

from enum import Enum
from typing import List, Optional

from ..models.coordinate import Coordinate
from ..models.dihedral import Dihedral
from ..models.topology import Topology
from ..utils.distance_utils import distance2, pairs_below_cutoff
from ..utils.logger import Logger


class ClashStatus(Enum):
    """Outcome of a residue clash check."""
    NO_CLASH = 0
    CLASH = 1
    UNRESOLVABLE = -1


class ClashResult:
    """
    Result of checking one residue.

    Attributes:
        status (ClashStatus): Outcome of the check
        distance2 (float): Squared distance of the reported clash, 0.0 if none
        atom1 (int): Atom of the checked residue in the reported clash, -1 if none
        atom2 (int): Other atom of the reported clash, -1 if none
    """
    def __init__(self, status: ClashStatus, distance2: float = 0.0, atom1: int = -1, atom2: int = -1):
        self.status = status
        self.distance2 = distance2
        self.atom1 = atom1
        self.atom2 = atom2

    def __repr__(self) -> str:
        return f"ClashResult({self.status.name}, distance2={self.distance2:.3f}, atoms={self.atom1}-{self.atom2})"


NO_CLASH = ClashResult(ClashStatus.NO_CLASH)


class ResidueCheck:
    """
    Atom range and representative atom of one residue.

    Attributes:
        resnum (int): Residue index
        start (int): First atom index
        stop (int): One past the last atom index
        check_atom (int): Atom used for the coarse residue-residue distance test
    """
    def __init__(self, resnum: int, start: int, stop: int):
        self.resnum = resnum
        self.start = start
        self.stop = stop
        self.check_atom = start

    def __repr__(self) -> str:
        return f"ResidueCheck(resnum={self.resnum}, atoms={self.start}-{self.stop})"


def build_residue_index(topology: Topology) -> List[ResidueCheck]:
    """
    Build one ResidueCheck per residue, in residue order.

    Args:
        topology (Topology): Topology with residues

    Returns:
        List[ResidueCheck]: Residue records
    """
    return [ResidueCheck(i, res.start, res.stop) for i, res in enumerate(topology.residues)]


class ClashDetector:
    """
    Checks the residue owning a dihedral for clashes.

    Attributes:
        residues (List[ResidueCheck]): Residue index
        cutoff2 (float): Squared atom-atom clash distance
        rescutoff2 (float): Squared residue-residue neighbour distance
        logger (Logger): Logger instance
    """
    def __init__(self, residues: List[ResidueCheck], cutoff2: float, rescutoff2: float,
                 logger: Optional[Logger] = None):
        self.residues = residues
        self.cutoff2 = cutoff2
        self.rescutoff2 = rescutoff2
        self.logger = logger or Logger(quiet=True)

    def check_residue(self, frame: Coordinate, dihedral: Dihedral, next_residue: int) -> ClashResult:
        """
        Check the dihedral's residue for clashes with itself and earlier residues.

        Residues 0 through ``next_residue`` (inclusive) are checked, so clashes
        with the residue of the next dihedral to be rotated are caught too.

        Args:
            frame (Coordinate): Current coordinates
            dihedral (Dihedral): Dihedral that was just rotated
            next_residue (int): Last residue index to check against

        Returns:
            ClashResult: NO_CLASH; CLASH with the squared distance when further
            rotation may help; UNRESOLVABLE when the clash involves an atom this
            dihedral cannot move
        """
        coords = frame.coordinates
        own = self.residues[dihedral.residue]

        # Clashes within the residue itself
        self_pairs = pairs_below_cutoff(coords[own.start:own.stop], coords[own.start:own.stop],
                                        self.cutoff2, upper_triangle=True)
        if self_pairs:
            i, j, d2 = min(self_pairs, key=lambda p: p[2])
            self.logger.debug(f"Res {own.resnum + 1} atoms {own.start + i + 1} and {own.start + j + 1} "
                              f"are close ({d2 ** 0.5:.3f})", indent=4, level=2)
            return ClashResult(ClashStatus.CLASH, d2, own.start + i, own.start + j)

        last = min(next_residue, len(self.residues) - 1)
        for res in self.residues[:last + 1]:
            if res.resnum == own.resnum:
                continue
            # Coarse test: skip residues that are far away
            if distance2(coords[own.check_atom], coords[res.check_atom]) >= self.rescutoff2:
                continue
            pairs = pairs_below_cutoff(coords[own.start:own.stop], coords[res.start:res.stop], self.cutoff2)
            if not pairs:
                continue
            pairs = [(own.start + i, res.start + j, d2) for i, j, d2 in pairs]
            atom1, atom2, d2 = min(pairs, key=lambda p: p[2])
            self.logger.debug(f"Res {own.resnum + 1} atom {atom1 + 1} and res {res.resnum + 1} atom {atom2 + 1} "
                              f"are close ({d2 ** 0.5:.3f})", indent=4, level=2)
            # Any close pair touching a check atom makes it unresolvable, not only the first
            # pair found; the same holds when the two residues swap roles
            for a, b, _ in pairs:
                if dihedral.is_check_atom(a) or dihedral.is_check_atom(b):
                    return ClashResult(ClashStatus.UNRESOLVABLE, d2, atom1, atom2)
            return ClashResult(ClashStatus.CLASH, d2, atom1, atom2)
        return NO_CLASH
