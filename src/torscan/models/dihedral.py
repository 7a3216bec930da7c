#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Dihedral Data Model

Defines the Dihedral class describing one rotatable backbone bond.
"""

from typing import List
import torch


class Dihedral:
    """
    One rotatable bond and the atoms affected by rotating it.

    Attributes:
        atom1 (int): First axis atom; stays fixed
        atom2 (int): Second axis atom; its side of the molecule moves
        movable_mask (List[int]): Sorted indices of atoms moved by a rotation
        check_atoms (List[int]): Atoms of atom1's residue that a rotation cannot
            move, plus atom2; a clash involving them cannot be fixed by this bond
        residue (int): Residue index owning atom2
        current_value (float): Cumulative rotation applied in interval mode (degrees)
        interval (float): Rotation step in interval mode (degrees)
        max_steps (int): Number of interval steps covering 360 degrees
    """
    def __init__(self, atom1: int, atom2: int, movable_mask: List[int], check_atoms: List[int],
                 residue: int, interval: float = 60.0):
        self.atom1 = atom1
        self.atom2 = atom2
        self.movable_mask = movable_mask
        self.check_atoms = check_atoms
        self.residue = residue
        self.current_value = 0.0
        self.interval = interval
        self.max_steps = int(360.0 / interval) if interval > 0 else 0
        self._mask_tensor = torch.tensor(movable_mask, dtype=torch.long)
        self._check_set = frozenset(check_atoms)

    @property
    def mask_tensor(self) -> torch.Tensor:
        """Movable atom indices as a long tensor, ready for index_select."""
        return self._mask_tensor

    def is_check_atom(self, atom: int) -> bool:
        return atom in self._check_set

    def __repr__(self) -> str:
        return (f"Dihedral(atom1={self.atom1}, atom2={self.atom2}, residue={self.residue}, "
                f"movable={len(self.movable_mask)}, check={len(self.check_atoms)})")
