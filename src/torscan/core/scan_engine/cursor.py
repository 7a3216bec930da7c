#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Dihedral Cursor Module

Position in the ordered dihedral list during a random scan.
"""


class DihedralCursor:
    """
    Bounds-checked index into a list of dihedrals.

    The cursor runs from 0 to ``length``; reaching ``length`` means every
    dihedral has been accepted. Moving back never goes below 0: a move that
    would underflow lands on the first dihedral and is reported as clamped.

    Attributes:
        length (int): Number of dihedrals
        position (int): Current index
    """
    def __init__(self, length: int, position: int = 0):
        if length < 0:
            raise ValueError("length must be >= 0")
        self.length = length
        self.position = min(max(position, 0), length)

    @property
    def done(self) -> bool:
        return self.position >= self.length

    @property
    def has_next(self) -> bool:
        """Whether a dihedral follows the current one."""
        return self.position + 1 < self.length

    def advance(self) -> int:
        """
        Move to the next dihedral; never past the end.

        Returns:
            int: New position
        """
        self.position = min(self.position + 1, self.length)
        return self.position

    def retreat(self, steps: int) -> bool:
        """
        Move back by ``steps`` dihedrals.

        Args:
            steps (int): Number of positions to move back (>= 0)

        Returns:
            bool: True if the move was clamped at the start of the list
        """
        if steps < 0:
            raise ValueError("steps must be >= 0")
        target = self.position - steps
        self.position = max(target, 0)
        return target < 0

    def __repr__(self) -> str:
        return f"DihedralCursor(position={self.position}, length={self.length})"
