#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Bond Rotation Module

Rigid rotation of a set of atoms about the axis through two bonded atoms.
"""

import math
from typing import Sequence, Union
import torch

from ..models.coordinate import Coordinate
from ..utils.coordinate_utils import create_axis_rotation_matrix, rotate_subset


def axis_rotation_matrix(coordinate: Coordinate, atom1: int, atom2: int, angle_degrees: float) -> torch.Tensor:
    """
    Rotation matrix for a rotation about the atom1 -> atom2 axis.

    Args:
        coordinate (Coordinate): Frame holding the axis atoms
        atom1 (int): Axis origin atom
        atom2 (int): Axis direction atom
        angle_degrees (float): Rotation angle in degrees

    Returns:
        torch.Tensor: Rotation matrix (shape: [3, 3])
    """
    coords = coordinate.coordinates
    axis = coords[atom2] - coords[atom1]
    return create_axis_rotation_matrix(axis, math.radians(angle_degrees))


def rotate_around_bond(coordinate: Coordinate, atom1: int, atom2: int, angle_degrees: float,
                       mask: Union[Sequence[int], torch.Tensor]) -> None:
    """
    Rotate the masked atoms about the bond atom1 -> atom2, in place.

    Every atom in ``mask`` is moved by x <- x1 + R (x - x1), where x1 is the
    position of atom1. Atoms outside the mask are untouched.

    Args:
        coordinate (Coordinate): Frame to modify
        atom1 (int): Axis origin atom
        atom2 (int): Axis direction atom
        angle_degrees (float): Rotation angle in degrees
        mask (Union[Sequence[int], torch.Tensor]): Indices of atoms to move

    Raises:
        ValueError: If atom1 and atom2 occupy the same position
    """
    indices = torch.as_tensor(mask, dtype=torch.long)
    if indices.numel() == 0:
        return
    rotation_matrix = axis_rotation_matrix(coordinate, atom1, atom2, angle_degrees)
    # Copy the origin; atom1 may be overwritten when it is in the mask
    center = coordinate.coordinates[atom1].clone()
    rotate_subset(coordinate.coordinates, rotation_matrix, center, indices)


class BondRotator:
    """
    Applies a fixed rotation about one bond repeatedly.

    The matrix is computed once from the axis positions. It stays valid across
    repeated applications because atom1 is never in a movable mask and atom2
    lies on the axis, so neither axis atom moves.

    Attributes:
        atom1 (int): Axis origin atom
        atom2 (int): Axis direction atom
        angle_degrees (float): Rotation angle in degrees
    """
    def __init__(self, coordinate: Coordinate, atom1: int, atom2: int, angle_degrees: float):
        self.atom1 = atom1
        self.atom2 = atom2
        self.angle_degrees = angle_degrees
        self.rotation_matrix = axis_rotation_matrix(coordinate, atom1, atom2, angle_degrees)

    def set_angle(self, coordinate: Coordinate, angle_degrees: float) -> None:
        self.angle_degrees = angle_degrees
        self.rotation_matrix = axis_rotation_matrix(coordinate, self.atom1, self.atom2, angle_degrees)

    def apply(self, coordinate: Coordinate, mask: torch.Tensor) -> None:
        """
        Rotate the masked atoms of a frame, in place.

        Args:
            coordinate (Coordinate): Frame to modify
            mask (torch.Tensor): Long tensor of atom indices to move
        """
        if mask.numel() == 0:
            return
        center = coordinate.coordinates[self.atom1].clone()
        rotate_subset(coordinate.coordinates, self.rotation_matrix, center, mask)
