#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Coordinate Data Model

Defines the Coordinate class: one frame of 3D atom positions.
"""

import torch
from typing import Sequence, Tuple


class Coordinate:
    """
    Container class for one frame of 3D coordinates.

    Rotations modify ``coordinates`` in place, so a Coordinate handed to the scan
    engine must not be shared with anything that expects the original positions.

    Attributes:
        coordinates (torch.Tensor): Tensor of 3D coordinates (shape: [N, 3], float64)
    """
    dtype = torch.float64

    def __init__(self, coordinates=None):
        if coordinates is None:
            self.coordinates: torch.Tensor = torch.empty(0, 3, dtype=self.dtype)
        else:
            self.coordinates = torch.as_tensor(coordinates, dtype=self.dtype).reshape(-1, 3)

    @classmethod
    def from_points(cls, points: Sequence[Tuple[float, float, float]]) -> 'Coordinate':
        """
        Build a frame from a sequence of (x, y, z) tuples.

        Args:
            points (Sequence[Tuple[float, float, float]]): Atom positions

        Returns:
            Coordinate: New frame
        """
        if len(points) == 0:
            return cls()
        return cls(torch.tensor(points, dtype=cls.dtype))

    def get_point_count(self) -> int:
        """
        Get the total number of points in the frame.

        Returns:
            int: Total number of points
        """
        return self.coordinates.shape[0]

    def get_coordinates_by_index(self, index: int) -> Tuple[float, float, float]:
        """
        Get coordinates by index.

        Args:
            index (int): Index of the point

        Returns:
            Tuple[float, float, float]: Coordinates of the point
        """
        coord = self.coordinates[index]
        return (float(coord[0]), float(coord[1]), float(coord[2]))

    def set_coordinates_by_index(self, index: int, xyz: Tuple[float, float, float]) -> None:
        self.coordinates[index] = torch.as_tensor(xyz, dtype=self.dtype)

    def copy(self) -> 'Coordinate':
        """
        Create a deep copy of the frame.

        Returns:
            Coordinate: Deep copy of the frame
        """
        return Coordinate(self.coordinates.detach().clone())

    def __len__(self) -> int:
        return self.get_point_count()

    def __repr__(self) -> str:
        """String representation of the frame"""
        return f"Coordinate(points={self.get_point_count()})"
