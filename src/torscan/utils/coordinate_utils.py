#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Coordinate Utilities Module

Rotation matrix construction and rotation of coordinate subsets.
"""

import math
import torch


def create_axis_rotation_matrix(axis: torch.Tensor, angle_rad: float) -> torch.Tensor:
    """
    Create the rotation matrix for a right-handed rotation about an axis.

    Args:
        axis (torch.Tensor): Rotation axis (shape: [3]); normalized here
        angle_rad (float): Rotation angle in radians

    Returns:
        torch.Tensor: Rotation matrix (shape: [3, 3])

    Raises:
        ValueError: If the axis has zero length
    """
    norm = torch.linalg.norm(axis)
    if float(norm) == 0.0:
        raise ValueError("Cannot rotate about a zero-length axis")
    ux, uy, uz = (float(c) for c in axis / norm)

    cos_theta = math.cos(angle_rad)
    sin_theta = math.sin(angle_rad)
    one_minus = 1.0 - cos_theta

    return torch.tensor([
        [cos_theta + ux * ux * one_minus, ux * uy * one_minus - uz * sin_theta, ux * uz * one_minus + uy * sin_theta],
        [uy * ux * one_minus + uz * sin_theta, cos_theta + uy * uy * one_minus, uy * uz * one_minus - ux * sin_theta],
        [uz * ux * one_minus - uy * sin_theta, uz * uy * one_minus + ux * sin_theta, cos_theta + uz * uz * one_minus]
    ], dtype=axis.dtype, device=axis.device)


def rotate_subset(coordinates: torch.Tensor, rotation_matrix: torch.Tensor,
                  center: torch.Tensor, indices: torch.Tensor) -> None:
    """
    Rotate the selected rows of a coordinate tensor about a center point, in place.

    Args:
        coordinates (torch.Tensor): Atom coordinates (shape: [num_atoms, 3]); modified
        rotation_matrix (torch.Tensor): Rotation matrix (shape: [3, 3])
        center (torch.Tensor): Point on the rotation axis (shape: [3])
        indices (torch.Tensor): Long tensor of atom indices to move
    """
    selected = coordinates.index_select(0, indices) - center
    # Row vectors: x' = R x  <=>  x'^T = x^T R^T
    coordinates.index_copy_(0, indices, torch.matmul(selected, rotation_matrix.T) + center)
