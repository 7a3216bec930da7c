#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Distance Utilities Module

Squared-distance calculations on coordinate tensors, including:
- Atom pair squared-distance matrices
- Pairs below a squared cutoff
"""

import torch
from typing import List, Tuple


def pairwise_distance2(coords1: torch.Tensor, coords2: torch.Tensor) -> torch.Tensor:
    """
    Calculate squared distances between all atom pairs from two sets of coordinates.

    Args:
        coords1 (torch.Tensor): First set of atom coordinates (shape: [num_atoms1, 3])
        coords2 (torch.Tensor): Second set of atom coordinates (shape: [num_atoms2, 3])

    Returns:
        torch.Tensor: Squared distance matrix (shape: [num_atoms1, num_atoms2])
    """
    expanded1 = coords1.unsqueeze(1)  # (N, 1, 3)
    expanded2 = coords2.unsqueeze(0)  # (1, M, 3)
    return torch.sum((expanded1 - expanded2) ** 2, dim=2)  # (N, M)


def distance2(point1: torch.Tensor, point2: torch.Tensor) -> float:
    """
    Squared distance between two points, no imaging.

    Args:
        point1 (torch.Tensor): First point (shape: [3])
        point2 (torch.Tensor): Second point (shape: [3])

    Returns:
        float: Squared distance
    """
    diff = point1 - point2
    return float(torch.dot(diff, diff))


def pairs_below_cutoff(coords1: torch.Tensor, coords2: torch.Tensor, cutoff2: float,
                       upper_triangle: bool = False) -> List[Tuple[int, int, float]]:
    """
    Find all atom pairs whose squared distance is below a squared cutoff.

    Pairs are returned in row-major order, i.e. the order a nested loop over
    ``coords1`` then ``coords2`` would visit them.

    Args:
        coords1 (torch.Tensor): First set of atom coordinates (shape: [num_atoms1, 3])
        coords2 (torch.Tensor): Second set of atom coordinates (shape: [num_atoms2, 3])
        cutoff2 (float): Squared distance cutoff
        upper_triangle (bool): Only consider pairs (i, j) with j > i; used when
            both sets are the same atoms

    Returns:
        List[Tuple[int, int, float]]: (index1, index2, distance2) for every close pair
    """
    if coords1.shape[0] == 0 or coords2.shape[0] == 0:
        return []
    d2 = pairwise_distance2(coords1, coords2)
    close = d2 < cutoff2
    if upper_triangle:
        close = torch.triu(close, diagonal=1)
    indices = torch.nonzero(close, as_tuple=False)
    return [(int(i), int(j), float(d2[i, j])) for i, j in indices.tolist()]
