#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Utilities Module

Logging, distance and rotation helpers.
"""

from .logger import Logger
from .coordinate_utils import create_axis_rotation_matrix, rotate_subset
from .distance_utils import pairwise_distance2, distance2, pairs_below_cutoff

__all__ = [
    'Logger',
    'create_axis_rotation_matrix',
    'rotate_subset',
    'pairwise_distance2',
    'distance2',
    'pairs_below_cutoff'
]
