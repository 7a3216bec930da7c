#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Trajectory Writer Module

Writes coordinate frames to a multi-model PDB trajectory.
"""

from typing import Optional, TextIO

from ..models.coordinate import Coordinate
from ..models.topology import Topology
from ..utils.logger import Logger


class TrajectoryWriter:
    """
    Multi-model PDB trajectory output.

    Every written frame becomes a MODEL ... ENDMDL block; ``end()`` closes
    the file with an END record.

    Attributes:
        path (str): Output file path
        topology (Topology): Topology used to format atom records
        frames_written (int): Number of frames written so far
        logger (Logger): Logger instance
    """
    def __init__(self, path: str, topology: Topology, logger: Optional[Logger] = None):
        self.path = path
        self.topology = topology
        self.frames_written = 0
        self.logger = logger or Logger(quiet=True)
        self._handle: Optional[TextIO] = None

    def open(self) -> None:
        """
        Open the output file for writing.

        Raises:
            OSError: If the file cannot be created
        """
        if self._handle is not None:
            raise OSError(f"Trajectory {self.path} is already open")
        self._handle = open(self.path, 'w', encoding='utf-8')
        self.frames_written = 0
        self.logger.debug(f"Opened trajectory for writing: {self.path}")

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    def write_frame(self, frame_num: int, coordinate: Coordinate) -> None:
        """
        Append one frame as a MODEL block.

        Args:
            frame_num (int): 0-based output frame number
            coordinate (Coordinate): Frame to write
        """
        if self._handle is None:
            self.open()
        if coordinate.get_point_count() != self.topology.get_atom_count():
            raise ValueError(f"Frame has {coordinate.get_point_count()} atoms, "
                             f"topology has {self.topology.get_atom_count()}")
        lines = [f"MODEL     {frame_num + 1:4d}"]
        lines.extend(self.topology.to_pdb_lines(coordinate))
        lines.append("ENDMDL")
        self._handle.write("\n".join(lines) + "\n")
        self.frames_written += 1

    def end(self) -> None:
        """Write the END record and close the file."""
        if self._handle is None:
            return
        self._handle.write("END\n")
        self._handle.close()
        self._handle = None
        self.logger.info(f"Wrote {self.frames_written} frames to {self.path}")

    def __enter__(self) -> 'TrajectoryWriter':
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.end()
