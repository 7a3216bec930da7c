#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Data Set Output Module

Per-frame integer data sets and the plain whitespace data file they are
written to:

    #Frame        Nprob
           1            0
           2            3
"""

from typing import Dict, List, Optional
import numpy as np

from ..utils.logger import Logger


class DataSet:
    """
    Integer values keyed by 0-based frame index.

    Attributes:
        name (str): Data set name
        legend (str): Column label used in output files
    """
    def __init__(self, name: str, legend: Optional[str] = None):
        self.name = name
        self.legend = legend or name
        self._values: Dict[int, int] = {}

    def add(self, frame: int, value: int) -> None:
        """
        Store the value for a frame, replacing any earlier value.

        Args:
            frame (int): 0-based frame index
            value (int): Value to store
        """
        self._values[int(frame)] = int(value)

    def frames(self) -> List[int]:
        return sorted(self._values)

    def values(self) -> np.ndarray:
        """Values ordered by frame index."""
        return np.array([self._values[f] for f in self.frames()], dtype=np.int64)

    def __getitem__(self, frame: int) -> int:
        return self._values[frame]

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"DataSet(name={self.name}, frames={len(self)})"


class DataFile:
    """
    Standard data file: a frame column followed by one column per data set.

    Attributes:
        path (str): Output file path
        data_sets (List[DataSet]): Data sets written to the file
        logger (Logger): Logger instance
    """
    def __init__(self, path: str, logger: Optional[Logger] = None):
        self.path = path
        self.data_sets: List[DataSet] = []
        self.logger = logger or Logger(quiet=True)

    def add_set(self, data_set: DataSet) -> None:
        self.data_sets.append(data_set)

    def write_string(self) -> str:
        """
        Format all data sets.

        Frames missing from a set are written as 0.

        Returns:
            str: File contents
        """
        frames = sorted(set().union(*(ds.frames() for ds in self.data_sets))) if self.data_sets else []
        table = np.zeros((len(frames), len(self.data_sets)), dtype=np.int64)
        row_of = {frame: row for row, frame in enumerate(frames)}
        for col, ds in enumerate(self.data_sets):
            for frame, value in zip(ds.frames(), ds.values()):
                table[row_of[frame], col] = value

        lines = ["#Frame  " + " ".join(f"{ds.legend:>12}" for ds in self.data_sets)]
        for row, frame in enumerate(frames):
            lines.append(f"{frame + 1:8d} " + " ".join(f"{int(v):12d}" for v in table[row]))
        return "\n".join(lines) + "\n"

    def write(self) -> bool:
        """
        Write the data file.

        Returns:
            bool: True if write was successful, False otherwise
        """
        self.logger.debug(f"Writing data file: {self.path}")
        try:
            with open(self.path, 'w', encoding='utf-8') as f:
                f.write(self.write_string())
        except OSError as e:
            self.logger.error(f"Error writing data file {self.path}: {str(e)}")
            return False
        self.logger.info(f"Wrote {', '.join(ds.name for ds in self.data_sets)} to {self.path}")
        return True
