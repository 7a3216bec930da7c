#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Scan Configuration Model

Defines ScanConfig, the validated set of options controlling a dihedral scan.
"""

from typing import Any, Dict, Optional
from ..errors import ScanSetupError


SMALL = 0.00000001
MODE_RANDOM = "random"
MODE_INTERVAL = "interval"
MODES = (MODE_RANDOM, MODE_INTERVAL)


class ScanConfig:
    """
    Options for a dihedral scan.

    Distances are given in Angstrom; the squared values compared against
    squared atom distances are available as ``cutoff2`` and ``rescutoff2``.

    Attributes:
        mask (str): Atom mask selecting the dihedrals to rotate
        mode (str): "random" or "interval"
        interval (float): Rotation step in degrees (interval mode)
        check_for_clashes (bool): Repair clashes after random rotations
        cutoff (float): Atom-atom clash distance
        rescutoff (float): Residue-residue distance below which atoms are compared
        backtrack (int): Number of extra dihedrals to step back when a clash cannot be fixed
        increment (int): Rotation step in degrees used while repairing a clash
        max_factor (int): Maximum rotation attempts per frame, as a multiple of the dihedral count
        rseed (int): Random seed; -1 seeds from the current time
        outtraj (Optional[str]): Output trajectory path
        out (Optional[str]): Output data file for the problem counts
        name (str): Data set name
        debug (int): Debug level
    """
    def __init__(self, mask: str = "*", mode: str = MODE_RANDOM, interval: float = 60.0,
                 check_for_clashes: bool = False, cutoff: float = 0.8, rescutoff: float = 10.0,
                 backtrack: int = 4, increment: int = 1, max_factor: int = 2, rseed: int = -1,
                 outtraj: Optional[str] = None, out: Optional[str] = None, name: str = "Nprob",
                 debug: int = 0):
        self.mask = mask
        self.mode = mode
        self.interval = interval
        self.check_for_clashes = check_for_clashes
        self.cutoff = cutoff
        self.rescutoff = rescutoff
        self.backtrack = backtrack
        self.increment = increment
        self.max_factor = max_factor
        self.rseed = rseed
        self.outtraj = outtraj
        self.out = out
        self.name = name
        self.debug = debug

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScanConfig':
        """
        Create a configuration from a dictionary, ignoring unknown keys.

        Args:
            data (Dict[str, Any]): Option values keyed by attribute name

        Returns:
            ScanConfig: New configuration (not yet validated)
        """
        config = cls()
        for key, value in data.items():
            if hasattr(config, key) and value is not None:
                setattr(config, key, value)
        return config

    def to_dict(self) -> Dict[str, Any]:
        return dict(vars(self))

    @property
    def cutoff2(self) -> float:
        return self.cutoff * self.cutoff

    @property
    def rescutoff2(self) -> float:
        return self.rescutoff * self.rescutoff

    @property
    def backtrack_step(self) -> int:
        """Cursor step back when retries are exhausted: the current dihedral plus ``backtrack``."""
        return self.backtrack + 1

    @property
    def max_increment(self) -> int:
        """Number of repair increments covering a full turn."""
        return 360 // self.increment

    def validate(self) -> None:
        """
        Check option values.

        Raises:
            ScanSetupError: If any option is out of range
        """
        if self.mode not in MODES:
            raise ScanSetupError(f"Unknown scan mode '{self.mode}', expected one of: {', '.join(MODES)}")
        if not self.mask or not str(self.mask).strip():
            raise ScanSetupError("No atom mask given")
        if self.mode == MODE_INTERVAL:
            if self.interval < SMALL or self.interval > 360.0:
                raise ScanSetupError(f"Interval must be in (0, 360] degrees, got {self.interval}")
        if self.mode == MODE_RANDOM:
            if self.cutoff < SMALL:
                raise ScanSetupError("cutoff too small.")
            if self.rescutoff < SMALL:
                raise ScanSetupError("rescutoff too small.")
            if int(self.backtrack) != self.backtrack or self.backtrack < 0:
                raise ScanSetupError("backtrack value must be >= 0")
            if int(self.increment) != self.increment or self.increment < 1 or 360 % int(self.increment) != 0:
                raise ScanSetupError("increment must be a factor of 360.")
            if int(self.max_factor) != self.max_factor or self.max_factor < 1:
                raise ScanSetupError("maxfactor must be >= 1")
            self.backtrack = int(self.backtrack)
            self.increment = int(self.increment)
            self.max_factor = int(self.max_factor)

    def __repr__(self) -> str:
        return f"ScanConfig(mode={self.mode}, mask={self.mask})"
