#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Scan Engine Core Module

This module provides the dihedral scan engine: it rotates backbone dihedrals
of every frame either at fixed intervals or to random values, repairing
steric clashes after random rotations by incremental rotation and
backtracking to earlier dihedrals.
"""

from enum import Enum
from typing import List, Optional, Sequence
import math
import time
import torch

from ..clash_detector import ClashDetector, ClashStatus, ResidueCheck, build_residue_index
from ..dihedral_identifier import identify_dihedrals
from ..rotation import BondRotator
from ..structure_check import StructureChecker
from ...errors import ScanSetupError
from ...io.data_writer import DataSet
from ...io.trajectory_writer import TrajectoryWriter
from ...models.config import ScanConfig, MODE_RANDOM
from ...models.coordinate import Coordinate
from ...models.dihedral import Dihedral
from ...models.topology import Topology
from ...utils.logger import Logger
from ...utils.mask import AtomMask
from .cursor import DihedralCursor


# Unresolvable clash: resume at the previous dihedral
UNRESOLVABLE_STEP_BACK = 1


class ScanOutcome(Enum):
    """How the scan of one frame ended."""
    COMPLETED = "completed"
    ABORTED = "aborted"


class DihedralScanEngine:
    """
    Dihedral scan engine.

    Typical use::

        engine = DihedralScanEngine(config, logger)
        engine.setup(topology)
        for frame_num, frame in enumerate(frames):
            engine.do_action(frame_num, frame)

    Attributes:
        config (ScanConfig): Validated scan options
        logger (Logger): Logger instance
        trajectory_writer (Optional[TrajectoryWriter]): Snapshot output
        generator (torch.Generator): Random number generator, seeded once
        seed (int): Seed the generator was initialized with
        dihedrals (List[Dihedral]): Dihedrals in rotation order
        residue_index (List[ResidueCheck]): Residue records for clash checks
        clash_detector (Optional[ClashDetector]): Set up when clash checking is on
        structure_checker (StructureChecker): Produces the per-frame problem count
        number_of_problems (DataSet): Problem count per frame
        max_rotations (int): Rotation attempts allowed per frame
    """
    def __init__(self, config: ScanConfig, logger: Optional[Logger] = None,
                 trajectory_writer: Optional[TrajectoryWriter] = None,
                 generator: Optional[torch.Generator] = None):
        config.validate()
        self.config = config
        self.logger = logger or Logger(config.debug)
        self.trajectory_writer = trajectory_writer

        if generator is not None:
            self.generator = generator
            self.seed = generator.initial_seed()
        else:
            self.seed = config.rseed if config.rseed >= 0 else int(time.time())
            self.generator = torch.Generator()
            self.generator.manual_seed(self.seed)

        self.topology: Optional[Topology] = None
        self.dihedrals: List[Dihedral] = []
        self.residue_index: List[ResidueCheck] = []
        self.clash_detector: Optional[ClashDetector] = None
        self.structure_checker = StructureChecker(logger=self.logger)
        self.number_of_problems = DataSet(config.name, "Nprob")
        self.max_rotations = 0
        self.outframe = 0
        self.last_outcome: Optional[ScanOutcome] = None
        self.last_rotation_count = 0
        self.aborted_frames = 0

    def log_settings(self) -> None:
        """Log the scan settings."""
        config = self.config
        self.logger.info(f"DIHEDRALSCAN: Dihedrals in mask [{config.mask}]")
        if config.mode == MODE_RANDOM:
            self.logger.info("Dihedrals will be rotated to random values.", indent=2)
            if config.rseed < 0:
                self.logger.info(f"Random number generator will be seeded using time ({self.seed}).", indent=2)
            else:
                self.logger.info(f"Random number generator will be seeded using {self.seed}", indent=2)
            if config.check_for_clashes:
                self.logger.info("Will attempt to recover from bad steric clashes.", indent=2)
                self.logger.info(f"Atom cutoff {config.cutoff:.2f}, residue cutoff {config.rescutoff:.2f}, "
                                 f"backtrack = {config.backtrack}", indent=2)
                self.logger.info(f"When clashes occur dihedral will be incremented by {config.increment}", indent=2)
                self.logger.info(f"Max # attempted rotations = {config.max_factor} times number dihedrals.", indent=2)
        else:
            self.logger.info(f"Dihedrals will be rotated at intervals of {config.interval:.2f} degrees.", indent=2)
        if self.trajectory_writer is not None:
            self.logger.info(f"Coordinates output to {self.trajectory_writer.path}, format PDB", indent=2)

    def setup(self, topology: Topology, atom_mask: Optional[Sequence[int]] = None) -> List[Dihedral]:
        """
        Determine the dihedrals to rotate and prepare clash checking.

        Args:
            topology (Topology): Topology with residues and bonds
            atom_mask (Optional[Sequence[int]]): Selected atoms; parsed from
                ``config.mask`` when None

        Returns:
            List[Dihedral]: Dihedrals in rotation order

        Raises:
            ScanSetupError: If the selection is empty or invalid
        """
        if atom_mask is None:
            atom_mask = AtomMask.parse(self.config.mask).select(topology)
        if not atom_mask:
            raise ScanSetupError(f"Mask [{self.config.mask}] has no atoms.")
        self.logger.info(f"Mask [{self.config.mask}] corresponds to {len(atom_mask)} atoms.", indent=2)

        self.topology = topology
        self.dihedrals = identify_dihedrals(topology, atom_mask, self.config.interval, self.logger)
        if not self.dihedrals:
            self.logger.warning("No backbone dihedrals found in mask; frames will not be modified.")
        else:
            self.logger.info(f"{len(self.dihedrals)} dihedrals will be rotated.", indent=2)

        self.structure_checker.setup(topology)
        self.max_rotations = len(self.dihedrals) * self.config.max_factor

        if self.config.mode == MODE_RANDOM and self.config.check_for_clashes:
            self.residue_index = build_residue_index(topology)
            self.clash_detector = ClashDetector(self.residue_index, self.config.cutoff2,
                                                self.config.rescutoff2, self.logger)
        return self.dihedrals

    def random_angle(self) -> int:
        """
        Draw a rotation angle.

        Returns:
            int: Uniform integer angle in [1, 360] degrees
        """
        return int(torch.randint(1, 361, (1,), generator=self.generator).item())

    def _write_snapshot(self, frame: Coordinate) -> None:
        if self.trajectory_writer is not None:
            self.trajectory_writer.write_frame(self.outframe, frame)
            self.outframe += 1

    def interval_scan(self, frame: Coordinate) -> ScanOutcome:
        """
        Rotate each dihedral through a full turn in ``interval`` steps.

        The starting frame and the frame after every single rotation are
        written to the trajectory writer, if one is set.

        Args:
            frame (Coordinate): Frame to modify in place

        Returns:
            ScanOutcome: Always COMPLETED
        """
        self._write_snapshot(frame)
        for dih in self.dihedrals:
            dih.current_value = 0.0
            rotator = BondRotator(frame, dih.atom1, dih.atom2, dih.interval)
            if self.topology is not None:
                self.logger.debug(f"Rotating Dih {self.topology.truncated_atom_name(dih.atom1)}-"
                                  f"{self.topology.truncated_atom_name(dih.atom2)} by {dih.interval:.2f} deg "
                                  f"{dih.max_steps} times.", indent=2)
            for _ in range(dih.max_steps):
                rotator.apply(frame, dih.mask_tensor)
                dih.current_value = (dih.current_value + dih.interval) % 360.0
                self._write_snapshot(frame)
        return ScanOutcome.COMPLETED

    def random_scan(self, frame: Coordinate) -> ScanOutcome:
        """
        Rotate every dihedral to a random value, repairing clashes if enabled.

        Each visit to a dihedral counts as one rotation attempt; when the
        count exceeds ``max_rotations`` the scan of this frame stops where it is.

        Args:
            frame (Coordinate): Frame to modify in place

        Returns:
            ScanOutcome: COMPLETED when every dihedral was accepted, ABORTED otherwise
        """
        cursor = DihedralCursor(len(self.dihedrals))
        number_of_rotations = 0

        while not cursor.done:
            number_of_rotations += 1
            dih = self.dihedrals[cursor.position]
            # Residues up to and including the next dihedral's residue are checked for clashes
            if cursor.has_next:
                next_resnum = self.dihedrals[cursor.position + 1].residue
            else:
                next_resnum = dih.residue - 1

            step_back = self._rotate_dihedral(frame, dih, next_resnum)
            if step_back == 0:
                cursor.advance()
            elif cursor.retreat(step_back):
                self.logger.debug("Backtracking reached the first dihedral, retrying it.", indent=4)

            if number_of_rotations > self.max_rotations:
                self.logger.error(f"DihedralScan: # of rotations ({number_of_rotations}) exceeds "
                                  f"max rotations ({self.max_rotations}), exiting.")
                self.last_rotation_count = number_of_rotations
                return ScanOutcome.ABORTED

        self.logger.debug(f"Number of rotations {number_of_rotations}, expected {len(self.dihedrals)}", indent=2)
        self.last_rotation_count = number_of_rotations
        return ScanOutcome.COMPLETED

    def _rotate_dihedral(self, frame: Coordinate, dih: Dihedral, next_resnum: int) -> int:
        """
        Rotate one dihedral by a random angle and try to resolve any clash.

        Args:
            frame (Coordinate): Frame to modify in place
            dih (Dihedral): Dihedral to rotate
            next_resnum (int): Last residue index included in the clash check

        Returns:
            int: Number of positions the cursor must move back; 0 if the rotation was accepted
        """
        theta = self.random_angle()
        rotator = BondRotator(frame, dih.atom1, dih.atom2, theta)
        loop_count = 0
        best_clash = 0.0
        best_loop = 0
        self.logger.debug(f"Rotating res {dih.residue + 1:8d}:")

        while True:
            if self.topology is not None:
                self.logger.debug(f"{dih.residue + 1:8d} {dih.atom1 + 1:8d}{self.topology.atom_name(dih.atom1):>4} "
                                  f"{dih.atom2 + 1:8d}{self.topology.atom_name(dih.atom2):>4}, "
                                  f"+{rotator.angle_degrees:.2f} degrees ({loop_count}).", indent=2)
            rotator.apply(frame, dih.mask_tensor)

            if not self.config.check_for_clashes:
                return 0

            result = self.clash_detector.check_residue(frame, dih, next_resnum)
            if result.status is ClashStatus.NO_CLASH:
                return 0
            if result.status is ClashStatus.UNRESOLVABLE:
                self.logger.debug("Cannot resolve clash with further rotations, trying previous again.", indent=2)
                return UNRESOLVABLE_STEP_BACK

            # Least severe clash seen so far
            if result.distance2 > best_clash:
                best_clash = result.distance2
                best_loop = loop_count
            if loop_count == 0:
                # Instead of a new random value, try increments
                self.logger.debug(f"Trying dihedral increments of +{self.config.increment}", indent=2)
                rotator.set_angle(frame, self.config.increment)
            loop_count += 1
            if loop_count == self.config.max_increment:
                self.logger.debug(f"{self.config.max_increment} iterations! Best clash= "
                                  f"{math.sqrt(best_clash):.3f} at {best_loop}", indent=2)
                self.logger.debug(f"Cannot resolve clash with further rotations, trying previous "
                                  f"{self.config.backtrack} again.", indent=2)
                return self.config.backtrack_step

    def do_action(self, frame_num: int, frame: Coordinate) -> int:
        """
        Scan one frame and record its problem count.

        Args:
            frame_num (int): 0-based frame index
            frame (Coordinate): Frame to modify in place

        Returns:
            int: Number of problems in the resulting structure
        """
        if self.config.mode == MODE_RANDOM:
            outcome = self.random_scan(frame)
            # Random mode hands only the final structure to the trajectory
            self._write_snapshot(frame)
        else:
            outcome = self.interval_scan(frame)
        self.last_outcome = outcome
        if outcome is ScanOutcome.ABORTED:
            self.aborted_frames += 1

        n_problems = self.structure_checker.check_frame(frame_num + 1, frame)
        self.number_of_problems.add(frame_num, n_problems)
        return n_problems
