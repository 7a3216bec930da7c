#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Dihedral Scan CLI Module

Provides the command-line interface for the backbone dihedral scan.
"""

import sys
import argparse
import json
import os
from typing import Optional
from tqdm import tqdm

from .errors import ScanSetupError
from .core.scan_engine import DihedralScanEngine
from .io.data_writer import DataFile
from .io.pdb_io import PDBIO
from .io.trajectory_writer import TrajectoryWriter
from .models.config import ScanConfig, MODE_RANDOM, MODE_INTERVAL
from .utils.logger import Logger
from .utils.mask import AtomMask


class ScanCLI:
    """
    Command-line interface for the dihedral scan.

    Attributes:
        logger (Logger): Logger instance for debug logging
        pdb_io (PDBIO): PDB file reader
        engine (DihedralScanEngine): Scan engine of the last run
    """
    def __init__(self):
        self.logger = None
        self.pdb_io = None
        self.engine = None

    def parse_arguments(self, args: list) -> Optional[dict]:
        """
        Parse command-line arguments using argparse.

        Values from ``--json`` (a JSON string or a JSON file path) replace the
        defaults; options given on the command line take precedence over both.

        Args:
            args (list): Command-line arguments

        Returns:
            Optional[dict]: Parsed arguments as a dictionary, None if the JSON is invalid
        """
        default_values = ScanConfig().to_dict()
        default_values.update({
            'input_file': None,
            'log_file': None,
        })

        # Check for JSON argument first
        json_arg = None
        if '--json' in args or '-j' in args:
            json_idx = args.index('--json') if '--json' in args else args.index('-j')
            if json_idx + 1 < len(args):
                json_arg = args[json_idx + 1]
                # Remove JSON arguments from args list
                args = args[:json_idx] + args[json_idx + 2:]

        if json_arg:
            if os.path.isfile(json_arg):
                with open(json_arg, 'r', encoding='utf-8') as f:
                    json_data = json.load(f)
            else:
                try:
                    json_data = json.loads(json_arg)
                except json.JSONDecodeError:
                    self.logger.error(f"Error: Invalid JSON string or file path: {json_arg}")
                    return None
            for key, value in json_data.items():
                if key in default_values:
                    default_values[key] = value

        parser = argparse.ArgumentParser(
            prog='torscan',
            description='Backbone dihedral scan with clash repair',
            formatter_class=argparse.RawTextHelpFormatter
        )
        parser.add_argument('input_file', nargs='?', help='Input PDB file (one frame per MODEL)')
        parser.add_argument('--mask', help='Atom mask selecting dihedrals (default: *)')
        mode_group = parser.add_mutually_exclusive_group()
        mode_group.add_argument('--random', dest='mode', action='store_const', const=MODE_RANDOM,
                                help='Rotate dihedrals to random values (default)')
        mode_group.add_argument('--interval', dest='interval', type=float,
                                help='Rotate dihedrals at this interval in degrees')
        parser.add_argument('--outtraj', help='Output trajectory (multi-model PDB)')
        parser.add_argument('--check', dest='check_for_clashes', action='store_const', const=True,
                            help='Try to recover from steric clashes (random mode)')
        parser.add_argument('--cutoff', type=float, help='Atom clash cutoff in Angstrom (default: 0.8)')
        parser.add_argument('--rescutoff', type=float, help='Residue proximity cutoff in Angstrom (default: 10.0)')
        parser.add_argument('--backtrack', type=int, help='Dihedrals to step back on failure (default: 4)')
        parser.add_argument('--increment', type=int, help='Repair increment in degrees, factor of 360 (default: 1)')
        parser.add_argument('--maxfactor', dest='max_factor', type=int,
                            help='Max rotations per frame as multiple of dihedral count (default: 2)')
        parser.add_argument('--rseed', type=int, help='Random seed, -1 uses the time (default: -1)')
        parser.add_argument('--out', help='Output data file for problem counts')
        parser.add_argument('--name', help='Data set name (default: Nprob)')
        parser.add_argument('--debug', '-d', type=int, nargs='?', const=1, help='Debug level 0-3')
        parser.add_argument('--log-file', dest='log_file', help='Also write log messages to this file')

        parsed_args = parser.parse_args(args)
        args_dict = vars(parsed_args)

        if args_dict.get('interval') is not None:
            args_dict['mode'] = MODE_INTERVAL

        for key, value in args_dict.items():
            if value is not None:
                default_values[key] = value

        return default_values

    def run(self, args: list) -> int:
        """
        Run the CLI application.

        Args:
            args (list): Command-line arguments

        Returns:
            int: Exit code (0 for success, 1 for failure)
        """
        # Initialize logger early for error handling during parsing
        self.logger = Logger()
        parsed_args = self.parse_arguments(args)
        if parsed_args is None:
            return 1

        self.logger = Logger(parsed_args['debug'], parsed_args['log_file'])
        self.pdb_io = PDBIO(self.logger.child("PDBIO"))

        if not parsed_args['input_file']:
            self.logger.error("Error: Missing input PDB file path")
            return 1
        return self.run_scan(parsed_args)

    def run_scan(self, parsed_args: dict) -> int:
        """
        Scan every frame of the input structure.

        Args:
            parsed_args (dict): Parsed command-line arguments

        Returns:
            int: Exit code (0 for success, 1 for failure)
        """
        config = ScanConfig.from_dict(parsed_args)
        try:
            config.validate()
        except ScanSetupError as e:
            self.logger.error(f"Error: {e}")
            return 1
        self.logger.log_dict(config.to_dict(), "Scan Parameters")

        input_file = parsed_args['input_file']
        self.logger.info(f"Parsing PDB file: {input_file}")
        topology, frames = self.pdb_io.parse_file(input_file)
        if not topology.atoms or not frames:
            for error in topology.errors:
                self.logger.error(error)
            self.logger.error("Parsing failed, exiting program")
            return 1

        writer = None
        if config.outtraj:
            writer = TrajectoryWriter(config.outtraj, topology, self.logger.child("Trajectory"))

        self.engine = DihedralScanEngine(config, self.logger, writer)
        self.engine.log_settings()
        try:
            atom_mask = AtomMask.parse(config.mask).select(topology)
            self.engine.setup(topology, atom_mask)
        except ScanSetupError as e:
            self.logger.error(f"Error: {e}")
            return 1

        self.logger.section("Dihedral Scan")
        try:
            for frame_num, frame in enumerate(tqdm(frames, desc="Scanning frames", disable=self.logger.quiet)):
                n_problems = self.engine.do_action(frame_num, frame)
                self.logger.debug(f"Frame {frame_num + 1}: {n_problems} problems", indent=2)
        except OSError as e:
            self.logger.error(f"Error writing trajectory: {e}")
            return 1
        finally:
            if writer is not None:
                writer.end()

        if config.mode == MODE_RANDOM and self.engine.aborted_frames:
            self.logger.warning(f"{self.engine.aborted_frames} of {len(frames)} frames stopped at the rotation limit")

        self.logger.section("Statistics")
        values = self.engine.number_of_problems.values()
        self.logger.info(f"Frames scanned: {len(values)}")
        if len(values):
            self.logger.info(f"Frames with problems: {int((values > 0).sum())}")
            self.logger.info(f"Mean problems per frame: {values.mean():.2f}")

        if config.out:
            data_file = DataFile(config.out, self.logger)
            data_file.add_set(self.engine.number_of_problems)
            if not data_file.write():
                return 1
        return 0


def main_cli() -> int:
    """
    Main CLI entry point.

    Returns:
        int: Exit code
    """
    cli = ScanCLI()
    return cli.run(sys.argv[1:])
