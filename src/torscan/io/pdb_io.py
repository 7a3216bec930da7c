#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
PDB IO Module

Reads multi-model PDB files into a Topology and a list of coordinate frames,
and writes frames back out.
"""

from typing import Dict, List, Optional, Tuple

from ..models.atom import Atom
from ..models.coordinate import Coordinate
from ..models.topology import Topology
from ..utils.logger import Logger


class PDBIO:
    """
    PDB file IO handler for reading and writing PDB format files.

    Atoms are taken from the first model; every model contributes one
    coordinate frame and must list the same number of atoms. Bonds come from
    CONECT records when present and are perceived from the first frame
    otherwise.

    Attributes:
        logger (Logger): Logger instance for debug logging
    """
    def __init__(self, logger: Optional[Logger] = None):
        self.logger = logger or Logger()

    def parse_file(self, file_path: str) -> Tuple[Topology, List[Coordinate]]:
        """
        Parse a PDB file.

        Args:
            file_path (str): Path to PDB file

        Returns:
            Tuple[Topology, List[Coordinate]]: Topology and one frame per model.
            On read failure the topology is empty and carries the error.
        """
        topology = Topology()
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                lines = f.readlines()
            self.logger.debug(f"Successfully read {len(lines)} lines from {file_path}")
        except FileNotFoundError:
            topology.add_error(f"Error: File '{file_path}' not found")
            self.logger.error(f"File not found: {file_path}")
            return topology, []
        except PermissionError:
            topology.add_error(f"Error: Permission denied when reading file '{file_path}'")
            self.logger.error(f"Permission denied for file: {file_path}")
            return topology, []
        except OSError as e:
            topology.add_error(f"Error: An error occurred while reading the file - {str(e)}")
            self.logger.error(f"Error reading file {file_path}: {str(e)}")
            return topology, []

        return self.parse_lines(lines, topology)

    def parse_lines(self, lines: List[str], topology: Optional[Topology] = None) -> Tuple[Topology, List[Coordinate]]:
        """
        Parse PDB records.

        Args:
            lines (List[str]): PDB lines
            topology (Optional[Topology]): Topology to fill; a new one if None

        Returns:
            Tuple[Topology, List[Coordinate]]: Topology and frames
        """
        topology = topology if topology is not None else Topology()
        frames: List[Coordinate] = []
        points: List[Tuple[float, float, float]] = []
        serial_to_index: Dict[int, int] = {}
        conect: List[Tuple[int, List[int]]] = []
        first_model = True

        def close_model() -> None:
            nonlocal points, first_model
            if not points:
                return
            if not first_model and len(points) != topology.get_atom_count():
                msg = (f"Model {len(frames) + 1} has {len(points)} atoms, "
                       f"expected {topology.get_atom_count()}; model skipped")
                topology.add_warning(msg)
                self.logger.warning(msg)
            else:
                frames.append(Coordinate.from_points(points))
            points = []
            first_model = False

        for line_num, line in enumerate(lines, start=1):
            line = line.rstrip('\n')
            if not line:
                continue
            record = line[0:6].strip()
            if record in ('ATOM', 'HETATM'):
                parsed = self._parse_atom_line(line, line_num, topology)
                if parsed is None:
                    continue
                atom, xyz = parsed
                if first_model:
                    serial_to_index[atom.atom_serial] = topology.add_atom(atom)
                points.append(xyz)
            elif record == 'ENDMDL':
                close_model()
            elif record == 'CONECT':
                self._parse_conect_line(line, line_num, topology, conect)
            elif record in ('MODEL', 'END', 'TER'):
                continue
            elif first_model:
                topology.add_other_record(line)
        close_model()

        topology.build_hierarchy()

        for serial, partners in conect:
            for partner in partners:
                if serial not in serial_to_index or partner not in serial_to_index:
                    topology.add_warning(f"CONECT {serial}-{partner} refers to an unknown atom")
                    continue
                topology.add_bond(serial_to_index[serial], serial_to_index[partner])
        if conect:
            self.logger.debug(f"{topology.bond_count()} bonds from CONECT records")
        elif frames:
            nbonds = topology.determine_bonds(frames[0])
            self.logger.debug(f"Determined {nbonds} bonds from distances")

        self.logger.info(f"Parsing complete. {topology.get_atom_count()} atoms, {topology.get_residue_count()} residues, "
                         f"{len(frames)} frames. Errors: {len(topology.errors)}, Warnings: {len(topology.warnings)}")
        return topology, frames

    def _parse_atom_line(self, line: str, line_num: int, topology: Topology) -> Optional[Tuple[Atom, Tuple[float, float, float]]]:
        """
        Parse a single ATOM/HETATM line.

        Args:
            line (str): Atom record line
            line_num (int): Line number in file
            topology (Topology): Topology collecting parse errors

        Returns:
            Optional[Tuple[Atom, Tuple[float, float, float]]]: Atom and position, None if skipped or invalid
        """
        try:
            record_type = line[0:6].strip()
            atom_serial = int(line[6:11].strip())
            atom_name = line[12:16].strip()
            alt_loc = line[16:17].strip() or ' '
            res_name = line[17:20].strip()
            chain_id = line[21:22].strip() or ' '
            res_seq = int(line[22:26].strip())
            i_code = line[26:27].strip() or ' '
            x = float(line[30:38].strip())
            y = float(line[38:46].strip())
            z = float(line[46:54].strip())
            occupancy = float(line[54:60].strip() or 1.0)
            b_factor = float(line[60:66].strip() or 0.0)
            element = line[76:78].strip()
            charge = line[78:80].strip()
        except ValueError as e:
            topology.add_error(f"Line {line_num}: Data type conversion error - {str(e)}")
            return None

        atom = Atom(record_type, atom_serial, atom_name, alt_loc, res_name,
                    chain_id, res_seq, i_code, occupancy, b_factor, element, charge)
        return atom, (x, y, z)

    @staticmethod
    def _parse_conect_line(line: str, line_num: int, topology: Topology,
                           conect: List[Tuple[int, List[int]]]) -> None:
        fields = [line[i:i + 5].strip() for i in range(6, min(len(line), 31), 5)]
        try:
            serials = [int(f) for f in fields if f]
        except ValueError:
            topology.add_error(f"Line {line_num}: Malformed CONECT record")
            return
        if len(serials) > 1:
            conect.append((serials[0], serials[1:]))

    def write_file(self, topology: Topology, frames: List[Coordinate], output_path: str) -> bool:
        """
        Write frames to a PDB file, one MODEL per frame.

        Args:
            topology (Topology): Topology to write
            frames (List[Coordinate]): Frames to write
            output_path (str): Path to output PDB file

        Returns:
            bool: True if write was successful, False otherwise
        """
        self.logger.debug(f"Starting to write PDB file: {output_path}")
        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(self.write_string(topology, frames))
        except OSError as e:
            self.logger.error(f"Error writing PDB file {output_path}: {str(e)}")
            return False
        self.logger.debug(f"Successfully wrote PDB file: {output_path}")
        return True

    def write_string(self, topology: Topology, frames: List[Coordinate]) -> str:
        """
        Format frames as a PDB string.

        Args:
            topology (Topology): Topology to write
            frames (List[Coordinate]): Frames to write

        Returns:
            str: PDB formatted string
        """
        pdb_lines = []
        for record in topology.other_records:
            if not record.startswith(('END', 'CONECT', 'MASTER')):
                pdb_lines.append(record)
        multi_model = len(frames) > 1
        for model, frame in enumerate(frames, start=1):
            if multi_model:
                pdb_lines.append(f"MODEL     {model:4d}")
            pdb_lines.extend(topology.to_pdb_lines(frame))
            if multi_model:
                pdb_lines.append("ENDMDL")
        pdb_lines.append("END")
        return "\n".join(pdb_lines) + "\n"
