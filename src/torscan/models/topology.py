#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Topology Data Model

Defines the Topology class for storing molecule topology information: atoms,
residue atom ranges and the bond graph.
"""

from typing import List, Optional
import torch
from .atom import Atom
from .residue import Residue
from .coordinate import Coordinate
from ..utils.distance_utils import pairwise_distance2


# Covalent radii in Angstrom used for bond perception
COVALENT_RADII = {
    "H": 0.31, "D": 0.31, "C": 0.76, "N": 0.71, "O": 0.66, "S": 1.05,
    "P": 1.07, "SE": 1.20, "F": 0.57, "CL": 1.02, "BR": 1.20, "I": 1.39
}
DEFAULT_COVALENT_RADIUS = 0.77
BOND_TOLERANCE = 0.4


class Topology:
    """
    Container class for molecule topology information.

    Attributes:
        atoms (List[Atom]): List of Atom objects, in file order
        residues (List[Residue]): Residues in definition order; each covers a contiguous atom range
        bonds (List[List[int]]): Bond adjacency list, one entry per atom
        other_records (List[str]): Non-atom records kept from the input file
        errors (List[str]): List of error messages
        warnings (List[str]): List of warning messages
    """
    def __init__(self):
        self.atoms: List[Atom] = []
        self.residues: List[Residue] = []
        self.bonds: List[List[int]] = []
        self.other_records: List[str] = []
        self.errors: List[str] = []
        self.warnings: List[str] = []
        self._atom_residue: List[int] = []

    def add_atom(self, atom: Atom) -> int:
        """
        Add an atom to the topology.

        Args:
            atom (Atom): Atom object to add

        Returns:
            int: Index of the new atom
        """
        self.atoms.append(atom)
        self.bonds.append([])
        return len(self.atoms) - 1

    def add_bond(self, atom1: int, atom2: int) -> bool:
        """
        Add a bond between two atoms. Duplicate bonds and self bonds are ignored.

        Args:
            atom1 (int): Index of first atom
            atom2 (int): Index of second atom

        Returns:
            bool: True if a new bond was added
        """
        natom = len(self.atoms)
        if not (0 <= atom1 < natom and 0 <= atom2 < natom):
            raise IndexError(f"Bond {atom1}-{atom2} refers to an atom outside the topology ({natom} atoms)")
        if atom1 == atom2 or atom2 in self.bonds[atom1]:
            return False
        self.bonds[atom1].append(atom2)
        self.bonds[atom2].append(atom1)
        return True

    def add_other_record(self, record: str) -> None:
        self.other_records.append(record)

    def add_error(self, error: str) -> None:
        self.errors.append(error)

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    def get_atom_count(self) -> int:
        """
        Get the total number of atoms in the topology.

        Returns:
            int: Total number of atoms
        """
        return len(self.atoms)

    def get_residue_count(self) -> int:
        return len(self.residues)

    def bond_count(self) -> int:
        return sum(len(partners) for partners in self.bonds) // 2

    def bonded_atoms(self, atom: int) -> List[int]:
        """
        Get the indices of atoms bonded to an atom.

        Args:
            atom (int): Atom index

        Returns:
            List[int]: Bonded atom indices in the order the bonds were added
        """
        return self.bonds[atom]

    def atom_name(self, atom: int) -> str:
        return self.atoms[atom].atom_name

    def residue_of(self, atom: int) -> int:
        """
        Get the index of the residue containing an atom.

        Args:
            atom (int): Atom index

        Returns:
            int: Residue index (0-based position in ``residues``)
        """
        return self._atom_residue[atom]

    def residue_range(self, residue: int) -> range:
        """
        Get the atom index range of a residue.

        Args:
            residue (int): Residue index

        Returns:
            range: Half-open range of atom indices
        """
        res = self.residues[residue]
        return range(res.start, res.stop)

    def truncated_atom_name(self, atom: int) -> str:
        """Short "RES_NUM@ATOM" label used in log messages."""
        a = self.atoms[atom]
        return f"{a.res_name}_{self.residue_of(atom) + 1}@{a.atom_name}"

    def build_hierarchy(self) -> None:
        """
        Build residues from the atom list.

        A new residue starts whenever the (chain, residue number, insertion code)
        key changes from the previous atom, so residues are always contiguous
        atom ranges in file order.
        """
        self.residues.clear()
        self._atom_residue = []

        previous_key = None
        for i, atom in enumerate(self.atoms):
            key = atom.residue_key()
            if key != previous_key:
                if self.residues:
                    self.residues[-1].stop = i
                self.residues.append(Residue(atom.res_name, atom.res_seq, atom.chain_id, atom.i_code, start=i, stop=i))
                previous_key = key
            self._atom_residue.append(len(self.residues) - 1)
        if self.residues:
            self.residues[-1].stop = len(self.atoms)

    def determine_bonds(self, coordinate: Coordinate) -> int:
        """
        Perceive covalent bonds from one frame of coordinates.

        Two atoms are bonded when their distance is below the sum of their
        covalent radii plus a tolerance. Only atoms in the same residue or in
        consecutive residues are compared.

        Args:
            coordinate (Coordinate): Frame to measure distances in

        Returns:
            int: Number of bonds added
        """
        if coordinate.get_point_count() != len(self.atoms):
            raise ValueError(f"Frame has {coordinate.get_point_count()} atoms, topology has {len(self.atoms)}")
        if not self.residues:
            self.build_hierarchy()

        radii = torch.tensor([COVALENT_RADII.get(atom.element.upper(), DEFAULT_COVALENT_RADIUS) for atom in self.atoms],
                             dtype=coordinate.coordinates.dtype)
        coords = coordinate.coordinates
        added = 0
        for res_index, res in enumerate(self.residues):
            # Compare this residue with itself and with the next residue
            stop2 = self.residues[res_index + 1].stop if res_index + 1 < len(self.residues) else res.stop
            block1 = slice(res.start, res.stop)
            block2 = slice(res.start, stop2)
            d2 = pairwise_distance2(coords[block1], coords[block2])
            limit = (radii[block1].unsqueeze(1) + radii[block2].unsqueeze(0) + BOND_TOLERANCE) ** 2
            for i, j in torch.nonzero(d2 < limit, as_tuple=False).tolist():
                atom1 = res.start + i
                atom2 = res.start + j
                if atom2 > atom1 and self.add_bond(atom1, atom2):
                    added += 1
        return added

    def find_atom(self, residue: int, atom_name: str) -> Optional[int]:
        """
        Find an atom by name within a residue.

        Args:
            residue (int): Residue index
            atom_name (str): Atom name

        Returns:
            Optional[int]: Atom index if found, None otherwise
        """
        for i in self.residue_range(residue):
            if self.atoms[i].atom_name == atom_name:
                return i
        return None

    def to_pdb_lines(self, coordinate: Coordinate) -> List[str]:
        """
        Convert the topology to PDB ATOM/HETATM/TER lines using provided coordinates.

        Args:
            coordinate (Coordinate): Frame to write

        Returns:
            List[str]: List of PDB format lines (no MODEL/END records)
        """
        pdb_lines = []
        serial = 1
        for i, atom in enumerate(self.atoms):
            x, y, z = coordinate.get_coordinates_by_index(i)
            pdb_lines.append(atom.to_pdb_line(x, y, z, serial))
            serial += 1
            # TER after the last atom of each chain
            is_last = i + 1 == len(self.atoms)
            if is_last or self.atoms[i + 1].chain_id != atom.chain_id:
                pdb_lines.append(f"TER   {serial:5d}      {atom.res_name:>3} {atom.chain_id[:1]:1}{atom.res_seq:4d}")
                serial += 1
        return pdb_lines

    def __repr__(self) -> str:
        """String representation of the topology"""
        return f"Topology(atoms={len(self.atoms)}, residues={len(self.residues)}, bonds={self.bond_count()})"
