#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Atom Data Model

Defines the Atom class holding the per-atom fields of a PDB ATOM/HETATM record.
"""


class Atom:
    """
    Atom data class for storing individual atom information.

    Attributes:
        record_type (str): Record type (ATOM or HETATM)
        atom_serial (int): Atom serial number as read from file
        atom_name (str): Atom name, stripped (e.g. "CA")
        alt_loc (str): Alternate location indicator
        res_name (str): Residue name
        chain_id (str): Chain identifier
        res_seq (int): Residue sequence number
        i_code (str): Insertion code
        occupancy (float): Occupancy
        b_factor (float): Temperature factor
        element (str): Element symbol
        charge (str): Charge
    """
    def __init__(self, record_type: str, atom_serial: int, atom_name: str, alt_loc: str,
                 res_name: str, chain_id: str, res_seq: int, i_code: str, occupancy: float = 1.0,
                 b_factor: float = 0.0, element: str = "", charge: str = ""):
        self.record_type = record_type
        self.atom_serial = atom_serial
        self.atom_name = atom_name
        self.alt_loc = alt_loc
        self.res_name = res_name
        self.chain_id = chain_id
        self.res_seq = res_seq
        self.i_code = i_code
        self.occupancy = occupancy
        self.b_factor = b_factor
        self.element = element or self.guess_element(atom_name)
        self.charge = charge

    @staticmethod
    def guess_element(atom_name: str) -> str:
        """
        Guess the element symbol from an atom name when the element column is empty.

        Protein atom names start with the element letter after any leading digits
        (e.g. "1HB" -> "H", "CA" -> "C").

        Args:
            atom_name (str): Atom name

        Returns:
            str: Element symbol, or an empty string if none can be derived
        """
        letters = atom_name.lstrip("0123456789")
        return letters[:1].upper() if letters else ""

    def residue_key(self) -> tuple:
        """Key identifying the residue this atom belongs to."""
        return (self.chain_id, self.res_seq, self.i_code)

    def to_pdb_line(self, x: float, y: float, z: float, atom_serial: int) -> str:
        """
        Convert the atom to a PDB format line.

        Args:
            x (float): X coordinate
            y (float): Y coordinate
            z (float): Z coordinate
            atom_serial (int): Atom serial number to write

        Returns:
            str: 80 column PDB line
        """
        # Names shorter than four characters start in column 14
        if len(self.atom_name) < 4:
            atom_name = f" {self.atom_name:<3}"
        else:
            atom_name = self.atom_name[:4]

        line = (f"{self.record_type:<6}{atom_serial % 100000:5d} {atom_name}{self.alt_loc[:1]:1}"
                f"{self.res_name[:3]:>3} {self.chain_id[:1]:1}{self.res_seq % 10000:4d}{self.i_code[:1]:1}   "
                f"{x:8.3f}{y:8.3f}{z:8.3f}{self.occupancy:6.2f}{self.b_factor:6.2f}          "
                f"{self.element[:2]:>2}{self.charge[:2]:2}")
        return line[:80].ljust(80)

    def __repr__(self) -> str:
        """String representation of the atom"""
        return f"Atom({self.record_type} {self.atom_serial} {self.atom_name} {self.res_name} {self.chain_id}{self.res_seq})"
