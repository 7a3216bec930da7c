#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Atom Mask Module

Parses a small subset of Amber-style atom mask expressions and selects atoms
from a topology:

    *               all atoms
    :1-5,8          residues 1 to 5 and 8 (1-based residue positions)
    @N,CA,C         atoms named N, CA or C
    :2-10@N,CA,C    both conditions
"""

from typing import List, Optional, Set
from ..errors import ScanSetupError


class AtomMask:
    """
    Parsed atom mask expression.

    Attributes:
        expression (str): Original mask string
        residues (Optional[Set[int]]): Selected 1-based residue positions, None for all
        atom_names (Optional[Set[str]]): Selected atom names, None for all
    """
    def __init__(self, expression: str, residues: Optional[Set[int]] = None,
                 atom_names: Optional[Set[str]] = None):
        self.expression = expression
        self.residues = residues
        self.atom_names = atom_names

    @classmethod
    def parse(cls, expression: str) -> 'AtomMask':
        """
        Parse a mask expression.

        Args:
            expression (str): Mask string

        Returns:
            AtomMask: Parsed mask

        Raises:
            ScanSetupError: If the expression cannot be parsed
        """
        text = (expression or "").strip()
        if not text:
            raise ScanSetupError("Empty atom mask")
        if text == "*":
            return cls(text)

        residues = None
        atom_names = None
        residue_part = ""
        atom_part = ""
        if text.startswith(":"):
            residue_part, _, atom_part = text[1:].partition("@")
            if "@" in text and not atom_part:
                raise ScanSetupError(f"Atom mask '{expression}': missing atom names after '@'")
        elif text.startswith("@"):
            atom_part = text[1:]
            if not atom_part:
                raise ScanSetupError(f"Atom mask '{expression}': missing atom names after '@'")
        else:
            raise ScanSetupError(f"Atom mask '{expression}' must start with ':', '@' or be '*'")

        if residue_part and residue_part != "*":
            residues = cls._parse_residue_ranges(residue_part, expression)
        if atom_part and atom_part != "*":
            atom_names = {name.strip() for name in atom_part.split(",") if name.strip()}
            if not atom_names:
                raise ScanSetupError(f"Atom mask '{expression}': no atom names")
        return cls(text, residues, atom_names)

    @staticmethod
    def _parse_residue_ranges(text: str, expression: str) -> Set[int]:
        residues: Set[int] = set()
        for token in text.split(","):
            token = token.strip()
            try:
                if "-" in token:
                    first, last = (int(v) for v in token.split("-", 1))
                else:
                    first = last = int(token)
            except ValueError:
                raise ScanSetupError(f"Atom mask '{expression}': bad residue range '{token}'")
            if first < 1 or last < first:
                raise ScanSetupError(f"Atom mask '{expression}': bad residue range '{token}'")
            residues.update(range(first, last + 1))
        return residues

    def select(self, topology) -> List[int]:
        """
        Select atoms of a topology.

        Args:
            topology (Topology): Topology to select from

        Returns:
            List[int]: Selected atom indices in ascending order
        """
        selected = []
        for index, atom in enumerate(topology.atoms):
            if self.atom_names is not None and atom.atom_name not in self.atom_names:
                continue
            if self.residues is not None and topology.residue_of(index) + 1 not in self.residues:
                continue
            selected.append(index)
        return selected

    def __repr__(self) -> str:
        return f"AtomMask('{self.expression}')"
