#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Dihedral Identifier Module

Finds rotatable backbone dihedrals in an atom selection and, for each one,
the atoms that move when the bond is rotated.

Only backbone phi and psi are considered:
    phi: C-N-CA-C   rotation about N-CA
    psi: N-CA-C-N   rotation about CA-C
"""

from typing import Iterable, List, Optional, Sequence

from ..errors import ScanSetupError
from ..models.dihedral import Dihedral
from ..models.topology import Topology
from ..utils.logger import Logger


# Axis atom name -> name of the bonded partner defining the dihedral
BACKBONE_PARTNERS = {
    "N": "CA",
    "CA": "C",
}


def get_bonded_atom_index(topology: Topology, atom: int, name: str) -> int:
    """
    Find the first atom bonded to ``atom`` with the given name.

    Args:
        topology (Topology): Topology with bonds
        atom (int): Atom index
        name (str): Atom name to look for

    Returns:
        int: Index of the bonded atom, or -1 if there is none
    """
    for partner in topology.bonded_atoms(atom):
        if topology.atom_name(partner) == name:
            return partner
    return -1


def visit_atoms(topology: Topology, seeds: Iterable[int], visited: List[bool]) -> None:
    """
    Mark every atom reachable through bonds from the seed atoms.

    Uses an explicit stack so molecule size does not limit the traversal
    depth. Atoms already marked in ``visited`` are neither revisited nor
    crossed, which is how the fixed side of a bond is excluded.

    Args:
        topology (Topology): Topology with bonds
        seeds (Iterable[int]): Atoms to start from
        visited (List[bool]): Visited marker per atom; updated in place
    """
    stack = list(seeds)
    while stack:
        atom = stack.pop()
        if visited[atom]:
            continue
        visited[atom] = True
        for partner in topology.bonded_atoms(atom):
            if not visited[partner]:
                stack.append(partner)


def validate_bonds(topology: Topology, atoms: Iterable[int]) -> None:
    """
    Check that the bonds of the given atoms point inside the topology and are symmetric.

    Raises:
        ScanSetupError: If a malformed bond is found
    """
    natom = topology.get_atom_count()
    for atom in atoms:
        for partner in topology.bonded_atoms(atom):
            if not 0 <= partner < natom:
                raise ScanSetupError(f"Atom {atom + 1} is bonded to atom {partner + 1} which does not exist")
            if atom not in topology.bonded_atoms(partner):
                raise ScanSetupError(f"Bond {atom + 1}-{partner + 1} is only listed for one of its atoms")


def build_dihedral(topology: Topology, atom1: int, atom2: int, interval: float) -> Dihedral:
    """
    Build the descriptor for rotation about atom1 -> atom2.

    Args:
        topology (Topology): Topology with bonds and residues
        atom1 (int): Fixed axis atom
        atom2 (int): Moving axis atom
        interval (float): Interval-mode rotation step in degrees

    Returns:
        Dihedral: Descriptor with movable and check atoms
    """
    visited = [False] * topology.get_atom_count()
    visited[atom1] = True
    visit_atoms(topology, (a for a in topology.bonded_atoms(atom2) if a != atom1), visited)
    # atom2 moves with its side even when it has no other neighbour
    visited[atom2] = True
    visited[atom1] = False

    movable_mask = [i for i, moved in enumerate(visited) if moved]

    # Atoms of atom1's residue that rotation cannot move still need clash checks
    a1res = topology.residue_of(atom1)
    check_atoms = [i for i in topology.residue_range(a1res) if not visited[i]]
    check_atoms.append(atom2)

    return Dihedral(atom1, atom2, movable_mask, check_atoms, topology.residue_of(atom2), interval)


def identify_dihedrals(topology: Topology, atom_mask: Sequence[int], interval: float = 60.0,
                       logger: Optional[Logger] = None) -> List[Dihedral]:
    """
    Determine from selected atoms which backbone dihedrals will be rotated.

    An atom named N (phi) or CA (psi) defines a dihedral when its bonded
    partner (CA or C) is also selected. The result follows ascending atom
    order of the selection; backtracking relies on this order.

    Args:
        topology (Topology): Topology with bonds and residues
        atom_mask (Sequence[int]): Selected atom indices
        interval (float): Interval-mode rotation step in degrees
        logger (Optional[Logger]): Logger for debug listing

    Returns:
        List[Dihedral]: Dihedrals in selection order

    Raises:
        ScanSetupError: If the selection is empty or refers to missing atoms or bonds
    """
    natom = topology.get_atom_count()
    if not atom_mask:
        raise ScanSetupError("Mask has no atoms.")
    for atom in atom_mask:
        if not 0 <= atom < natom:
            raise ScanSetupError(f"Mask atom {atom + 1} is outside the topology ({natom} atoms)")
    if len(topology.bonds) != natom:
        raise ScanSetupError(f"Bond table covers {len(topology.bonds)} atoms, topology has {natom}")

    selected = sorted(set(atom_mask))
    validate_bonds(topology, selected)
    in_mask = set(selected)

    dihedrals: List[Dihedral] = []
    for atom in selected:
        partner_name = BACKBONE_PARTNERS.get(topology.atom_name(atom))
        if partner_name is None:
            continue
        atom2 = get_bonded_atom_index(topology, atom, partner_name)
        if atom2 == -1 or atom2 not in in_mask:
            continue
        dihedrals.append(build_dihedral(topology, atom, atom2, interval))

    if logger is not None:
        log_dihedrals(topology, dihedrals, logger)
    return dihedrals


def log_dihedrals(topology: Topology, dihedrals: List[Dihedral], logger: Logger) -> None:
    """List defined dihedrals (central two atoms) at increasing debug levels."""
    logger.debug("Dihedrals (central 2 atoms only):")
    for dih in dihedrals:
        res = topology.residues[dih.residue]
        logger.debug(f"{dih.atom1 + 1:8d}{topology.atom_name(dih.atom1):>4} {dih.atom2 + 1:8d}"
                     f"{topology.atom_name(dih.atom2):>4} {dih.residue + 1:8d}{res.res_name:>4}", indent=2)
        logger.debug("CheckAtoms= " + " ".join(str(a + 1) for a in dih.check_atoms), indent=4, level=2)
        logger.debug("Rmask: " + " ".join(str(a + 1) for a in dih.movable_mask), indent=4, level=3)
