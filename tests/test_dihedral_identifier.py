import pytest

from torscan.core.dihedral_identifier import identify_dihedrals, visit_atoms
from torscan.errors import ScanSetupError

from conftest import atom_index


class TestIdentifyDihedrals:
    """Tests for backbone dihedral identification."""

    def test_all_backbone_dihedrals_in_order(self, peptide):
        topology, _ = peptide
        dihedrals = identify_dihedrals(topology, list(range(topology.get_atom_count())))
        assert [(d.atom1, d.atom2) for d in dihedrals] == [
            (0, 1), (1, 2),
            (5, 6), (6, 7),
            (10, 11), (11, 12),
        ]
        assert [d.residue for d in dihedrals] == [0, 0, 1, 1, 2, 2]

    def test_axis_atoms_and_masks(self, peptide):
        topology, _ = peptide
        for dih in identify_dihedrals(topology, list(range(topology.get_atom_count()))):
            assert dih.atom1 not in dih.movable_mask
            assert dih.atom2 in dih.movable_mask
            assert dih.atom2 in dih.check_atoms
            assert set(dih.movable_mask) & set(dih.check_atoms) == {dih.atom2}

    def test_phi_moves_everything_past_ca(self, peptide):
        topology, _ = peptide
        phi1 = identify_dihedrals(topology, [0, 1])[0]
        assert phi1.movable_mask == list(range(1, 15))
        assert sorted(phi1.check_atoms) == [0, 1]

    def test_psi_keeps_side_chain_fixed(self, peptide):
        topology, _ = peptide
        psi1 = identify_dihedrals(topology, [1, 2])[0]
        cb = atom_index(0, "CB")
        assert cb not in psi1.movable_mask
        assert psi1.movable_mask == [2, 3] + list(range(5, 15))
        assert sorted(psi1.check_atoms) == [0, 1, 2, 4]

    def test_last_psi_moves_carbonyl_only(self, peptide):
        topology, _ = peptide
        psi3 = identify_dihedrals(topology, [atom_index(2, "CA"), atom_index(2, "C")])[0]
        assert psi3.movable_mask == [atom_index(2, "C"), atom_index(2, "O")]

    def test_partner_outside_mask_is_skipped(self, peptide):
        topology, _ = peptide
        n_atoms = [atom_index(r, "N") for r in range(3)]
        assert identify_dihedrals(topology, n_atoms) == []
        dihedrals = identify_dihedrals(topology, n_atoms + [atom_index(1, "CA")])
        assert [(d.atom1, d.atom2) for d in dihedrals] == [(5, 6)]

    def test_interval_is_passed_on(self, peptide):
        topology, _ = peptide
        dih = identify_dihedrals(topology, [0, 1], interval=90.0)[0]
        assert dih.interval == 90.0
        assert dih.max_steps == 4
        assert dih.current_value == 0.0

    def test_empty_mask_raises(self, peptide):
        topology, _ = peptide
        with pytest.raises(ScanSetupError, match="no atoms"):
            identify_dihedrals(topology, [])

    def test_out_of_range_atom_raises(self, peptide):
        topology, _ = peptide
        with pytest.raises(ScanSetupError):
            identify_dihedrals(topology, [0, 99])

    def test_one_sided_bond_raises(self, peptide):
        topology, _ = peptide
        topology.bonds[0].append(7)
        with pytest.raises(ScanSetupError):
            identify_dihedrals(topology, [0, 1])


def test_visit_atoms_stops_at_visited(peptide):
    topology, _ = peptide
    visited = [False] * topology.get_atom_count()
    visited[atom_index(1, "C")] = True
    visit_atoms(topology, [atom_index(1, "CA")], visited)
    reached = [i for i, v in enumerate(visited) if v]
    # Residue 1 minus its carbonyl O, plus all of residue 0 through the peptide bond
    assert reached == [0, 1, 2, 3, 4, 5, 6, 7, 9]
