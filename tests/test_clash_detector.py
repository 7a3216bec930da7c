import math
import pytest

from torscan.core.clash_detector import ClashDetector, ClashStatus, build_residue_index
from torscan.core.dihedral_identifier import identify_dihedrals
from torscan.core.structure_check import StructureChecker

from conftest import atom_index


def place_near(frame, atom, target, offset):
    x, y, z = frame.get_coordinates_by_index(target)
    frame.set_coordinates_by_index(atom, (x + offset, y, z))


@pytest.fixture
def backbone(peptide):
    topology, frame = peptide
    phi1, psi1, phi2, psi2, phi3, psi3 = identify_dihedrals(topology, list(range(topology.get_atom_count())))
    return topology, frame, {"phi1": phi1, "psi1": psi1, "phi2": phi2, "psi2": psi2}


def detector(topology, cutoff=0.8, rescutoff=10.0):
    return ClashDetector(build_residue_index(topology), cutoff * cutoff, rescutoff * rescutoff)


class TestClashDetector:
    """Tests for residue clash checks."""

    def test_clean_peptide_has_no_clash(self, backbone):
        topology, frame, dih = backbone
        result = detector(topology).check_residue(frame, dih["phi1"], next_residue=1)
        assert result.status is ClashStatus.NO_CLASH
        assert result.distance2 == 0.0

    def test_residue_index(self, peptide):
        topology, _ = peptide
        index = build_residue_index(topology)
        assert [(r.start, r.stop, r.check_atom) for r in index] == [(0, 5, 0), (5, 10, 5), (10, 15, 10)]

    def test_movable_atom_clash_is_resolvable(self, backbone):
        topology, frame, dih = backbone
        # CB of residue 1 onto the carbonyl O of residue 2; phi1 moves CB
        place_near(frame, atom_index(0, "CB"), atom_index(1, "O"), math.sqrt(0.5))
        result = detector(topology).check_residue(frame, dih["phi1"], next_residue=1)
        assert result.status is ClashStatus.CLASH
        assert result.distance2 == pytest.approx(0.5)
        assert {result.atom1, result.atom2} == {atom_index(0, "CB"), atom_index(1, "O")}

    def test_pair_beyond_cutoff_is_ignored(self, backbone):
        topology, frame, dih = backbone
        place_near(frame, atom_index(0, "CB"), atom_index(1, "O"), math.sqrt(0.5))
        result = detector(topology, cutoff=math.sqrt(0.3)).check_residue(frame, dih["phi1"], next_residue=1)
        assert result.status is ClashStatus.NO_CLASH

    def test_check_atom_clash_is_unresolvable(self, backbone):
        topology, frame, dih = backbone
        # psi1 cannot move CB of residue 1
        place_near(frame, atom_index(0, "CB"), atom_index(1, "O"), 0.3)
        result = detector(topology).check_residue(frame, dih["psi1"], next_residue=1)
        assert result.status is ClashStatus.UNRESOLVABLE
        assert result.distance2 == pytest.approx(0.09)

    def test_residues_past_next_residue_are_ignored(self, backbone):
        topology, frame, dih = backbone
        place_near(frame, atom_index(0, "CB"), atom_index(1, "O"), 0.3)
        result = detector(topology).check_residue(frame, dih["psi1"], next_residue=0)
        assert result.status is ClashStatus.NO_CLASH

    def test_distant_residues_skipped_by_coarse_test(self, backbone):
        topology, frame, dih = backbone
        place_near(frame, atom_index(0, "CB"), atom_index(1, "O"), 0.3)
        # N-N distance of residues 1 and 2 is about 3.97 A
        result = detector(topology, rescutoff=1.0).check_residue(frame, dih["psi1"], next_residue=1)
        assert result.status is ClashStatus.NO_CLASH

    def test_self_clash_within_residue(self, backbone):
        topology, frame, dih = backbone
        place_near(frame, atom_index(0, "CB"), atom_index(0, "CA"), 0.3)
        result = detector(topology).check_residue(frame, dih["psi1"], next_residue=-1)
        assert result.status is ClashStatus.CLASH
        assert result.distance2 == pytest.approx(0.09)

    def test_closest_pair_is_reported(self, backbone):
        topology, frame, dih = backbone
        place_near(frame, atom_index(0, "CB"), atom_index(1, "O"), 0.5)
        place_near(frame, atom_index(0, "O"), atom_index(1, "CB"), 0.2)
        result = detector(topology).check_residue(frame, dih["phi1"], next_residue=1)
        assert result.status is ClashStatus.CLASH
        assert result.distance2 == pytest.approx(0.04)
        assert {result.atom1, result.atom2} == {atom_index(0, "O"), atom_index(1, "CB")}

    def test_clash_seen_from_both_residues(self, backbone):
        topology, frame, dih = backbone
        # CB of residue 1 onto the carbonyl O of residue 2; both are movable for phi1 and phi2
        place_near(frame, atom_index(0, "CB"), atom_index(1, "O"), math.sqrt(0.5))
        check = detector(topology)
        from_first = check.check_residue(frame, dih["phi1"], next_residue=1)
        from_second = check.check_residue(frame, dih["phi2"], next_residue=1)
        assert from_first.status is from_second.status is ClashStatus.CLASH
        assert from_first.distance2 == pytest.approx(0.5)
        assert from_second.distance2 == pytest.approx(from_first.distance2)
        assert {from_first.atom1, from_first.atom2} == {from_second.atom1, from_second.atom2}

    def test_unresolvable_seen_from_both_residues(self, backbone):
        topology, frame, dih = backbone
        # Both CB atoms are check atoms of the psi dihedral of their own residue
        place_near(frame, atom_index(0, "CB"), atom_index(1, "CB"), 0.3)
        check = detector(topology)
        from_first = check.check_residue(frame, dih["psi1"], next_residue=1)
        from_second = check.check_residue(frame, dih["psi2"], next_residue=1)
        assert from_first.status is from_second.status is ClashStatus.UNRESOLVABLE
        assert from_first.distance2 == pytest.approx(0.09)
        assert from_second.distance2 == pytest.approx(from_first.distance2)


class TestStructureChecker:
    """Tests for the per-frame overlap count."""

    def test_clean_peptide(self, peptide):
        topology, frame = peptide
        checker = StructureChecker()
        checker.setup(topology)
        assert checker.check_frame(1, frame) == 0

    def test_bonded_pairs_excluded(self, peptide):
        topology, frame = peptide
        # Every bond is shorter than 2 A, every non-bonded pair is longer
        checker = StructureChecker(cutoff=2.0)
        checker.setup(topology)
        assert checker.check_frame(1, frame) == 0

    def test_overlap_counted(self, peptide):
        topology, frame = peptide
        place_near(frame, atom_index(0, "CB"), atom_index(1, "O"), 0.3)
        checker = StructureChecker()
        checker.setup(topology)
        assert checker.check_frame(1, frame) == 1

    def test_overlap_across_blocks(self, peptide):
        topology, frame = peptide
        place_near(frame, atom_index(0, "CB"), atom_index(1, "O"), 0.3)
        place_near(frame, atom_index(0, "O"), atom_index(2, "CB"), 0.4)
        for block_size in (1, 4, 7, 128):
            checker = StructureChecker(block_size=block_size)
            checker.setup(topology)
            assert checker.check_frame(1, frame) == 2

    def test_bonded_pairs_excluded_across_blocks(self, peptide):
        topology, frame = peptide
        checker = StructureChecker(cutoff=2.0, block_size=3)
        checker.setup(topology)
        assert checker.check_frame(1, frame) == 0

    def test_invalid_block_size(self):
        with pytest.raises(ValueError):
            StructureChecker(block_size=0)
