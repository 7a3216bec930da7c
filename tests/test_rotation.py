import math
import pytest
import torch

from torscan.core.dihedral_identifier import identify_dihedrals
from torscan.core.rotation import BondRotator, rotate_around_bond
from torscan.models.coordinate import Coordinate
from torscan.utils.coordinate_utils import create_axis_rotation_matrix

from conftest import atom_index, distance, torsion


def psi_of_last_residue(topology):
    ca, c = atom_index(2, "CA"), atom_index(2, "C")
    (dih,) = identify_dihedrals(topology, [ca, c])
    return dih


class TestRotationMatrix:
    """Tests for the axis rotation matrix."""

    def test_matrix_is_orthonormal(self):
        axis = torch.tensor([1.0, 2.0, -0.5], dtype=torch.float64)
        R = create_axis_rotation_matrix(axis, math.radians(37.0))
        assert torch.allclose(R @ R.T, torch.eye(3, dtype=torch.float64), atol=1e-12)
        assert torch.det(R).item() == pytest.approx(1.0)

    def test_axis_is_invariant(self):
        axis = torch.tensor([0.0, 0.0, 2.0], dtype=torch.float64)
        R = create_axis_rotation_matrix(axis, math.radians(90.0))
        assert torch.allclose(R @ axis, axis)
        # Right-handed: x goes to y
        x = torch.tensor([1.0, 0.0, 0.0], dtype=torch.float64)
        assert torch.allclose(R @ x, torch.tensor([0.0, 1.0, 0.0], dtype=torch.float64), atol=1e-12)

    def test_zero_axis_raises(self):
        with pytest.raises(ValueError):
            create_axis_rotation_matrix(torch.zeros(3, dtype=torch.float64), 1.0)


class TestRotateAroundBond:
    """Tests for rotating atoms about a bond."""

    def test_forward_and_back_restores_frame(self, peptide):
        topology, frame = peptide
        dih = psi_of_last_residue(topology)
        original = frame.copy()
        rotate_around_bond(frame, dih.atom1, dih.atom2, 73.0, dih.movable_mask)
        assert not torch.allclose(frame.coordinates, original.coordinates)
        rotate_around_bond(frame, dih.atom1, dih.atom2, -73.0, dih.movable_mask)
        assert torch.allclose(frame.coordinates, original.coordinates, atol=1e-9)

    def test_full_turn_is_identity(self, peptide):
        topology, frame = peptide
        dih = psi_of_last_residue(topology)
        original = frame.copy()
        rotate_around_bond(frame, dih.atom1, dih.atom2, 360.0, dih.movable_mask)
        assert torch.allclose(frame.coordinates, original.coordinates, atol=1e-9)

    def test_only_masked_atoms_move(self, peptide):
        topology, frame = peptide
        (phi2,) = identify_dihedrals(topology, [atom_index(1, "N"), atom_index(1, "CA")])
        original = frame.copy()
        rotate_around_bond(frame, phi2.atom1, phi2.atom2, 120.0, phi2.movable_mask)
        moved = set(phi2.movable_mask)
        for i in range(frame.get_point_count()):
            if i not in moved:
                assert torch.equal(frame.coordinates[i], original.coordinates[i])

    def test_bond_lengths_preserved(self, peptide):
        topology, frame = peptide
        (phi2,) = identify_dihedrals(topology, [atom_index(1, "N"), atom_index(1, "CA")])
        bonds = [(a, b) for a, partners in enumerate(topology.bonds) for b in partners if b > a]
        before = [distance(frame, a, b) for a, b in bonds]
        rotate_around_bond(frame, phi2.atom1, phi2.atom2, 211.0, phi2.movable_mask)
        after = [distance(frame, a, b) for a, b in bonds]
        assert after == pytest.approx(before, abs=1e-9)

    @pytest.mark.parametrize("angle,expected_cos", [(90.0, 0.0), (60.0, 0.5), (180.0, -1.0)])
    def test_torsion_changes_by_angle(self, peptide, angle, expected_cos):
        topology, frame = peptide
        dih = psi_of_last_residue(topology)
        n, ca, c, o = (atom_index(2, name) for name in ("N", "CA", "C", "O"))
        before = torsion(frame, n, ca, c, o)
        rotate_around_bond(frame, dih.atom1, dih.atom2, angle, dih.movable_mask)
        after = torsion(frame, n, ca, c, o)
        assert math.cos(math.radians(after - before)) == pytest.approx(expected_cos, abs=1e-9)

    def test_empty_mask_is_noop(self, peptide):
        topology, frame = peptide
        original = frame.copy()
        rotate_around_bond(frame, 1, 2, 45.0, [])
        assert torch.equal(frame.coordinates, original.coordinates)

    def test_coincident_axis_atoms_raise(self):
        frame = Coordinate.from_points([(0.0, 0.0, 0.0), (0.0, 0.0, 0.0), (1.0, 0.0, 0.0)])
        with pytest.raises(ValueError):
            rotate_around_bond(frame, 0, 1, 30.0, [2])


class TestBondRotator:
    """Tests for the reusable rotator."""

    def test_repeated_application_accumulates(self, peptide):
        topology, frame = peptide
        dih = psi_of_last_residue(topology)
        expected = frame.copy()
        rotate_around_bond(expected, dih.atom1, dih.atom2, 30.0, dih.movable_mask)

        rotator = BondRotator(frame, dih.atom1, dih.atom2, 10.0)
        for _ in range(3):
            rotator.apply(frame, dih.mask_tensor)
        assert torch.allclose(frame.coordinates, expected.coordinates, atol=1e-9)

    def test_set_angle(self, peptide):
        topology, frame = peptide
        dih = psi_of_last_residue(topology)
        original = frame.copy()
        rotator = BondRotator(frame, dih.atom1, dih.atom2, 270.0)
        rotator.apply(frame, dih.mask_tensor)
        rotator.set_angle(frame, 90.0)
        assert rotator.angle_degrees == 90.0
        rotator.apply(frame, dih.mask_tensor)
        assert torch.allclose(frame.coordinates, original.coordinates, atol=1e-9)
